"""MCP 客户端示例：以 STDIO 方式本地拉起 MCP Server 并调用工具。

工作流程：
1. 构造 `StdioServerParameters`，使用当前 Python 解释器以模块方式启动 `slidev_mcp.mcp.server`；
2. 通过 `stdio_client` 建立与本地 MCP Server 的通信；
3. 初始化会话、列出工具、调用 `generate-presentation` 并打印返回内容。
"""

import asyncio
import os
import sys

import click
from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client

SERVER_MODULE = "slidev_mcp.mcp.server"


def build_server_params(env: dict | None = None) -> StdioServerParameters:
    """构造以当前解释器启动 MCP Server 的 STDIO 参数。"""
    # 使用相同的 Python 解释器，避免环境不一致问题
    server_env = dict(os.environ if env is None else env)
    server_env.setdefault("SLIDEV_MCP_TRANSPORT", "stdio")
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", SERVER_MODULE],
        env=server_env,
    )


async def run_client(topic: str, author: str, output_path: str, duration: int):
    """运行 MCP 客户端，调用 `generate-presentation` 工具并打印结果。"""
    async with stdio_client(build_server_params()) as (read, write):
        async with ClientSession(read, write) as session:
            # 初始化 MCP 会话（握手与能力协商）
            await session.initialize()

            tools = await session.list_tools()
            print(f"Available tools: {[tool.name for tool in tools.tools]}")

            print(f"Generating presentation for: {topic}")
            result = await session.call_tool(
                "generate-presentation",
                arguments={
                    "topic": topic,
                    "author": author,
                    "outputPath": output_path,
                    "duration": duration,
                },
            )

            print("Result:")
            print(result.content[0].text)


@click.command()
@click.argument("topic", default="The Future of Artificial Intelligence")
@click.option("--author", default="slidev-mcp")
@click.option("--output", "output_path", default="output/slides.md")
@click.option("--duration", default=30, type=int)
def main(topic, author, output_path, duration):
    asyncio.run(run_client(topic, author, output_path, duration))


if __name__ == "__main__":
    main()
