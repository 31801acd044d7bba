"""MCP Server 定义：将演示文稿生成能力以工具形式暴露给 MCP 客户端。

主要职责：
- 使用 FastMCP 创建 MCP 服务器实例，注册 7 个工具（项目创建、整份生成、单页生成、插页、对比页、图片页、代码块）；
- 工具参数名与客户端约定的 camelCase 名称一致，调用统一转交 `host.dispatch`；
- 参数错误、未知工具或执行失败时抛出 `ToolError`，由 FastMCP 标记为错误结果返回。

启动方式：
    slidev-mcp                      # 默认 STDIO
    slidev-mcp --transport sse --port 10100
"""

from typing import Any, Dict, List, Optional

import click
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from slidev_mcp.common.errors import SlidevMCPError
from slidev_mcp.common.catalog import ImageLayout
from slidev_mcp.common.utils import get_logger, get_server_config, set_log_level
from slidev_mcp.mcp.host import TOOLS, dispatch

logger = get_logger(__name__)

# 初始化 MCP Server，并声明服务名称
mcp = FastMCP("slidev-mcp")


def call_tool(name: str, arguments: Dict[str, Any]) -> str:
    """调用 Tool Host 并把结果转换为 MCP 文本；未提供的可选参数不会传入，以便使用默认值。"""
    payload = {key: value for key, value in arguments.items() if value is not None}
    try:
        result = dispatch(name, payload)
    except SlidevMCPError as e:
        logger.error(f"Error handling {name}: {e}")
        raise ToolError(f"Error: {e}") from e

    if result.is_error:
        raise ToolError(result.text)
    return result.text


@mcp.tool(name="create-slidev-project", description=TOOLS["create-slidev-project"].description)
def create_slidev_project(
    title: str,
    author: str,
    projectPath: str,
    theme: Optional[str] = None,
    language: Optional[str] = None,
    useTemplate: Optional[bool] = None,
    style: Optional[str] = None,
) -> str:
    """创建 Slidev 项目；未指定主题时根据标题与风格推荐。"""
    return call_tool("create-slidev-project", {
        "title": title,
        "author": author,
        "projectPath": projectPath,
        "theme": theme,
        "language": language,
        "useTemplate": useTemplate,
        "style": style,
    })


@mcp.tool(name="generate-slide-content", description=TOOLS["generate-slide-content"].description)
def generate_slide_content(
    topic: str,
    description: str,
    layout: Optional[str] = None,
    style: Optional[str] = None,
) -> str:
    return call_tool("generate-slide-content", {
        "topic": topic,
        "description": description,
        "layout": layout,
        "style": style,
    })


@mcp.tool(name="add-slide", description=TOOLS["add-slide"].description)
def add_slide(slidesPath: str, slideContent: str, position: Optional[int] = None) -> str:
    return call_tool("add-slide", {
        "slidesPath": slidesPath,
        "slideContent": slideContent,
        "position": position,
    })


@mcp.tool(name="generate-presentation", description=TOOLS["generate-presentation"].description)
def generate_presentation(
    topic: str,
    author: str,
    outputPath: str,
    duration: Optional[int] = None,
    theme: Optional[str] = None,
    style: Optional[str] = None,
) -> str:
    """生成整份演示文稿并写入 `outputPath`。"""
    return call_tool("generate-presentation", {
        "topic": topic,
        "author": author,
        "outputPath": outputPath,
        "duration": duration,
        "theme": theme,
        "style": style,
    })


@mcp.tool(name="create-comparison", description=TOOLS["create-comparison"].description)
def create_comparison(
    title: str,
    leftTitle: str,
    leftContent: List[str],
    rightTitle: str,
    rightContent: List[str],
) -> str:
    return call_tool("create-comparison", {
        "title": title,
        "leftTitle": leftTitle,
        "leftContent": leftContent,
        "rightTitle": rightTitle,
        "rightContent": rightContent,
    })


@mcp.tool(name="create-image-slide", description=TOOLS["create-image-slide"].description)
def create_image_slide(
    title: str,
    imagePath: str,
    caption: Optional[str] = None,
    layout: Optional[ImageLayout] = None,
) -> str:
    return call_tool("create-image-slide", {
        "title": title,
        "imagePath": imagePath,
        "caption": caption,
        "layout": layout,
    })


@mcp.tool(name="format-code", description=TOOLS["format-code"].description)
def format_code(code: str, language: Optional[str] = None) -> str:
    return call_tool("format-code", {"code": code, "language": language})


@click.command()
@click.option("--transport", type=click.Choice(["stdio", "sse", "streamable-http"]), default=None)
@click.option("--host", default=None)
@click.option("--port", type=int, default=None)
@click.option("--env-file", default=None, help="Path to a .env file")
def main(transport, host, port, env_file):
    """启动 slidev-mcp 服务；命令行参数优先于环境变量配置。"""
    try:
        config = get_server_config(env_file)
    except SlidevMCPError as e:
        raise click.ClickException(str(e))
    set_log_level(config.log_level)

    transport = transport or config.transport
    if transport == "stdio":
        logger.info("Starting slidev-mcp over stdio")
        mcp.run()
        return

    host = host or config.host
    port = port or config.port
    logger.info(f"Starting slidev-mcp over {transport} on {host}:{port}")
    mcp.run(transport=transport, host=host, port=port)


if __name__ == "__main__":
    main()
