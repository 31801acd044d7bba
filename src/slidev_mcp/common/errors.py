"""异常定义：工具调用、文件操作与配置加载过程中的错误类型。

层次：
- `SlidevMCPError`：所有自定义异常的基类；
- `ToolArgumentsError`：工具参数不符合声明的 schema（逐条列出问题字段）；
- `UnknownToolError`：调用了未注册的工具名；
- `GatewayError`：文件系统或外部命令执行失败；
- `ConfigError`：环境变量配置非法。

纯文本生成函数（大纲、渲染、校验）不会抛出这些异常。
"""

from __future__ import annotations


class SlidevMCPError(Exception):
    """所有 slidev-mcp 异常的基类。"""


class ToolArgumentsError(SlidevMCPError, ValueError):
    """工具参数校验失败时抛出，`issues` 保存每一条违规信息。"""

    def __init__(self, tool: str, issues: list[str]):
        self.tool = tool
        self.issues = [str(i).strip() for i in issues if str(i).strip()]
        if not self.issues:
            self.issues = ["Invalid arguments"]
        super().__init__(self._format())

    def _format(self) -> str:
        lines = [f"Invalid arguments for {self.tool}:"]
        for issue in self.issues:
            lines.append(f"- {issue}")
        return "\n".join(lines)


class UnknownToolError(SlidevMCPError, LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class GatewayError(SlidevMCPError):
    """文件写入或外部命令（npx / pnpm）失败。"""


class ConfigError(SlidevMCPError, ValueError):
    """环境变量中的服务配置非法。"""
