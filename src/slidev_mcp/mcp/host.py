"""Tool Host：接收工具名与参数，完成参数规整、schema 校验、分发与结果格式化。

主要职责：
- `coerce_arguments`：把客户端传入的参数规整为字典（支持 JSON 字符串），无法规整时直接报错；
- `dispatch`：按工具名查找注册表，使用 pydantic 模型严格校验参数，调用对应处理函数；
- 处理函数组合大纲、推荐、渲染与校验模块，并通过 `gateway` 完成落盘。

错误约定：
- 未知工具名 → `UnknownToolError`；
- 参数不合法 → `ToolArgumentsError`，逐条列出所有违规字段；
- 文件或外部命令失败 → 返回 `is_error=True` 的 `ToolResult`，不向上抛出。
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Type

from pydantic import ValidationError

from slidev_mcp.common.catalog import is_known_layout, is_known_theme
from slidev_mcp.common.errors import GatewayError, ToolArgumentsError, UnknownToolError
from slidev_mcp.common.types import (
    AddSlideArgs,
    CreateComparisonArgs,
    CreateImageSlideArgs,
    CreateSlidevProjectArgs,
    FormatCodeArgs,
    GeneratePresentationArgs,
    GenerateSlideContentArgs,
    ToolArgs,
    ToolResult,
)
from slidev_mcp.common.utils import get_logger
from slidev_mcp.generators.advisor import recommend_theme
from slidev_mcp.generators.builder import (
    render_code_block,
    render_comparison,
    render_deck,
    render_image_slide,
)
from slidev_mcp.generators.copywriter import generate_slide_content
from slidev_mcp.generators.outliner import generate_outline
from slidev_mcp.generators.validator import format_errors, validate
from slidev_mcp.mcp import gateway

logger = get_logger(__name__)

TEMPLATE_CHECKLIST = """
## 📋 Template Setup Checklist

恭喜！您已经成功使用模板创建了项目。为了完成设置，请按照以下清单进行操作：

- [ ] 更新 `LICENSE` 文件中的作者名称
- [ ] 删除 `.github` 文件夹（包含资助信息）
- [ ] 使用 `README-template.md` 替换 `README.md`
- [ ] 复制 `0000-00-00` 文件夹并开始创建您的实际演讲内容
- [ ] 查找文件中的 TODO 标签以了解更多信息

🎯 **建议下一步操作：**
1. 导航到项目目录
2. 运行 `pnpm dev` 启动开发服务器
3. 在浏览器中查看您的演示文稿
4. 编辑最新日期文件夹中的 `slides.md` 文件
5. 按照上述清单完成项目设置

✨ 开始创建您的精彩演示文稿吧！
"""


@dataclass(frozen=True)
class ToolSpec:
    """注册表条目：参数模型、处理函数与面向客户端的描述。"""
    args_model: Type[ToolArgs]
    handler: Callable[[Any], ToolResult]
    description: str


def _theme_reason(style) -> str:
    return f"style preference ({style})" if style else "topic analysis"


def _select_theme(theme, topic, style) -> str:
    if not theme:
        return recommend_theme(topic, style)
    if not is_known_theme(theme):
        # 未知主题原样写入 front-matter
        logger.warning(f"Theme \"{theme}\" is not in the theme catalog")
    return theme


def create_slidev_project(args: CreateSlidevProjectArgs) -> ToolResult:
    theme = _select_theme(args.theme, args.title, args.style)

    if args.use_template:
        talk = gateway.scaffold_from_template(args.project_path, args.title, args.author, theme)
        return ToolResult(text=(
            f"🎉 Successfully created Slidev project \"{args.title}\" from LittleSound talks template!\n"
            "\n"
            f"📁 Project created at: {args.project_path}\n"
            f"🎨 Selected theme: {theme}\n"
            f"📅 Talk folder: {talk}\n"
            f"{TEMPLATE_CHECKLIST}"
        ))

    gateway.create_project(args.project_path, args.title, args.author, theme)
    return ToolResult(text=(
        f"🎉 Successfully created Slidev project \"{args.title}\" at {args.project_path}\n"
        "\n"
        f"🎨 Recommended theme: {theme}\n"
        f"💡 Theme selected based on: {_theme_reason(args.style)}\n"
        "\n"
        "🚀 Next steps:\n"
        f"1. cd {args.project_path}\n"
        "2. npm install\n"
        "3. npm run dev\n"
        "4. Edit slides.md to create your presentation"
    ))


def generate_slide(args: GenerateSlideContentArgs) -> ToolResult:
    if args.layout and not is_known_layout(args.layout):
        logger.warning(f"Layout \"{args.layout}\" is not in the layout catalog")
    draft = generate_slide_content(args.topic, args.description, args.layout)
    reason = "user choice" if args.layout else "content analysis"
    return ToolResult(text=(
        f"{draft.markdown}\n"
        "\n"
        f"💡 Recommended layout: {draft.layout}\n"
        f"🎯 Layout selected based on: {reason}"
    ))


def add_slide(args: AddSlideArgs) -> ToolResult:
    gateway.insert_slide(args.slides_path, args.slide_content, args.position)
    return ToolResult(text=f"✅ Successfully added slide to {args.slides_path}")


def generate_presentation(args: GeneratePresentationArgs) -> ToolResult:
    theme = _select_theme(args.theme, args.topic, args.style)

    outline = generate_outline(args.topic, args.duration_minutes)
    content = render_deck(args.topic, args.author, outline, theme)

    validation = validate(content)
    if not validation.is_valid:
        logger.error(f"Generated presentation failed validation: {validation.errors}")
        return ToolResult(text=f"❌ Validation errors:\n{format_errors(validation)}", is_error=True)

    gateway.write_text(args.output_path, content)
    return ToolResult(text=(
        f"🎉 Successfully generated presentation \"{args.topic}\" with {len(outline)} slides at {args.output_path}\n"
        "\n"
        f"🎨 Selected theme: {theme}\n"
        f"💡 Theme selected based on: {_theme_reason(args.style)}\n"
        f"⏱️  Duration: {args.duration_minutes} minutes"
    ))


def create_comparison(args: CreateComparisonArgs) -> ToolResult:
    return ToolResult(text=render_comparison(
        args.title, args.left_title, args.left_content, args.right_title, args.right_content
    ))


def create_image_slide(args: CreateImageSlideArgs) -> ToolResult:
    return ToolResult(text=render_image_slide(args.title, args.image_path, args.caption, args.layout))


def format_code(args: FormatCodeArgs) -> ToolResult:
    return ToolResult(text=render_code_block(args.code, args.language))


TOOLS: Dict[str, ToolSpec] = {
    "create-slidev-project": ToolSpec(
        CreateSlidevProjectArgs,
        create_slidev_project,
        "Create a new Slidev presentation project with automatic theme recommendation and optional template support",
    ),
    "generate-slide-content": ToolSpec(
        GenerateSlideContentArgs,
        generate_slide,
        "Generate Slidev slide content with automatic layout recommendation based on content description",
    ),
    "add-slide": ToolSpec(
        AddSlideArgs,
        add_slide,
        "Add a new slide to an existing Slidev presentation",
    ),
    "generate-presentation": ToolSpec(
        GeneratePresentationArgs,
        generate_presentation,
        "Generate a complete Slidev presentation with automatic theme recommendation",
    ),
    "create-comparison": ToolSpec(
        CreateComparisonArgs,
        create_comparison,
        "Create a two-column comparison slide",
    ),
    "create-image-slide": ToolSpec(
        CreateImageSlideArgs,
        create_image_slide,
        "Create a slide with image layout",
    ),
    "format-code": ToolSpec(
        FormatCodeArgs,
        format_code,
        "Format code block for use in Slidev slides",
    ),
}


def coerce_arguments(tool: str, raw: Any) -> Dict[str, Any]:
    """把客户端参数规整为字典。

    - `dict` 原样返回；`None` 视为空参数；
    - 字符串按 JSON 解析，且解析结果必须是对象；
    - 其他类型或无法解析的字符串直接报错，不再静默回退为空字典。
    """
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ToolArgumentsError(tool, [f"arguments is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})"]) from e
        if isinstance(parsed, dict):
            return parsed
        raise ToolArgumentsError(tool, [f"arguments must be a JSON object, got {type(parsed).__name__}"])
    raise ToolArgumentsError(tool, [f"arguments must be an object, got {type(raw).__name__}"])


def _issues(e: ValidationError) -> List[str]:
    issues = []
    for err in e.errors():
        location = ".".join(str(part) for part in err["loc"]) or "arguments"
        issues.append(f"{location}: {err['msg']}")
    return issues


def dispatch(name: str, arguments: Any = None) -> ToolResult:
    """执行一次工具调用。

    参数：
        name: 工具名，例如 `generate-presentation`。
        arguments: 客户端传入的参数（字典、JSON 字符串或 None）。

    返回：
        ToolResult：成功时为生成的文本；文件或外部命令失败时 `is_error=True`。
    """
    logger.info(f"Tool call request: {name} {arguments!r}")

    tool = TOOLS.get(name)
    if tool is None:
        raise UnknownToolError(name)

    payload = coerce_arguments(name, arguments)
    try:
        args = tool.args_model.model_validate(payload)
    except ValidationError as e:
        raise ToolArgumentsError(name, _issues(e)) from e

    try:
        return tool.handler(args)
    except GatewayError as e:
        logger.error(f"Tool {name} failed: {e}")
        return ToolResult(text=f"❌ Error running {name}: {e}", is_error=True)
