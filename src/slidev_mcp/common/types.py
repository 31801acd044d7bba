"""公共数据模型：描述演示文稿生成过程中的请求、结果与工具参数结构。

包含：
- `PresentationRequest`：整份演示文稿的生成请求；
- `ValidationResult`：Markdown 结构校验结果；
- `SlideDraft`：单页幻灯片草稿（版式 + Markdown）；
- `ToolResult`：工具调用返回给 MCP 客户端的文本结果；
- `ServerConfig`：MCP 服务启动配置；
- 以 `Args` 结尾的模型：各 MCP 工具的参数 schema（字段别名与客户端传入的 camelCase 一致）。
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from slidev_mcp.common.catalog import ImageLayout

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ToolArgs(BaseModel):
    """工具参数基类：拒绝未声明字段，允许使用别名或字段名赋值。"""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class PresentationRequest(ToolArgs):
    """整份演示文稿的生成请求。"""
    topic: str = Field(description="演示文稿的主题")
    author: str = Field(description="作者名称")
    duration_minutes: int = Field(
        description="演讲时长（分钟），默认 30", default=30, gt=0, alias="duration"
    )
    theme: Optional[str] = Field(description="指定主题；为空时根据主题自动推荐", default=None)
    style: Optional[str] = Field(description="风格偏好（formal、casual、technical、academic 等）", default=None)


class GeneratePresentationArgs(PresentationRequest):
    """generate-presentation 工具参数。"""
    output_path: str = Field(description="演示文稿保存路径", alias="outputPath")


class CreateSlidevProjectArgs(ToolArgs):
    """create-slidev-project 工具参数。"""
    title: str = Field(description="演示文稿标题")
    author: str = Field(description="作者名称")
    project_path: str = Field(description="项目创建路径", alias="projectPath")
    theme: Optional[str] = Field(description="指定主题；为空时根据标题自动推荐", default=None)
    language: str = Field(description="语言代码（保留字段，当前不参与项目生成）", default="en")
    use_template: bool = Field(
        description="是否使用 LittleSound talks 模板", default=False, alias="useTemplate"
    )
    style: Optional[str] = Field(description="用于主题推荐的风格偏好", default=None)


class GenerateSlideContentArgs(ToolArgs):
    """generate-slide-content 工具参数。"""
    topic: str = Field(description="幻灯片主题或标题")
    description: str = Field(description="幻灯片应包含内容的详细描述")
    layout: Optional[str] = Field(description="指定版式；为空时根据描述自动推荐", default=None)
    style: Optional[str] = Field(description="风格偏好（保留字段，当前不影响单页内容与版式）", default=None)


class AddSlideArgs(ToolArgs):
    """add-slide 工具参数。"""
    slides_path: str = Field(description="slides.md 文件路径", alias="slidesPath")
    slide_content: str = Field(description="新幻灯片的 Slidev Markdown 内容", alias="slideContent")
    position: Optional[int] = Field(description="插入位置，默认追加到末尾", default=None)


class CreateComparisonArgs(ToolArgs):
    """create-comparison 工具参数。"""
    title: str = Field(description="幻灯片标题")
    left_title: str = Field(description="左栏标题", alias="leftTitle")
    left_content: List[str] = Field(description="左栏要点列表", alias="leftContent")
    right_title: str = Field(description="右栏标题", alias="rightTitle")
    right_content: List[str] = Field(description="右栏要点列表", alias="rightContent")


class CreateImageSlideArgs(ToolArgs):
    """create-image-slide 工具参数。"""
    title: str = Field(description="幻灯片标题")
    image_path: str = Field(description="图片路径", alias="imagePath")
    caption: Optional[str] = Field(description="图片说明", default=None)
    layout: ImageLayout = Field(description="图片版式", default="image")


class FormatCodeArgs(ToolArgs):
    """format-code 工具参数。"""
    code: str = Field(description="需要格式化的代码")
    language: str = Field(description="编程语言", default="javascript")


class ValidationResult(BaseModel):
    """Markdown 结构校验结果，仅在调用时派生，不持久化。"""
    is_valid: bool = Field(description="是否通过全部结构检查")
    errors: List[str] = Field(description="按检测顺序排列的错误信息", default_factory=list)


class SlideDraft(BaseModel):
    """单页幻灯片草稿。"""
    layout: str = Field(description="实际采用的版式")
    markdown: str = Field(description="渲染后的 Slidev Markdown")


class ToolResult(BaseModel):
    """工具调用结果：返回给客户端的文本，以及是否为错误。"""
    text: str
    is_error: bool = False


class ServerConfig(BaseModel):
    """MCP 服务启动配置。"""
    transport: Literal["stdio", "sse", "streamable-http"] = "stdio"
    host: str = "localhost"
    port: int = Field(default=10100, gt=0, lt=65536)
    log_level: LogLevel = "INFO"
