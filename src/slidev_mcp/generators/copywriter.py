"""文案撰写（Copywriter）：根据主题与内容描述生成单页幻灯片草稿。

核心职责：
- 未指定版式时，调用 `advisor.recommend_layout` 根据描述推荐版式；
- 按版式选择正文模板（两栏 / 图文 / 引用 / 通用），正文为占位模板而非 AI 生成内容；
- 统一以 `# {topic}` 作为页标题，并用 `builder.render_slide` 包装分隔符。
"""

from typing import Optional

from slidev_mcp.common.types import SlideDraft
from slidev_mcp.generators.advisor import recommend_layout
from slidev_mcp.generators.builder import render_slide

# 两栏版式中摘取描述的前若干个词
SUMMARY_WORDS = 10


def _two_cols_body(topic: str, description: str) -> str:
    summary = " ".join(description.split(" ")[:SUMMARY_WORDS])
    return (
        "::left::\n"
        "\n"
        "## Key Points\n"
        "\n"
        f"- {summary}...\n"
        "\n"
        "::right::\n"
        "\n"
        "## Details\n"
        "\n"
        "- Additional information here\n"
        "- Supporting details\n"
        "- Examples and use cases"
    )


def _side_image_body(topic: str, description: str) -> str:
    return (
        f"## {topic}\n"
        "\n"
        f"{description}\n"
        "\n"
        "Key highlights:\n"
        "- Main point 1\n"
        "- Main point 2\n"
        "- Main point 3"
    )


def _quote_body(topic: str, description: str) -> str:
    return f'> "{description}"\n\n*- Author Name*'


def _overview_body(topic: str, description: str) -> str:
    return (
        "## Overview\n"
        "\n"
        f"{description}\n"
        "\n"
        "## Key Points\n"
        "\n"
        "- Point 1 based on description\n"
        "- Point 2 derived from content\n"
        "- Point 3 summarizing main idea"
    )


LAYOUT_BODIES = {
    "two-cols": _two_cols_body,
    "image-left": _side_image_body,
    "image-right": _side_image_body,
    "quote": _quote_body,
}


def generate_slide_content(topic: str, description: str, layout: Optional[str] = None) -> SlideDraft:
    """生成单页幻灯片草稿。

    参数：
        topic: 页标题。
        description: 该页应包含内容的描述，同时用于版式推荐。
        layout: 指定版式；为空时自动推荐。

    返回：
        SlideDraft：实际采用的版式与渲染后的 Markdown。
    """
    selected_layout = layout or recommend_layout(description)
    body_for = LAYOUT_BODIES.get(selected_layout, _overview_body)
    body = body_for(topic, description)

    markdown = render_slide(f"# {topic}\n\n{body}", layout=selected_layout)
    return SlideDraft(layout=selected_layout, markdown=markdown)
