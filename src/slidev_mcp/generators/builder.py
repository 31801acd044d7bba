"""排版构建（Builder）：把大纲、对比内容、图片与代码渲染为 Slidev Markdown 文本。

核心职责：
- `render_deck`：front-matter + 标题页 + 目录页 + 每个大纲章节一页；
- `render_comparison` / `render_image_slide` / `render_code_block`：单页或片段渲染；
- `classify_section`：按关键词判断章节角色（引言 / 总结 / 问答 / 普通内容）。

实现要点：
- 所有函数都是纯文本拼接，不做 I/O，也不校验版式名是否在目录中；
- 每页统一包装为 `---\\n[layout: x\\n]---\\n\\n{body}\\n\\n---\\n`，默认版式省略 layout 行；
- 内容中的 `---` 或代码围栏不做转义，结构是否完好由 `validator` 单独检查。
"""

from enum import Enum
from typing import Iterable, List, Mapping, Optional

from slidev_mcp.common.catalog import DEFAULT_LAYOUT, DEFAULT_THEME


class SectionRole(str, Enum):
    INTRO = "intro"
    CONCLUSION = "conclusion"
    QA = "qa"
    GENERIC = "generic"


# 有序匹配，首条命中即返回；关键词需与 outliner 生成的标签措辞保持一致
SECTION_KEYWORDS = (
    ("introduction", SectionRole.INTRO),
    ("conclusion", SectionRole.CONCLUSION),
    ("q&a", SectionRole.QA),
)

# 各章节角色使用的版式
SECTION_LAYOUTS = {
    SectionRole.INTRO: "intro",
    SectionRole.CONCLUSION: "statement",
    SectionRole.QA: "end",
    SectionRole.GENERIC: DEFAULT_LAYOUT,
}


def classify_section(label: str) -> SectionRole:
    """根据章节标签（大小写不敏感的子串匹配）判断其角色。"""
    label_lower = label.lower()
    for keyword, role in SECTION_KEYWORDS:
        if keyword in label_lower:
            return role
    return SectionRole.GENERIC


def render_slide(body: str, layout: str = DEFAULT_LAYOUT, extra: Optional[Mapping[str, str]] = None) -> str:
    """将单页正文包装为带分隔符的 Slidev 幻灯片块。

    参数：
        body: 幻灯片正文 Markdown。
        layout: 版式名；`default` 时省略 layout 行。
        extra: 额外的 front-matter 键值（如图片版式的 `image`）。
    """
    header = "" if layout == DEFAULT_LAYOUT else f"layout: {layout}\n"
    for key, value in (extra or {}).items():
        header += f"{key}: {value}\n"
    return f"---\n{header}---\n\n{body}\n\n---\n"


def render_frontmatter(title: str, author: str, theme: str = DEFAULT_THEME) -> str:
    """整份演示文稿的 front-matter 配置块（不含正文）。"""
    return (
        "---\n"
        f"theme: {theme}\n"
        f"title: {title}\n"
        f"author: {author}\n"
        "drawings:\n"
        "  enabled: true\n"
        "  persist: false\n"
        "transition: slide-left\n"
        "colorSchema: auto\n"
        "---\n"
    )


def render_table_of_contents(items: Iterable[str]) -> str:
    toc_items = "\n".join(f"- {item}" for item in items)
    return render_slide(f"# Table of Contents\n\n{toc_items}", layout="center")


def _intro_body(title: str, author: str, item: str) -> str:
    return (
        "## Welcome\n"
        "\n"
        f"This presentation covers {title.lower()}.\n"
        "\n"
        "### What you'll learn:\n"
        "- Key concepts and principles\n"
        "- Practical applications\n"
        "- Real-world examples"
    )


def _conclusion_body(title: str, author: str, item: str) -> str:
    return (
        "## Summary\n"
        "\n"
        f"We've covered the essential aspects of {title.lower()}.\n"
        "\n"
        "### Key takeaways:\n"
        "- Point 1\n"
        "- Point 2\n"
        "- Point 3"
    )


def _qa_body(title: str, author: str, item: str) -> str:
    return (
        "# Questions?\n"
        "\n"
        "Thank you for your attention!\n"
        "\n"
        f"Contact: {author}"
    )


def _generic_body(title: str, author: str, item: str) -> str:
    return (
        f"## {item}\n"
        "\n"
        f'<!-- Add your content for "{item}" here -->\n'
        "\n"
        "### Key Points:\n"
        "- Point 1\n"
        "- Point 2\n"
        "- Point 3\n"
        "\n"
        "### Details:\n"
        "- Additional information\n"
        "- Supporting evidence\n"
        "- Examples"
    )


SECTION_BODIES = {
    SectionRole.INTRO: _intro_body,
    SectionRole.CONCLUSION: _conclusion_body,
    SectionRole.QA: _qa_body,
    SectionRole.GENERIC: _generic_body,
}


def render_section(item: str, title: str, author: str) -> str:
    """渲染大纲中的单个章节：按角色选择版式与正文模板。"""
    role = classify_section(item)
    body = SECTION_BODIES[role](title, author, item)
    return render_slide(body, layout=SECTION_LAYOUTS[role])


def render_deck(title: str, author: str, outline: List[str], theme: str = DEFAULT_THEME) -> str:
    """根据大纲渲染完整的 Slidev 演示文稿。

    参数：
        title: 演示文稿标题。
        author: 作者，出现在标题页与问答页。
        outline: 大纲标签列表；第一项视为标题项，不单独成页。
        theme: front-matter 中的主题名。

    返回：
        str：以 front-matter 开头、各页以 `---` 分隔的 Markdown 文本。
    """
    sections = outline[1:]

    # front-matter 与标题页共用同一个块
    slides = [
        render_frontmatter(title, author, theme)
        + f"\n# {title}\n\nA presentation by {author}\n\n---\n",
        render_table_of_contents(sections),
    ]
    slides.extend(render_section(item, title, author) for item in sections)

    return "\n".join(slides)


def render_comparison(
    title: str,
    left_title: str,
    left_items: Iterable[str],
    right_title: str,
    right_items: Iterable[str],
) -> str:
    """渲染左右两栏对比页（`two-cols` 版式）。"""
    left = "\n".join(f"- {item}" for item in left_items)
    right = "\n".join(f"- {item}" for item in right_items)

    body = (
        f"# {title}\n"
        "\n"
        "::left::\n"
        "\n"
        f"## {left_title}\n"
        "\n"
        f"{left}\n"
        "\n"
        "::right::\n"
        "\n"
        f"## {right_title}\n"
        "\n"
        f"{right}"
    )
    return render_slide(body, layout="two-cols")


def render_image_slide(
    title: str,
    image_path: str,
    caption: Optional[str] = None,
    layout: str = "image",
) -> str:
    """渲染图片页。

    `image` 版式下说明文字与标题位于同一行；
    `image-left` / `image-right` 版式下说明文字作为标题下方的独立段落。
    """
    if layout == "image":
        heading = f"# {title} *{caption}*" if caption else f"# {title}"
        body = heading
    else:
        body = f"# {title}\n\n*{caption}*" if caption else f"# {title}"

    return render_slide(body, layout=layout, extra={"image": image_path})


def render_code_block(code: str, language: str = "javascript") -> str:
    # 不处理代码中自带的 ``` 围栏
    return f"```{language}\n{code}\n```"
