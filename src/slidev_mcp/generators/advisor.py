"""推荐引擎（Advisor）：根据主题、风格与内容描述推荐主题名或版式名。

核心规则：
- 规则按顺序逐条匹配小写后的输入文本，首条命中即返回，不做打分或组合；
- 无规则命中时返回固定默认值（主题 `seriph`，版式 `default`）；
- 使用简单的子串包含判断（例如 "vs" 也会命中 "canvas"），这是可预测的启发式而非 NLP 分类。
"""

from typing import Optional

from slidev_mcp.common.catalog import DEFAULT_LAYOUT, DEFAULT_THEME

# (风格关键词, 主题关键词, 推荐主题)：每条规则先查风格文本，再查主题文本
THEME_RULES = (
    (("academic", "research"), ("research",), "academic"),
    (("tech",), ("tech", "programming", "development"), "apple-basic"),
    (("creative", "fun"), ("creative",), "bricks"),
    (("formal", "business"), ("business",), "light"),
    (("casual", "friendly"), (), "penguin"),
)

# (描述关键词, 推荐版式)
LAYOUT_RULES = (
    (("comparison", "vs", "versus"), "two-cols"),
    (("quote", "saying"), "quote"),
    (("image", "picture", "photo"), "image"),
    (("center", "focus"), "center"),
    (("intro", "introduction"), "intro"),
    (("end", "conclusion", "thank"), "end"),
)


def _contains_any(text: str, keywords) -> bool:
    return any(keyword in text for keyword in keywords)


def recommend_theme(topic: str, style: Optional[str] = None) -> str:
    """根据主题与可选的风格偏好推荐 Slidev 主题。

    参数：
        topic: 演示文稿主题，可为空字符串。
        style: 风格偏好描述，例如 "formal"、"casual"。

    返回：
        str：主题目录中的主题名，从不抛错。
    """
    topic_lower = topic.lower()
    style_lower = (style or "").lower()

    for style_keywords, topic_keywords, theme in THEME_RULES:
        if _contains_any(style_lower, style_keywords) or _contains_any(topic_lower, topic_keywords):
            return theme

    return DEFAULT_THEME


def recommend_layout(description: str) -> str:
    """根据内容描述推荐单页版式，未命中时返回 `default`。"""
    desc_lower = description.lower()

    for keywords, layout in LAYOUT_RULES:
        if _contains_any(desc_lower, keywords):
            return layout

    return DEFAULT_LAYOUT
