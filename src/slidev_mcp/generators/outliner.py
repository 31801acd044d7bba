"""大纲策划（Outliner）：根据主题与演讲时长生成有序的章节标签列表。

生成规则（固定算术公式，不依赖任何模型）：
1. 页数 = clamp(时长 // 2, 5, 20)；
2. 固定开头：`Title: {topic}`、`Introduction and Overview`、`Background and Context`；
3. 追加 int(页数 * 0.6) 个 `Main Content {i}`；
4. 固定结尾：`Key Takeaways`、`Conclusion`、`Q&A`；
5. 整体按位置截断到前 `页数` 项，页数较少时结尾项可能被整体截掉。

注意：章节标签的措辞需要与 `builder.SECTION_KEYWORDS` 保持一致，
下游依靠关键词子串匹配判断某一项是引言、总结还是问答页。
"""

from typing import List

MIN_SLIDES = 5
MAX_SLIDES = 20
CONTENT_RATIO = 0.6

HEADER_SECTIONS = ("Introduction and Overview", "Background and Context")
TRAILER_SECTIONS = ("Key Takeaways", "Conclusion", "Q&A")


def slide_count_for(duration_minutes: int) -> int:
    """将演讲时长换算为页数，并夹在 [5, 20] 区间内。"""
    return max(MIN_SLIDES, min(MAX_SLIDES, duration_minutes // 2))


def generate_outline(topic: str, duration_minutes: int = 30) -> List[str]:
    """生成演示文稿大纲。

    参数：
        topic: 演示文稿主题。
        duration_minutes: 演讲时长（分钟），非正数或过大时由页数公式夹取，不会报错。

    返回：
        List[str]：按顺序排列的章节标签，第一项恒为 `Title: {topic}`。
    """
    slides = slide_count_for(duration_minutes)

    outline = [f"Title: {topic}", *HEADER_SECTIONS]

    content_slides = int(slides * CONTENT_RATIO)
    for i in range(1, content_slides + 1):
        outline.append(f"Main Content {i}")

    outline.extend(TRAILER_SECTIONS)

    return outline[:slides]
