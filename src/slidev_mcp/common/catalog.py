"""版式与主题目录：Slidev 中可识别的布局名与主题名。

说明：
- 均为进程级只读常量，导入后不再修改；
- 渲染函数并不强制校验名称是否在目录中，目录只用于推荐结果与成员判断。
"""

from typing import Literal, get_args

LAYOUTS = frozenset({
    "default",
    "center",
    "cover",
    "end",
    "fact",
    "full",
    "image",
    "image-left",
    "image-right",
    "intro",
    "none",
    "quote",
    "section",
    "statement",
    "two-cols",
    "two-cols-header",
    "iframe",
    "iframe-left",
    "iframe-right",
})

THEMES = frozenset({
    "default",
    "seriph",
    "apple-basic",
    "bricks",
    "shibainu",
    "academic",
    "penguin",
    "light",
    "dracula",
    "vuetiful",
})

# 图片类版式（create-image-slide 可选值）
ImageLayout = Literal["image", "image-left", "image-right"]
IMAGE_LAYOUTS = get_args(ImageLayout)

DEFAULT_LAYOUT = "default"
DEFAULT_THEME = "seriph"


def is_known_layout(name: str) -> bool:
    return name in LAYOUTS


def is_known_theme(name: str) -> bool:
    return name in THEMES
