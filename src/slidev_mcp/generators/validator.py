"""内容校验（Validator）：检查 Slidev Markdown 的结构是否完好。

检查项（相互独立，不短路，错误按检测顺序返回）：
1. 全文不含 `---` → "Missing slide separators (---)"；
2. 全文不以 `---` 开头 → "Missing frontmatter at the beginning"；
3. 按 `\\n---\\n` 切分后逐段检查：去掉空行、以 `---` 开头的行、含 `:` 的行（视为
   front-matter 键值）后，若某页不剩任何内容行 → "Slide {n} appears to be empty"。

切分细节：
- 只含键值行的片段视为下一页的头部（front-matter 或 layout 块），与其后的片段合并为一页；
- 前面没有头部的空白片段是相邻分隔符或结尾分隔符留下的空隙，不计为空页；
- `n` 为该页第一个片段的序号（从 1 开始）。

已知局限：含冒号的正文行（例如 "Ratio: 3:1"）同样会被当作键值行去掉。
"""

from typing import List

from slidev_mcp.common.types import ValidationResult

SEPARATOR = "---"
SLIDE_DELIMITER = "\n---\n"


def _is_metadata_line(line: str) -> bool:
    return not line.strip() or line.startswith(SEPARATOR) or ":" in line


def _empty_slide_indexes(markdown: str) -> List[int]:
    empty = []
    header_index = None

    for index, segment in enumerate(markdown.split(SLIDE_DELIMITER), start=1):
        lines = segment.split("\n")
        if any(not _is_metadata_line(line) for line in lines):
            header_index = None
            continue

        if any(line.strip() for line in lines):
            # 仅含键值行：作为后续内容的头部
            if header_index is None:
                header_index = index
            continue

        if header_index is not None:
            empty.append(header_index)
            header_index = None

    if header_index is not None:
        empty.append(header_index)

    return empty


def validate(markdown: str) -> ValidationResult:
    """校验 Slidev Markdown 的结构。

    参数：
        markdown: 完整的演示文稿文本或单页文本。

    返回：
        ValidationResult：`is_valid` 为 True 当且仅当 `errors` 为空；本函数从不抛错。
    """
    errors: List[str] = []

    if SEPARATOR not in markdown:
        errors.append("Missing slide separators (---)")

    if not markdown.startswith(SEPARATOR):
        errors.append("Missing frontmatter at the beginning")

    for index in _empty_slide_indexes(markdown):
        errors.append(f"Slide {index} appears to be empty")

    return ValidationResult(is_valid=not errors, errors=errors)


def format_errors(result: ValidationResult) -> str:
    return "\n".join(result.errors)
