from __future__ import annotations

from slidev_mcp.generators.copywriter import generate_slide_content
from slidev_mcp.generators.validator import validate


def test_comparison_description_uses_two_columns() -> None:
    description = "A comparison of one two three four five six seven eight nine ten eleven"
    draft = generate_slide_content("Python vs Rust", description)

    assert draft.layout == "two-cols"
    assert draft.markdown.startswith("---\nlayout: two-cols\n---\n\n# Python vs Rust\n\n::left::")
    assert "- A comparison of one two three four five six seven...\n" in draft.markdown
    assert "::right::\n\n## Details" in draft.markdown


def test_saying_uses_quote_layout() -> None:
    draft = generate_slide_content("Wisdom", "Simplicity is prerequisite for reliability, an old saying")
    assert draft.layout == "quote"
    assert '> "Simplicity is prerequisite for reliability, an old saying"\n\n*- Author Name*' in draft.markdown


def test_explicit_layout_overrides_recommendation() -> None:
    draft = generate_slide_content("Architecture", "A picture of the system", layout="image-left")
    assert draft.layout == "image-left"
    assert "## Architecture\n\nA picture of the system\n\nKey highlights:" in draft.markdown


def test_unmatched_description_uses_overview_template() -> None:
    draft = generate_slide_content("Roadmap", "Our plans for next year")

    assert draft.layout == "default"
    assert draft.markdown.startswith("---\n---\n\n# Roadmap\n\n## Overview\n\nOur plans for next year")
    assert validate(draft.markdown).is_valid


def test_layouts_without_template_fall_back_to_overview() -> None:
    draft = generate_slide_content("Hello", "Opening words", layout="intro")
    assert draft.markdown.startswith("---\nlayout: intro\n---\n\n# Hello\n\n## Overview")
