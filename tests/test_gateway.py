from __future__ import annotations

import json
import subprocess
from datetime import date
from pathlib import Path

import pytest

from slidev_mcp.common.errors import GatewayError
from slidev_mcp.generators.validator import validate
from slidev_mcp.mcp import gateway


class FakeRunner:
    """Records commands and lays down a minimal talks template on degit."""

    def __init__(self, returncode: int = 0, stderr: str = "", with_template: bool = True):
        self.calls: list[tuple[list[str], Path | None]] = []
        self.returncode = returncode
        self.stderr = stderr
        self.with_template = with_template

    def __call__(self, command, cwd=None, capture_output=False, text=False):
        self.calls.append((command, cwd))
        if command[:2] == ["npx", "degit"] and self.with_template:
            root = Path(command[-1])
            (root / "package.json").write_text(json.dumps({"name": "talks-template"}), encoding="utf-8")
            talk = root / gateway.TEMPLATE_TALK_DIR
            talk.mkdir()
            (talk / "slides.md").write_text(
                "---\ntheme: default\ntitle: Template\nauthor: Someone\n---\n\n# Hi\n", encoding="utf-8"
            )
        return subprocess.CompletedProcess(command, self.returncode, "", self.stderr)


def test_write_text_creates_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "slides.md"
    gateway.write_text(target, "hello")
    assert target.read_text(encoding="utf-8") == "hello"


def test_insert_slide_at_position(tmp_path: Path) -> None:
    slides = tmp_path / "slides.md"
    slides.write_text("A\n---\nB\n---\nC", encoding="utf-8")

    count = gateway.insert_slide(slides, "NEW", 1)

    assert count == 4
    assert slides.read_text(encoding="utf-8") == "A\n---\nNEW\n---\nB\n---\nC"


@pytest.mark.parametrize("position", [None, 0, -1, -3, 3, 99])
def test_insert_slide_appends_otherwise(tmp_path: Path, position: int | None) -> None:
    slides = tmp_path / "slides.md"
    slides.write_text("A\n---\nB\n---\nC", encoding="utf-8")

    gateway.insert_slide(slides, "NEW", position)

    assert slides.read_text(encoding="utf-8") == "A\n---\nB\n---\nC\n---\nNEW"


def test_insert_slide_missing_file(tmp_path: Path) -> None:
    with pytest.raises(GatewayError):
        gateway.insert_slide(tmp_path / "missing.md", "NEW")


def test_project_manifest() -> None:
    manifest = gateway.project_manifest("My  Great Talk", "Ann")
    assert manifest["name"] == "my-great-talk"
    assert manifest["description"] == "Presentation: My  Great Talk"
    assert manifest["author"] == "Ann"
    assert manifest["scripts"]["dev"] == "slidev"
    assert "@slidev/cli" in manifest["dependencies"]


def test_create_project_writes_manifest_and_valid_slides(tmp_path: Path) -> None:
    root = gateway.create_project(tmp_path / "talk", "Tech Talk", "Ann", "apple-basic")

    manifest = json.loads((root / "package.json").read_text(encoding="utf-8"))
    slides = (root / "slides.md").read_text(encoding="utf-8")

    assert manifest["name"] == "tech-talk"
    assert slides.startswith("---\ntheme: apple-basic\ntitle: Tech Talk\nauthor: Ann\n")
    assert "layout: end\n---\n\n# Thank You" in slides
    assert validate(slides).is_valid


def test_scaffold_from_template(tmp_path: Path) -> None:
    root = tmp_path / "project"
    runner = FakeRunner()

    talk = gateway.scaffold_from_template(root, "Deep Dive", "Ann", "bricks", runner=runner, today=date(2026, 10, 18))

    assert talk == "2026-10-18"
    assert runner.calls == [
        (["npx", "degit", "LittleSound/talks-template", str(root)], None),
        (["pnpm", "i"], root),
    ]
    manifest = json.loads((root / "package.json").read_text(encoding="utf-8"))
    assert manifest["name"] == "deep-dive"
    assert manifest["author"] == "Ann"

    slides = (root / "2026-10-18" / "slides.md").read_text(encoding="utf-8")
    assert "theme: bricks\ntitle: Deep Dive\nauthor: Ann\n" in slides
    # the template folder is left untouched
    assert "title: Template" in (root / "0000-00-00" / "slides.md").read_text(encoding="utf-8")


def test_scaffold_tolerates_missing_template_files(tmp_path: Path) -> None:
    runner = FakeRunner(with_template=False)
    talk = gateway.scaffold_from_template(tmp_path / "p", "T", "A", "seriph", runner=runner, today=date(2026, 1, 2))
    assert talk == "2026-01-02"
    assert not (tmp_path / "p" / "2026-01-02").exists()


def test_scaffold_command_failure(tmp_path: Path) -> None:
    runner = FakeRunner(returncode=1, stderr="could not find commit hash")
    with pytest.raises(GatewayError) as exc:
        gateway.scaffold_from_template(tmp_path / "p", "T", "A", "seriph", runner=runner)
    assert "npx degit" in str(exc.value)
    assert "could not find commit hash" in str(exc.value)
    assert len(runner.calls) == 1


def test_scaffold_missing_executable(tmp_path: Path) -> None:
    def runner(command, **kwargs):
        raise FileNotFoundError(command[0])

    with pytest.raises(GatewayError) as exc:
        gateway.scaffold_from_template(tmp_path / "p", "T", "A", "seriph", runner=runner)
    assert "could not be started" in str(exc.value)
