"""文件系统与外部命令网关：工具调用中所有落盘与子进程操作都集中在这里。

核心职责：
- 写入演示文稿文本、在已有 slides.md 中插入新页；
- 创建普通 Slidev 项目（package.json + 起始 slides.md）；
- 基于 LittleSound talks 模板搭建项目（npx degit + pnpm i），并改写模板中的标题、作者与主题。

约定：
- 失败统一抛出 `GatewayError`，由 Tool Host 转换为错误结果返回给客户端；
- 外部命令通过可注入的 `runner`（默认 `subprocess.run`）执行，便于测试替换。
"""

import json
import re
import shutil
import subprocess
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from slidev_mcp.common.errors import GatewayError
from slidev_mcp.common.utils import get_logger
from slidev_mcp.generators.builder import render_frontmatter

logger = get_logger(__name__)

TEMPLATE_REPO = "LittleSound/talks-template"
TEMPLATE_TALK_DIR = "0000-00-00"
SLIDE_DELIMITER = "\n---\n"

Runner = Callable[..., subprocess.CompletedProcess]


def write_text(path: str | Path, content: str) -> Path:
    """写入文本文件，必要时创建父目录。"""
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        raise GatewayError(f"Failed to write {target}: {e}") from e
    logger.info(f"Wrote {len(content)} characters to {target}")
    return target


def insert_slide(slides_path: str | Path, slide_content: str, position: Optional[int] = None) -> int:
    """在已有演示文稿中插入一页。

    参数：
        slides_path: slides.md 路径。
        slide_content: 新页的 Markdown 内容。
        position: 插入位置（按 `\\n---\\n` 切分后的片段序号）；为空、不大于 0 或越界时追加到末尾。

    返回：
        int：插入后的片段数量。
    """
    path = Path(slides_path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise GatewayError(f"Failed to read {path}: {e}") from e

    segments = content.split(SLIDE_DELIMITER)
    if position is not None and 0 < position < len(segments):
        segments.insert(position, slide_content)
    else:
        segments.append(slide_content)

    write_text(path, SLIDE_DELIMITER.join(segments))
    return len(segments)


def project_name(title: str) -> str:
    return re.sub(r"\s+", "-", title.lower())


def project_manifest(title: str, author: str) -> Dict[str, Any]:
    """普通 Slidev 项目的 package.json 内容。"""
    return {
        "name": project_name(title),
        "version": "1.0.0",
        "description": f"Presentation: {title}",
        "author": author,
        "scripts": {
            "dev": "slidev",
            "build": "slidev build",
            "export": "slidev export",
        },
        "dependencies": {
            "@slidev/cli": "^0.49.0",
            "@slidev/theme-seriph": "^0.23.0",
        },
    }


def starter_slides(title: str, author: str, theme: str) -> str:
    """新项目的起始 slides.md：标题、目录、引言、正文、总结与致谢页。"""
    return (
        render_frontmatter(title, author, theme)
        + "\n"
        f"# {title}\n"
        "\n"
        f"A presentation by {author}\n"
        "\n"
        "---\n"
        "layout: center\n"
        "---\n"
        "\n"
        "# Table of Contents\n"
        "\n"
        "- Introduction\n"
        "- Main Content\n"
        "- Conclusion\n"
        "- Q&A\n"
        "\n"
        "---\n"
        "\n"
        "# Introduction\n"
        "\n"
        "<!-- Add your introduction content here -->\n"
        "\n"
        "---\n"
        "\n"
        "# Main Content\n"
        "\n"
        "<!-- Add your main content here -->\n"
        "\n"
        "---\n"
        "\n"
        "# Conclusion\n"
        "\n"
        "<!-- Add your conclusion here -->\n"
        "\n"
        "---\n"
        "layout: end\n"
        "---\n"
        "\n"
        "# Thank You\n"
        "\n"
        "Questions?\n"
    )


def create_project(project_path: str | Path, title: str, author: str, theme: str) -> Path:
    """创建普通 Slidev 项目：写入 package.json 与 slides.md。"""
    root = Path(project_path)
    logger.info(f"Creating Slidev project \"{title}\" at {root}")
    write_text(root / "package.json", json.dumps(project_manifest(title, author), indent=2))
    write_text(root / "slides.md", starter_slides(title, author, theme))
    return root


def _run(runner: Runner, command: List[str], cwd: Optional[Path] = None) -> None:
    logger.info(f"Running: {' '.join(command)}")
    try:
        completed = runner(command, cwd=cwd, capture_output=True, text=True)
    except OSError as e:
        raise GatewayError(f"Command {' '.join(command)} could not be started: {e}") from e

    if completed.returncode != 0:
        stderr = (completed.stderr or "").strip()
        raise GatewayError(f"Command {' '.join(command)} failed with exit code {completed.returncode}: {stderr}")


def _patch_manifest(root: Path, title: str, author: str) -> None:
    manifest_path = root / "package.json"
    if not manifest_path.exists():
        logger.warning(f"Template has no package.json at {manifest_path}, skipping")
        return

    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.warning(f"Template package.json is not valid JSON ({e}), skipping")
        return
    data["name"] = project_name(title)
    data["description"] = f"Presentation: {title}"
    data["author"] = author
    write_text(manifest_path, json.dumps(data, indent=2))


def _create_talk(root: Path, talk: str, title: str, author: str, theme: str) -> None:
    template_dir = root / TEMPLATE_TALK_DIR
    if not template_dir.is_dir():
        logger.warning(f"Template talk folder {template_dir} not found, skipping")
        return

    talk_dir = root / talk
    shutil.copytree(template_dir, talk_dir, dirs_exist_ok=True)

    slides_path = talk_dir / "slides.md"
    if not slides_path.exists():
        logger.warning(f"Template talk has no slides.md at {slides_path}, skipping")
        return

    content = slides_path.read_text(encoding="utf-8")
    # 使用函数替换，避免标题中的反斜杠被当作转义
    content = re.sub(r"title: .*", lambda _: f"title: {title}", content)
    content = re.sub(r"author: .*", lambda _: f"author: {author}", content)
    content = re.sub(r"theme: .*", lambda _: f"theme: {theme}", content)
    write_text(slides_path, content)


def scaffold_from_template(
    project_path: str | Path,
    title: str,
    author: str,
    theme: str,
    runner: Runner = subprocess.run,
    today: Optional[date] = None,
) -> str:
    """基于 LittleSound talks 模板搭建项目。

    步骤：
    1. `npx degit LittleSound/talks-template <path>` 拉取模板；
    2. 在项目目录执行 `pnpm i` 安装依赖；
    3. 改写 package.json 的名称、描述与作者（文件不存在则跳过）；
    4. 复制 `0000-00-00` 为当天日期目录，并改写其中 slides.md 的标题、作者与主题。

    返回：
        str：新建的演讲目录名（ISO 日期）。
    """
    root = Path(project_path)
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise GatewayError(f"Failed to create {root}: {e}") from e

    _run(runner, ["npx", "degit", TEMPLATE_REPO, str(root)])
    _run(runner, ["pnpm", "i"], cwd=root)

    _patch_manifest(root, title, author)

    talk = (today or date.today()).isoformat()
    _create_talk(root, talk, title, author, theme)
    return talk
