"""Save assistant replies as notes in the vault."""

import re
from datetime import date
from pathlib import Path
from typing import Any

import yaml


def render_frontmatter(data: dict[str, Any]) -> str:
    """Render YAML frontmatter block."""
    fm = yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{fm}---\n"


def note_title(content: str) -> tuple[str, bool]:
    """Pick a title for a reply: its first heading, else its first sentence or line.

    Returns (title, from_heading).
    """
    heading = re.search(r"^#+\s+(.+)$", content, re.MULTILINE)
    if heading:
        title = heading.group(1).strip()
    else:
        sentence = re.match(r"^(.+?[.!?])\s", content)
        title = sentence.group(1).strip() if sentence else content.split("\n")[0].strip()

    title = title[:40].strip()
    if not re.sub(r"[^\w\s]", "", title).strip():
        title = "ai_note"
    return title, heading is not None


class NoteWriter:
    """Writes Markdown notes into an Obsidian-compatible vault."""

    def __init__(self, vault_path: str | Path):
        self.vault_path = Path(vault_path)

    def write_reply(self, content: str, metadata: dict[str, Any] | None = None, today: date | None = None) -> Path:
        """Write a reply to <date>_<title>.md at the vault root. Returns the path."""
        today = today or date.today()
        title, from_heading = note_title(content)
        safe_title = self._sanitize_filename(title)
        if not from_heading:
            safe_title = re.sub(r"\s+", "_", safe_title).lower()

        self.vault_path.mkdir(parents=True, exist_ok=True)
        stem = f"{today.isoformat()}_{safe_title}"
        file_path = self.vault_path / f"{stem}.md"

        # Handle name collisions
        counter = 1
        while file_path.exists():
            file_path = self.vault_path / f"{stem}_{counter}.md"
            counter += 1

        frontmatter: dict[str, Any] = {"title": title, "date": today.isoformat(), "source": "dive"}
        if metadata:
            frontmatter.update(metadata)

        file_path.write_text(render_frontmatter(frontmatter) + content, encoding="utf-8")
        return file_path

    @staticmethod
    def _sanitize_filename(name: str) -> str:
        """Sanitize a string for use as a filename."""
        name = re.sub(r'[<>:"/\\|?*]', '', name)
        name = re.sub(r"\s+", " ", name).strip(". ")
        return name[:100] if name else "untitled"
