"""Read-only access to the notes in a vault directory."""

import logging
from pathlib import Path

from ..errors import ReadError
from ..models import Document

logger = logging.getLogger(__name__)

NOTE_EXTENSIONS = {".md", ".markdown"}


class VaultCorpus:
    """Lists and reads Markdown notes under a vault directory."""

    def __init__(self, vault_path: str | Path):
        self.vault_path = Path(vault_path)

    def list_documents(self) -> list[Document]:
        """All notes in the vault, sorted by path. Hidden files and folders are skipped."""
        docs: list[Document] = []
        if not self.vault_path.exists():
            return docs

        for file_path in sorted(self.vault_path.rglob("*")):
            if not file_path.is_file() or file_path.suffix.lower() not in NOTE_EXTENSIONS:
                continue
            rel = file_path.relative_to(self.vault_path)
            if any(part.startswith(".") for part in rel.parts):
                continue
            docs.append(Document(name=file_path.stem, path=rel.as_posix()))
        return docs

    def read(self, document: Document) -> str:
        """Read a note's content, raising ReadError if it can't be read."""
        try:
            return (self.vault_path / document.path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Error reading {document.path}: {e}")
            raise ReadError(document, str(e)) from e
