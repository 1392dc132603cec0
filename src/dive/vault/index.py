"""Case-insensitive snapshot of the notes in a corpus."""

from collections.abc import Iterable, Iterator
from pathlib import PurePosixPath
from typing import Protocol

from ..models import Document


class Corpus(Protocol):
    def list_documents(self) -> list[Document]: ...

    def read(self, document: Document) -> str: ...


class CorpusIndex:
    """Lookup table from note name to Document, built from one corpus listing.

    Names are matched case-insensitively. A name may be a basename
    ("2024-01-05") or a vault-relative path without extension
    ("daily/2024-01-05"). When two notes share a basename the first one
    listed wins. The index never updates itself; call refresh() to pick up
    changes in the corpus.
    """

    def __init__(self, documents: Iterable[Document]):
        self._documents = list(documents)
        self._by_name: dict[str, Document] = {}
        self._by_path: dict[str, Document] = {}
        for doc in self._documents:
            self._by_name.setdefault(doc.name.lower(), doc)
            stem_path = str(PurePosixPath(doc.path).with_suffix(""))
            self._by_path.setdefault(stem_path.lower(), doc)

    @classmethod
    def build(cls, documents: Iterable[Document]) -> "CorpusIndex":
        return cls(documents)

    @classmethod
    def from_corpus(cls, corpus: Corpus) -> "CorpusIndex":
        return cls(corpus.list_documents())

    def refresh(self, corpus: Corpus) -> "CorpusIndex":
        """Return a new index over the corpus as it is now."""
        return CorpusIndex.from_corpus(corpus)

    def get(self, name: str) -> Document | None:
        """Exact lookup by basename, then by relative path."""
        key = name.lower()
        return self._by_name.get(key) or self._by_path.get(key)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)
