"""Turn a raw question into the message sent to the model and the one shown to the user."""

import logging
import re
from datetime import date

from ..context.tracker import ContextTracker
from ..errors import ReadError
from ..models import ConversationState, Document, EnrichedMessage, MatchKind, Notice, NoticeKind
from ..resolve.locator import find_daily_note, note_name_date
from ..resolve.references import resolve_references, strip_file_references
from ..resolve.temporal import resolve_temporal
from ..vault.index import Corpus, CorpusIndex
from .prompts import DAILY_NOTE_BLOCK, FILE_BLOCK, QUESTION_TEMPLATE

logger = logging.getLogger(__name__)

WEEKDAY_IN_NAME = re.compile(r"\b(?:mon|tue|wed|thu|fri|sat|sun)", re.I)


def is_daily_note_name(name: str) -> bool:
    lowered = name.lower()
    return bool(
        note_name_date(name) is not None
        or "daily" in lowered
        or "journal" in lowered
        or WEEKDAY_IN_NAME.search(name)
    )


def format_document_block(name: str, content: str) -> str:
    if is_daily_note_name(name):
        day = note_name_date(name)
        return DAILY_NOTE_BLOCK.format(date=day.isoformat() if day else name, content=content)
    return FILE_BLOCK.format(name=name, content=content)


def _collect_documents(
    raw_input: str,
    index: CorpusIndex,
    include_current: bool,
    current_document: Document | None,
    today: date | None,
    notices: list[Notice],
) -> list[Document]:
    """Explicit mentions first, then the date's daily note, then the open note."""
    docs: list[Document] = []
    seen: set[str] = set()

    def add(doc: Document) -> None:
        key = doc.name.lower()
        if key not in seen:
            seen.add(key)
            docs.append(doc)

    for ref in resolve_references(raw_input, index):
        if ref.match_kind is MatchKind.UNRESOLVED:
            notices.append(Notice(
                NoticeKind.REFERENCE_NOT_FOUND, ref.raw_token, f"File not found: {ref.raw_token}",
            ))
            continue
        add(ref.resolved)

    target_date = resolve_temporal(raw_input, today=today)
    if target_date is not None:
        note = find_daily_note(target_date, index)
        if note is not None:
            add(note)

    if include_current and current_document is not None:
        add(current_document)

    return docs


def prepare_message(
    raw_input: str,
    index: CorpusIndex,
    corpus: Corpus,
    state: ConversationState,
    include_current: bool = False,
    current_document: Document | None = None,
    today: date | None = None,
) -> tuple[EnrichedMessage, list[Notice]]:
    """Resolve the notes a question refers to and build both payloads.

    Missing references and unreadable notes are reported as notices; the
    message is built from whatever could be read.
    """
    notices: list[Notice] = []
    docs = _collect_documents(raw_input, index, include_current, current_document, today, notices)

    included: list[tuple[str, str]] = []
    for doc in docs:
        try:
            content = corpus.read(doc)
        except ReadError as e:
            notices.append(Notice(NoticeKind.READ_ERROR, doc.name, str(e)))
            continue
        included.append((doc.name, content))
        logger.debug(f"Added file: {doc.name}")

    if included:
        files = "".join(format_document_block(name, content) for name, content in included)
        wire_text = QUESTION_TEMPLATE.format(files=files, question=raw_input)
    else:
        wire_text = raw_input + ContextTracker(state).context_summary()

    message = EnrichedMessage(
        wire_text=wire_text,
        display_text=strip_file_references(raw_input),
        referenced_names=[name for name, _ in included],
    )
    return message, notices
