"""@-mentions of notes: extract, match against the vault, strip for display.

Two mention forms are recognized:

    @`Some Note`   backtick-wrapped, the span is used verbatim
    @some-note     bare, runs to the next whitespace, @ or backtick;
                   trailing sentence punctuation is dropped
"""

import logging
import re

from ..models import Document, FileReference, MatchKind
from ..vault.index import CorpusIndex

logger = logging.getLogger(__name__)

MENTION_PATTERN = re.compile(r"@`([^`]+)`|@([^\s@`]+)")
TRAILING_PUNCTUATION = ".,;!?"


def _scan(text: str) -> list[tuple[str, bool]]:
    """(token, is_backtick) for every mention, left to right, duplicates kept."""
    found = []
    for match in MENTION_PATTERN.finditer(text):
        if match.group(1) is not None:
            found.append((match.group(1), True))
        else:
            token = match.group(2).rstrip(TRAILING_PUNCTUATION)
            if token:
                found.append((token, False))
    return found


def extract_file_references(text: str) -> list[str]:
    """Mention tokens in order of first occurrence, without duplicates."""
    mentions: list[str] = []
    for token, _ in _scan(text):
        if token not in mentions:
            mentions.append(token)
    return mentions


def match_reference(token: str, index: CorpusIndex) -> FileReference:
    """Resolve one token: exact name, then substring either way, else unresolved."""
    needle = token.lower()

    exact = next((doc for doc in index if doc.name.lower() == needle), None)
    if exact is not None:
        return FileReference(raw_token=token, resolved=exact, match_kind=MatchKind.EXACT)

    for doc in index:
        name = doc.name.lower()
        if needle in name or name in needle:
            logger.debug(f"Fuzzy match for '{token}': {doc.name}")
            return FileReference(raw_token=token, resolved=doc, match_kind=MatchKind.FUZZY)

    logger.warning(f"File not found: {token}")
    return FileReference(raw_token=token)


def resolve_references(text: str, index: CorpusIndex) -> list[FileReference]:
    return [match_reference(token, index) for token in extract_file_references(text)]


def strip_file_references(text: str) -> str:
    """Remove all mentions from text and normalize whitespace."""
    cleaned = MENTION_PATTERN.sub(_blank_mention, text)
    return re.sub(r"\s+", " ", cleaned).strip()


def _blank_mention(match: re.Match) -> str:
    # A space, not "", so a stray "@" before the mention can't join what follows
    if match.group(1) is not None:
        return " "
    raw = match.group(2)
    token = raw.rstrip(TRAILING_PUNCTUATION)
    if not token:
        return match.group(0)
    return " " + raw[len(token):]


def suggest_documents(query: str, index: CorpusIndex, limit: int = 5) -> list[Document]:
    """Notes whose path or name contains the query, for @-autocomplete."""
    query = query.lower()
    matches = [doc for doc in index if query in doc.path.lower() or query in doc.name.lower()]
    return matches[:limit]


def format_reference(document: Document) -> str:
    """Mention text inserted when a suggestion is picked."""
    return f"@`{document.name}`"
