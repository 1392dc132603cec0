"""Data models used throughout Dive."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Document:
    """A note in the vault. Content is read on demand through the corpus."""
    name: str  # basename without extension
    path: str  # vault-relative, with extension


class MatchKind(Enum):
    EXACT = "exact"
    FUZZY = "fuzzy"
    UNRESOLVED = "unresolved"


@dataclass
class FileReference:
    """A mention token and the document it resolved to, if any."""
    raw_token: str
    resolved: Document | None = None
    match_kind: MatchKind = MatchKind.UNRESOLVED


class Role(Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Turn:
    role: Role
    content: str

    def to_message(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass
class ConversationState:
    """Rolling per-conversation state. Only this is persisted."""
    conversation_id: str
    turns: list[Turn] = field(default_factory=list)
    awaiting_response: bool = False
    context_keywords: list[str] = field(default_factory=list)


@dataclass
class EnrichedMessage:
    """What goes to the model (wire_text) and what the user sees (display_text)."""
    wire_text: str
    display_text: str
    referenced_names: list[str] = field(default_factory=list)


class NoticeKind(Enum):
    REFERENCE_NOT_FOUND = "reference_not_found"
    READ_ERROR = "read_error"


@dataclass
class Notice:
    """A non-fatal event surfaced to the caller alongside a message."""
    kind: NoticeKind
    subject: str
    message: str


@dataclass
class ChatResponse:
    """A reply from the conversational model."""
    content: str
    reasoning: str = ""
    citations: list[Any] = field(default_factory=list)
