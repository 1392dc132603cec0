"""Persist conversation state as a plain JSON record."""

import json
import logging
from pathlib import Path
from typing import Any

from ..models import ConversationState, Role, Turn
from .tracker import new_conversation_id

logger = logging.getLogger(__name__)


def serialize(state: ConversationState) -> dict[str, Any]:
    """Plain record for storage."""
    return {
        "chat_history": [turn.to_message() for turn in state.turns],
        "conversation_id": state.conversation_id,
        "awaiting_user_response": state.awaiting_response,
        "context_keywords": list(state.context_keywords),
    }


def deserialize(record: Any) -> ConversationState:
    """Rebuild state from a stored record, filling in missing fields.

    Raises ValueError if the record doesn't have the expected shape.
    """
    if not isinstance(record, dict):
        raise ValueError(f"expected an object, got {type(record).__name__}")

    history = record.get("chat_history", [])
    if not isinstance(history, list):
        raise ValueError("chat_history is not a list")
    turns = []
    for entry in history:
        if not isinstance(entry, dict) or not isinstance(entry.get("content"), str):
            raise ValueError(f"malformed history entry: {entry!r}")
        turns.append(Turn(Role(entry.get("role")), entry["content"]))

    keywords = record.get("context_keywords", [])
    if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
        raise ValueError("context_keywords is not a list of strings")

    return ConversationState(
        conversation_id=str(record.get("conversation_id") or new_conversation_id()),
        turns=turns,
        awaiting_response=bool(record.get("awaiting_user_response", False)),
        context_keywords=keywords[:5],
    )


class StateStore:
    """Saves and loads one conversation record at a JSON file path."""

    def __init__(self, state_path: str | Path):
        self.state_path = Path(state_path)

    def load(self) -> ConversationState | None:
        """Stored state, or None if nothing usable has been saved yet."""
        if not self.state_path.exists():
            return None
        try:
            record = json.loads(self.state_path.read_text(encoding="utf-8"))
            return deserialize(record)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable conversation state at {self.state_path}: {e}")
            return None

    def save(self, state: ConversationState) -> None:
        self.state_path.parent.mkdir(parents=True, exist_ok=True)
        self.state_path.write_text(json.dumps(serialize(state), indent=2), encoding="utf-8")

    def clear(self) -> None:
        if self.state_path.exists():
            self.state_path.unlink()
