"""Per-conversation state: topic keywords, open questions, identity."""

import logging
import re
import uuid
from collections import Counter

from ..chat.prompts import CONTEXT_SUFFIX
from ..models import ConversationState, Role, Turn

logger = logging.getLogger(__name__)

STOPWORDS = {"what", "when", "where", "which", "this", "that", "there", "their", "about"}
MAX_KEYWORDS = 5

QUESTION_PATTERNS = [
    re.compile(r"\?\s*$", re.M),
    re.compile(r"\b(?:what|how|why|when|where|which)\b", re.I),
    re.compile(r"\b(?:can|could|would)\s+you\b", re.I),
    re.compile(r"\blet\s+me\s+know\b", re.I),
    re.compile(r"thoughts", re.I),
]


def new_conversation_id() -> str:
    return uuid.uuid4().hex


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> list[str]:
    """Most frequent words of one message, ties broken by first occurrence.

    Only the given message counts; keywords are not accumulated across turns.
    """
    words = re.sub(r"[^\w\s]", "", text.lower()).split()
    words = [w for w in words if len(w) > 3 and w not in STOPWORDS]
    counts = Counter(words)
    # Counter keeps first-seen order and sorted() is stable
    ranked = sorted(counts, key=lambda w: counts[w], reverse=True)
    return ranked[:limit]


def is_question(text: str) -> bool:
    """Whether an assistant reply is waiting on the user."""
    return any(p.search(text) for p in QUESTION_PATTERNS)


class ContextTracker:
    """Owns one ConversationState and keeps it consistent across turns."""

    def __init__(self, state: ConversationState | None = None):
        self.state = state or ConversationState(conversation_id=new_conversation_id())

    @property
    def turns(self) -> list[Turn]:
        return self.state.turns

    def commit_exchange(self, user_text: str, assistant_text: str, question: str | None = None) -> None:
        """Record a completed user/assistant exchange.

        user_text is what was sent to the model. Keywords come from question,
        the message as the user typed it, when given.
        """
        self.state.turns.append(Turn(Role.USER, user_text))
        self.state.turns.append(Turn(Role.ASSISTANT, assistant_text))
        self.state.context_keywords = extract_keywords(question if question is not None else user_text)
        self.state.awaiting_response = is_question(assistant_text)
        logger.debug(
            f"Conversation {self.state.conversation_id}: {len(self.state.turns)} turns, "
            f"keywords={self.state.context_keywords}, awaiting={self.state.awaiting_response}"
        )

    def reset(self) -> None:
        """Forget the conversation and start a new one under a fresh id."""
        self.state = ConversationState(conversation_id=new_conversation_id())

    def context_summary(self) -> str:
        """Suffix describing recent topics, or "" when there's nothing to say."""
        if not self.state.turns or not self.state.context_keywords:
            return ""
        return CONTEXT_SUFFIX.format(keywords=", ".join(self.state.context_keywords))

    def context_window(self, pending: Turn, max_messages: int = 4) -> list[Turn]:
        """Turns to send with a pending user turn.

        Long conversations keep their opening turn plus the most recent
        max_messages turns.
        """
        history = [*self.state.turns, pending]
        if len(history) > max_messages:
            return [history[0], *history[-max_messages:]]
        return history
