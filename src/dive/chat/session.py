"""A conversation with the model over the notes in a vault."""

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from ..context.store import StateStore, serialize
from ..context.tracker import ContextTracker
from ..models import ChatResponse, ConversationState, Document, EnrichedMessage, Notice, Role, Turn
from ..vault.corpus import VaultCorpus
from ..vault.index import Corpus, CorpusIndex
from ..vault.writer import NoteWriter
from .assembler import prepare_message
from .client import ChatClient
from .prompts import build_system_prompt

logger = logging.getLogger(__name__)


@dataclass
class ChatResult:
    message: EnrichedMessage
    response: ChatResponse
    notices: list[Notice] = field(default_factory=list)


class ChatSession:
    """Resolves, sends and records one message at a time.

    Callers must not start a send while another is in flight. The user turn
    is only recorded once the model has answered.
    """

    def __init__(
        self,
        config: dict[str, Any],
        corpus: Corpus | None = None,
        client: ChatClient | None = None,
        store: StateStore | None = None,
    ):
        self.config = config
        self.corpus = corpus or VaultCorpus(config["vault_path"])
        self.store = store if store is not None else StateStore(config["state_path"])
        self._client = client
        self.tracker = ContextTracker(self.store.load())

    @property
    def client(self) -> ChatClient:
        if self._client is None:
            self._client = ChatClient(self.config)
        return self._client

    @property
    def state(self) -> ConversationState:
        return self.tracker.state

    def index(self) -> CorpusIndex:
        """Fresh snapshot of the corpus."""
        return CorpusIndex.from_corpus(self.corpus)

    def find_document(self, name: str) -> Document | None:
        return self.index().get(name)

    def validate_input(self, raw_input: str) -> None:
        if not raw_input.strip():
            raise ValueError("Message is empty.")
        limit = self.config.get("max_input_length", 4000)
        if len(raw_input) > limit:
            raise ValueError(f"Message is too long ({len(raw_input)}/{limit} characters).")

    def prepare(
        self,
        raw_input: str,
        current_document: Document | None = None,
        include_current: bool | None = None,
        today: date | None = None,
    ) -> tuple[EnrichedMessage, list[Notice]]:
        """Build the wire and display payloads without calling the model."""
        if include_current is None:
            include_current = self.config.get("include_current_file", False)
        return prepare_message(
            raw_input,
            self.index(),
            self.corpus,
            self.tracker.state,
            include_current=include_current,
            current_document=current_document,
            today=today,
        )

    def send(
        self,
        raw_input: str,
        current_document: Document | None = None,
        include_current: bool | None = None,
        today: date | None = None,
    ) -> ChatResult:
        """Send one message. Raises ApiError without touching history if the call fails."""
        self.validate_input(raw_input)
        message, notices = self.prepare(raw_input, current_document, include_current, today)

        pending = Turn(Role.USER, message.wire_text)
        window = self.tracker.context_window(pending, self.config.get("max_context_messages", 4))
        system_prompt = build_system_prompt(self.config.get("custom_prompt", ""))

        response = self.client.send(system_prompt, window)
        logger.debug(f"Sent {len(window)} turn(s), referenced {message.referenced_names}")

        self.tracker.commit_exchange(message.wire_text, response.content, question=raw_input)
        self.store.save(self.tracker.state)
        return ChatResult(message=message, response=response, notices=notices)

    def reset(self) -> None:
        self.tracker.reset()
        self.store.clear()

    def export(self) -> str:
        """Conversation history as JSON."""
        return json.dumps(serialize(self.tracker.state)["chat_history"], indent=2)

    def last_reply(self) -> str | None:
        for turn in reversed(self.tracker.turns):
            if turn.role is Role.ASSISTANT:
                return turn.content
        return None

    def save_reply_as_note(self, content: str | None = None) -> Path:
        """Write a reply (the latest one by default) into the vault."""
        content = content if content is not None else self.last_reply()
        if not content:
            raise ValueError("No assistant reply to save.")
        writer = NoteWriter(self.config["vault_path"])
        return writer.write_reply(content, {"conversation_id": self.tracker.state.conversation_id})
