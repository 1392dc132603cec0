"""Tests for building wire and display messages."""

from datetime import date
from pathlib import PurePosixPath

from dive.chat.assembler import is_daily_note_name, prepare_message
from dive.context.tracker import ContextTracker
from dive.errors import ReadError
from dive.models import ConversationState, Document, NoticeKind
from dive.vault.index import CorpusIndex

TODAY = date(2024, 1, 10)


class FakeCorpus:
    """In-memory corpus; paths listed in unreadable fail to read."""

    def __init__(self, notes: dict[str, str], unreadable: tuple[str, ...] = ()):
        self.notes = notes
        self.unreadable = set(unreadable)

    def list_documents(self):
        return [Document(name=PurePosixPath(p).stem, path=p) for p in self.notes]

    def read(self, document):
        if document.path in self.unreadable:
            raise ReadError(document, "permission denied")
        return self.notes[document.path]


def _prepare(text, corpus, state=None, **kwargs):
    state = state or ConversationState(conversation_id="test")
    index = CorpusIndex.from_corpus(corpus)
    return prepare_message(text, index, corpus, state, today=TODAY, **kwargs)


def test_mention_and_yesterday_note():
    corpus = FakeCorpus({
        "Daily Log.md": "running log",
        "journal/2024-01-09.md": "shipped the release",
        "recipes.md": "soup",
    })
    message, notices = _prepare("@`Daily Log` what happened yesterday", corpus)

    assert notices == []
    assert message.referenced_names == ["Daily Log", "2024-01-09"]
    assert message.display_text == "what happened yesterday"
    assert "Your daily note for 2024-01-09." in message.wire_text
    assert message.wire_text.index("running log") < message.wire_text.index("shipped the release")
    assert message.wire_text.endswith(
        "User question:\n@`Daily Log` what happened yesterday\n\n"
        "Please answer based on the content of the provided files."
    )


def test_file_block_for_regular_note():
    corpus = FakeCorpus({"recipes.md": "soup"})
    message, _ = _prepare("summarize @recipes", corpus)
    assert message.wire_text.startswith("File: recipes\n```\nsoup\n```\n")
    assert message.display_text == "summarize"


def test_unresolved_reference_is_a_notice():
    corpus = FakeCorpus({"recipes.md": "soup"})
    message, notices = _prepare("@missing hello", corpus)
    assert [n.kind for n in notices] == [NoticeKind.REFERENCE_NOT_FOUND]
    assert notices[0].subject == "missing"
    assert message.wire_text == "@missing hello"
    assert message.display_text == "hello"
    assert message.referenced_names == []


def test_read_error_skips_only_that_note():
    corpus = FakeCorpus({"a.md": "first", "b.md": "second"}, unreadable=("a.md",))
    message, notices = _prepare("@a and @b", corpus)
    assert [n.kind for n in notices] == [NoticeKind.READ_ERROR]
    assert notices[0].subject == "a"
    assert message.referenced_names == ["b"]
    assert "first" not in message.wire_text


def test_temporal_note_not_duplicated():
    corpus = FakeCorpus({"2024-01-09.md": "notes"})
    message, _ = _prepare("@2024-01-09 what happened yesterday", corpus)
    assert message.referenced_names == ["2024-01-09"]


def test_missing_daily_note_adds_nothing():
    corpus = FakeCorpus({"recipes.md": "soup"})
    message, notices = _prepare("what happened yesterday", corpus)
    assert notices == []
    assert message.wire_text == "what happened yesterday"
    assert message.referenced_names == []


def test_current_document_goes_last():
    corpus = FakeCorpus({"plan.md": "the plan", "ideas.md": "some ideas"})
    current = Document("plan", "plan.md")

    message, _ = _prepare("@ideas compare", corpus, include_current=True, current_document=current)
    assert message.referenced_names == ["ideas", "plan"]

    message, _ = _prepare("@plan compare", corpus, include_current=True, current_document=current)
    assert message.referenced_names == ["plan"]

    message, _ = _prepare("@ideas compare", corpus, include_current=False, current_document=current)
    assert message.referenced_names == ["ideas"]


def test_context_summary_appended_when_no_notes():
    tracker = ContextTracker(ConversationState(conversation_id="test"))
    tracker.commit_exchange("x", "y", question="machine learning helps machine learning projects")

    message, _ = _prepare("and then?", FakeCorpus({}), state=tracker.state)
    assert message.wire_text == (
        "and then?\n\n(Conversation context: machine, learning, helps, projects)"
    )


def test_daily_note_names():
    assert is_daily_note_name("2024-01-05")
    assert is_daily_note_name("Daily Log")
    assert is_daily_note_name("Work Journal")
    assert is_daily_note_name("Sunday plans")
    assert not is_daily_note_name("recipes")


def test_daily_note_names_in_every_locator_convention():
    for name in ["01-09-2024", "20240109", "01092024", "January 9, 2024"]:
        assert is_daily_note_name(name)


def test_non_iso_daily_note_gets_daily_phrasing():
    corpus = FakeCorpus({"20240109.md": "standup notes"})
    message, _ = _prepare("what happened yesterday", corpus)
    assert message.referenced_names == ["20240109"]
    assert message.wire_text.startswith("Your daily note for 2024-01-09.")
