"""Unit tests for the transcript model."""
import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from streamchat.transcript import ChatEntry, Role, Transcript


class TestChatEntry:
    """Tests for ChatEntry model."""

    def test_entry_is_frozen(self):
        """Entries cannot be mutated in place."""
        entry = ChatEntry(role=Role.USER, content="hello")
        with pytest.raises(ValidationError):
            entry.content = "changed"  # type: ignore[misc]

    def test_role_accepts_plain_strings(self):
        entry = ChatEntry(role="assistant", content="")
        assert entry.role == Role.ASSISTANT

    def test_unknown_role_fails(self):
        with pytest.raises(ValidationError):
            ChatEntry(role="system", content="x")


class TestTranscript:
    """Tests for Transcript operations."""

    def test_append_keeps_insertion_order(self):
        transcript = Transcript()
        transcript.append(Role.USER, "one")
        transcript.append(Role.ASSISTANT, "two")

        assert [e.content for e in transcript] == ["one", "two"]
        assert transcript.last.content == "two"
        assert len(transcript) == 2

    def test_append_to_last_concatenates(self):
        transcript = Transcript()
        transcript.append(Role.ASSISTANT, "")
        transcript.append_to_last("Hi")
        transcript.append_to_last(" there")

        assert transcript.last == transcript[-1]
        assert transcript.last.content == "Hi there"
        assert transcript.last.role == Role.ASSISTANT

    def test_append_to_last_replaces_entry(self):
        """The superseded entry object is left untouched."""
        transcript = Transcript()
        before = transcript.append(Role.ASSISTANT, "a")
        after = transcript.append_to_last("b")

        assert before.content == "a"
        assert after.content == "ab"
        assert after.timestamp == before.timestamp

    def test_append_to_last_ignores_empty_fragment(self):
        transcript = Transcript()
        transcript.append(Role.ASSISTANT, "a")
        events = []
        transcript.subscribe(events.append)

        transcript.append_to_last("")

        assert transcript.last.content == "a"
        assert events == []

    def test_append_to_last_on_empty_transcript_fails(self):
        with pytest.raises(ValueError):
            Transcript().append_to_last("x")

    def test_reset_replaces_everything(self):
        transcript = Transcript()
        transcript.append(Role.USER, "q")
        transcript.append(Role.ASSISTANT, "a")

        transcript.reset("cleared")

        assert len(transcript) == 1
        assert transcript.last.role == Role.ASSISTANT
        assert transcript.last.content == "cleared"

    def test_entries_is_a_snapshot(self):
        transcript = Transcript()
        transcript.append(Role.USER, "q")
        snapshot = transcript.entries
        transcript.append(Role.ASSISTANT, "a")

        assert len(snapshot) == 1

    def test_listeners_receive_every_mutation(self):
        transcript = Transcript()
        events = []
        transcript.subscribe(events.append)

        transcript.append(Role.USER, "q")
        transcript.append(Role.ASSISTANT, "")
        transcript.append_to_last("a")
        transcript.reset("r")

        assert [(e.kind, e.index) for e in events] == [
            ("appended", 0),
            ("appended", 1),
            ("updated", 1),
            ("reset", 0),
        ]
        assert events[2].entry.content == "a"

    def test_unsubscribe_stops_notifications(self):
        transcript = Transcript()
        events = []
        transcript.subscribe(events.append)
        transcript.unsubscribe(events.append)

        transcript.append(Role.USER, "q")

        assert events == []

    @given(st.lists(st.text(), max_size=20))
    def test_appends_concatenate_in_order(self, fragments: list[str]):
        """Property test: the target holds the fragments joined in order."""
        transcript = Transcript()
        transcript.append(Role.USER, "prompt")
        transcript.append(Role.ASSISTANT, "")
        lengths = []

        for fragment in fragments:
            transcript.append_to_last(fragment)
            lengths.append(len(transcript.last.content))

        assert transcript.last.content == "".join(fragments)
        assert lengths == sorted(lengths)
        assert transcript[0].content == "prompt"
