"""Transcript model.

Hides the representation of the conversation shown to the user: an ordered
list of immutable entries, of which only the last one may grow while a
response is streaming in.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Author of a transcript entry."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatEntry(BaseModel):
    """A single turn in the transcript."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who wrote the entry: 'user' or 'assistant'")
    content: str = Field(default="", description="Text of the entry")
    timestamp: datetime = Field(default_factory=datetime.now)


@dataclass(frozen=True)
class TranscriptEvent:
    """Notification sent to listeners after every transcript mutation."""

    kind: str  # "appended", "updated" or "reset"
    index: int
    entry: ChatEntry


TranscriptListener = Callable[[TranscriptEvent], None]


class Transcript:
    """Ordered sequence of chat entries.

    Entries are only ever appended, grown in place at the tail, or replaced
    wholesale by `reset`. They are never reordered or removed individually.
    """

    def __init__(self, entries: list[ChatEntry] | None = None) -> None:
        self._entries: list[ChatEntry] = list(entries or [])
        self._listeners: list[TranscriptListener] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ChatEntry]:
        return iter(list(self._entries))

    def __getitem__(self, index: int) -> ChatEntry:
        return self._entries[index]

    @property
    def entries(self) -> list[ChatEntry]:
        """Snapshot of the current entries."""
        return list(self._entries)

    @property
    def last(self) -> ChatEntry | None:
        """The most recent entry, or None when empty."""
        return self._entries[-1] if self._entries else None

    def subscribe(self, listener: TranscriptListener) -> None:
        """Register a listener called after every mutation."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: TranscriptListener) -> None:
        """Remove a previously registered listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def append(self, role: Role | str, content: str = "") -> ChatEntry:
        """Add a new entry at the end of the transcript."""
        entry = ChatEntry(role=Role(role), content=content)
        self._entries.append(entry)
        self._notify("appended", len(self._entries) - 1, entry)
        return entry

    def append_to_last(self, fragment: str) -> ChatEntry:
        """Grow the last entry by `fragment` as one read-modify-write.

        The tail is replaced by an assistant entry whose content is the old
        content followed by `fragment`. An empty fragment leaves the
        transcript untouched.

        Raises:
            ValueError: If the transcript has no entries
        """
        if not self._entries:
            raise ValueError("Cannot append to an empty transcript")

        index = len(self._entries) - 1
        previous = self._entries[index]
        if not fragment:
            return previous

        entry = previous.model_copy(
            update={"role": Role.ASSISTANT, "content": previous.content + fragment}
        )
        self._entries[index] = entry
        self._notify("updated", index, entry)
        return entry

    def reset(self, content: str) -> ChatEntry:
        """Replace every entry with a single assistant entry."""
        entry = ChatEntry(role=Role.ASSISTANT, content=content)
        self._entries = [entry]
        self._notify("reset", 0, entry)
        return entry

    def _notify(self, kind: str, index: int, entry: ChatEntry) -> None:
        event = TranscriptEvent(kind=kind, index=index, entry=entry)
        for listener in list(self._listeners):
            listener(event)
