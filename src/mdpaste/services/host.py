"""Collaborator interfaces the importer depends on.

The paste workflow never talks to a concrete note store, clipboard or UI.
Everything is passed in through these protocols so the same importer runs
against a Logseq graph on disk, an in-memory preview, or test fakes.
"""

from typing import Optional, Protocol, Sequence, runtime_checkable

from md_outline.sink import LineItem, LineItemSink


@runtime_checkable
class Record(LineItemSink, Protocol):
    """A destination note that line items are created in."""

    async def get_line_items(self) -> Sequence[LineItem]:
        """Existing root-level items in document order."""
        ...

    async def commit(self) -> None:
        """Persist items created so far."""
        ...


@runtime_checkable
class RecordStore(Protocol):
    """Creates and looks up notes."""

    async def create_new_record(self, title: str) -> Optional[str]:
        """Create an empty note and return its id, or None on failure."""
        ...

    def get_record(self, record_id: str) -> Optional[Record]:
        """Look up a note by id."""
        ...


@runtime_checkable
class Workspace(Protocol):
    """What the user is currently looking at."""

    def get_active_record(self) -> Optional[Record]:
        """The focused note, or None when no note is focused."""
        ...

    def navigate_to(self, record_id: str) -> None:
        """Bring a note into view."""
        ...


@runtime_checkable
class ClipboardSource(Protocol):
    """Provides the markdown payload."""

    async def read_text(self) -> Optional[str]:
        """Full clipboard text, or None when there is nothing to read."""
        ...


@runtime_checkable
class Notifier(Protocol):
    """Surfaces messages to the user."""

    def notify(
        self,
        title: str,
        message: str,
        *,
        level: str = "info",
        auto_dismiss_ms: Optional[int] = None,
    ) -> None:
        ...
