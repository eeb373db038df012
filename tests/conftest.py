"""Shared test fixtures for all test modules."""

from types import SimpleNamespace
from typing import Any, Optional

import pytest

from md_outline.classifier import BlockType
from md_outline.inline import Span, spans_to_text


class FakeItem:
    """Line item that records everything set on it."""

    def __init__(self, block_type: BlockType, parent: Optional["FakeItem"], after: Optional["FakeItem"]):
        self.block_type = block_type
        self.parent = parent
        self.after = after
        self.segments: list[Span] = []
        self.heading_size: Optional[int] = None
        self.meta: dict[str, Any] = {}
        self.language: Optional[str] = None

    def set_segments(self, segments: list[Span]) -> None:
        self.segments = list(segments)

    def set_heading_size(self, size: int) -> None:
        self.heading_size = size

    def set_meta_property(self, key: str, value: Any) -> None:
        self.meta[key] = value

    def set_highlight_language(self, language: str) -> None:
        self.language = language

    @property
    def text(self) -> str:
        return spans_to_text(self.segments)

    def __repr__(self) -> str:
        return f"FakeItem({self.block_type.value}, {self.text!r})"


class FakeRecord:
    """Line-item sink that keeps created items in creation order.

    Attributes:
        items: Created items, in creation order
        existing: Items returned by get_line_items()
        drop_calls: 0-based indices of create_line_item calls that return None
        commits: Number of commit() calls
    """

    def __init__(self, existing: Optional[list] = None, drop_calls: Optional[set[int]] = None):
        self.items: list[FakeItem] = []
        self.existing = existing or []
        self.drop_calls = drop_calls or set()
        self.calls = 0
        self.commits = 0

    async def create_line_item(self, parent, after, block_type):
        call = self.calls
        self.calls += 1
        if call in self.drop_calls:
            return None
        item = FakeItem(block_type, parent, after)
        self.items.append(item)
        return item

    async def get_line_items(self):
        return list(self.existing)

    async def commit(self) -> None:
        self.commits += 1

    def texts(self) -> list[str]:
        return [item.text for item in self.items]


class FakeStore:
    """Record store handing out FakeRecords."""

    def __init__(self, fail_titles: Optional[set[str]] = None, missing_titles: Optional[set[str]] = None):
        self.records: dict[str, FakeRecord] = {}
        self.titles: list[str] = []
        self.fail_titles = fail_titles or set()
        self.missing_titles = missing_titles or set()

    async def create_new_record(self, title: str) -> Optional[str]:
        if title in self.fail_titles:
            return None
        record_id = f"guid-{len(self.titles) + 1}"
        self.titles.append(title)
        if title not in self.missing_titles:
            self.records[record_id] = FakeRecord()
        return record_id

    def get_record(self, record_id: str) -> Optional[FakeRecord]:
        return self.records.get(record_id)


class FakeWorkspace:
    def __init__(self, active: Optional[FakeRecord] = None):
        self.active = active
        self.navigations: list[str] = []

    def get_active_record(self) -> Optional[FakeRecord]:
        return self.active

    def navigate_to(self, record_id: str) -> None:
        self.navigations.append(record_id)


class FakeClipboard:
    def __init__(self, text: Optional[str] = None, error: Optional[Exception] = None):
        self.text = text
        self.error = error

    async def read_text(self) -> Optional[str]:
        if self.error is not None:
            raise self.error
        return self.text


class FakeNotifier:
    def __init__(self):
        self.notifications: list[dict] = []

    def notify(self, title, message, *, level="info", auto_dismiss_ms=None) -> None:
        self.notifications.append(
            {"title": title, "message": message, "level": level, "auto_dismiss_ms": auto_dismiss_ms}
        )

    @property
    def titles(self) -> list[str]:
        return [n["title"] for n in self.notifications]


@pytest.fixture
def fakes():
    """Fake host collaborators (classes, instantiate per test)."""
    return SimpleNamespace(
        Record=FakeRecord,
        Store=FakeStore,
        Workspace=FakeWorkspace,
        Clipboard=FakeClipboard,
        Notifier=FakeNotifier,
    )


@pytest.fixture
def fake_record():
    """Empty FakeRecord."""
    return FakeRecord()


@pytest.fixture
def graph_dir(tmp_path):
    """Empty Logseq graph directory with a pages/ folder."""
    graph = tmp_path / "logseq-graph"
    (graph / "pages").mkdir(parents=True)
    return graph
