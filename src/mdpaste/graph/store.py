"""Logseq graph as a note store.

Each note is a page file under <graph>/pages. PageRecord is the line-item
sink the outline builder writes into; GraphStore creates and looks up pages;
GraphWorkspace answers which page is "focused" for an in-place paste.
"""

from pathlib import Path
from typing import Callable, Optional

import structlog

from md_outline.classifier import BlockType
from mdpaste.graph.files import atomic_write
from mdpaste.graph.pages import PageItem, parse_page, render_page
from mdpaste.services.exceptions import PageNotFoundError

logger = structlog.get_logger()

# Logseq's "triple-lowbar" file name format for namespaced pages
NAMESPACE_SEPARATOR = "___"
UNTITLED_PAGE = "Untitled"


class PageRecord:
    """One Logseq page that line items can be created in.

    Attributes:
        name: Page name (note title)
        path: Page file, or None for an in-memory page
        items: Root items in order
        frontmatter: Lines before the first bullet
        indent_str: Indentation unit used when rendering
    """

    def __init__(
        self,
        name: str,
        path: Optional[Path] = None,
        items: Optional[list[PageItem]] = None,
        frontmatter: Optional[list[str]] = None,
        indent_str: str = "  ",
        mtime: Optional[float] = None,
    ):
        self.name = name
        self.path = path
        self.items = items if items is not None else []
        self.frontmatter = frontmatter if frontmatter is not None else []
        self.indent_str = indent_str
        self._mtime = mtime

    @classmethod
    def load(cls, name: str, path: Path) -> "PageRecord":
        """Load an existing page file.

        Raises:
            FileNotFoundError: If the page file doesn't exist
        """
        mtime = path.stat().st_mtime
        record = cls(name, path, mtime=mtime)
        record.frontmatter, record.items, record.indent_str = parse_page(
            path.read_text(encoding="utf-8"), page=record
        )
        logger.debug("page_loaded", page=name, root_items=len(record.items))
        return record

    async def create_line_item(
        self,
        parent: Optional[PageItem],
        after: Optional[PageItem],
        block_type: BlockType,
    ) -> Optional[PageItem]:
        """Insert a new item under parent right after `after`.

        An `after` anchor that isn't one of parent's children (for example a
        nested item picked as "last item" of an existing page) puts the new
        item at the end of parent's children.

        Returns:
            The new item, or None if parent belongs to a different page
        """
        if parent is not None and parent.page is not self:
            logger.debug("foreign_parent_rejected", page=self.name)
            return None

        siblings = parent.children if parent is not None else self.items
        if after is None:
            index = 0
        else:
            index = next(
                (i + 1 for i, sibling in enumerate(siblings) if sibling is after),
                len(siblings),
            )

        item = PageItem(block_type=block_type, page=self)
        siblings.insert(index, item)
        return item

    async def get_line_items(self) -> list[PageItem]:
        return list(self.items)

    def render(self) -> str:
        """Page content as Logseq markdown (with trailing newline)."""
        return render_page(self.frontmatter, self.items, self.indent_str) + "\n"

    async def commit(self) -> None:
        """Write the page file. In-memory pages are left alone."""
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        atomic_write(self.path, self.render(), expected_mtime=self._mtime)
        self._mtime = self.path.stat().st_mtime
        logger.info("page_written", page=self.name, path=str(self.path))


class GraphStore:
    """Creates and opens pages in a Logseq graph directory.

    Pages opened or created through the store are cached, so every lookup
    of the same page returns the same PageRecord.

    Example:
        >>> store = GraphStore(Path("~/logseq").expanduser())
        >>> name = await store.create_new_record("Meeting notes")
        >>> record = store.get_record(name)
    """

    def __init__(self, graph_path: Path):
        """Initialize with graph root path.

        Args:
            graph_path: Path to Logseq graph directory

        Raises:
            ValueError: If graph_path doesn't exist or isn't a directory
        """
        if not graph_path.exists():
            raise ValueError(f"Graph path does not exist: {graph_path}")
        if not graph_path.is_dir():
            raise ValueError(f"Graph path is not a directory: {graph_path}")

        self.graph_path = graph_path
        # Keyed by casefolded page name
        self._records: dict[str, PageRecord] = {}

    @property
    def pages_dir(self) -> Path:
        return self.graph_path / "pages"

    def get_page_path(self, page_name: str) -> Path:
        """Get path to a page file (pages/<name>.md, '/' stored as '___')."""
        return self.pages_dir / f"{page_name.replace('/', NAMESPACE_SEPARATOR)}.md"

    def find_page_path(self, page_name: str) -> Optional[Path]:
        """Find the file of an existing page, matching its name case-insensitively.

        Logseq treats "Todo" and "todo" as the same page.

        Returns:
            Path to the page file, or None if there is none
        """
        path = self.get_page_path(page_name)
        if path.is_file():
            return path
        if not self.pages_dir.is_dir():
            return None

        wanted = path.name.casefold()
        for candidate in self.pages_dir.glob("*.md"):
            if candidate.name.casefold() == wanted:
                return candidate
        return None

    def page_exists(self, page_name: str) -> bool:
        return page_name.casefold() in self._records or self.find_page_path(page_name) is not None

    def _unique_name(self, title: str) -> str:
        name = title
        counter = 2
        while self.page_exists(name):
            name = f"{title} ({counter})"
            counter += 1
        return name

    async def create_new_record(self, title: str) -> Optional[str]:
        """Reserve a new, empty page named after title.

        The file is written on the record's first commit. A title that is
        already taken gets a numeric suffix.

        Returns:
            Page name, or None if the pages directory can't be created
        """
        try:
            self.pages_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("pages_dir_unavailable", path=str(self.pages_dir), error=str(e))
            return None

        name = self._unique_name(title.strip() or UNTITLED_PAGE)
        self._records[name.casefold()] = PageRecord(name, self.get_page_path(name))
        logger.info("page_created", page=name)
        return name

    def get_record(self, record_id: str) -> Optional[PageRecord]:
        """Open a page by name, or None if it doesn't exist."""
        key = record_id.casefold()
        if key in self._records:
            return self._records[key]

        path = self.find_page_path(record_id)
        if path is None:
            return None

        record = PageRecord.load(record_id, path)
        self._records[key] = record
        return record


class GraphWorkspace:
    """Workspace view of a graph: an optional focused page plus navigation."""

    def __init__(
        self,
        store: GraphStore,
        active_page: Optional[str] = None,
        on_navigate: Optional[Callable[[str], None]] = None,
    ):
        """Initialize workspace.

        Args:
            store: Graph store pages are opened from
            active_page: Page to paste into, None to import new pages
            on_navigate: Called with the page name when a page is opened

        Raises:
            PageNotFoundError: If active_page doesn't exist
        """
        self.store = store
        self.active_page = active_page
        self.on_navigate = on_navigate
        self.navigated_to: Optional[str] = None

        if active_page is not None and not store.page_exists(active_page):
            raise PageNotFoundError(active_page)

    def get_active_record(self) -> Optional[PageRecord]:
        if self.active_page is None:
            return None
        return self.store.get_record(self.active_page)

    def navigate_to(self, record_id: str) -> None:
        self.navigated_to = record_id
        if self.on_navigate is not None:
            self.on_navigate(record_id)


class PreviewStore:
    """In-memory store and workspace used for dry runs.

    Never has a focused page, so every paste imports new pages, and nothing
    is written anywhere.
    """

    def __init__(self) -> None:
        self.records: dict[str, PageRecord] = {}
        self.navigated_to: Optional[str] = None

    async def create_new_record(self, title: str) -> Optional[str]:
        base = title.strip() or UNTITLED_PAGE
        name = base
        counter = 2
        while name.casefold() in {existing.casefold() for existing in self.records}:
            name = f"{base} ({counter})"
            counter += 1
        self.records[name] = PageRecord(name)
        return name

    def get_record(self, record_id: str) -> Optional[PageRecord]:
        return self.records.get(record_id)

    def get_active_record(self) -> Optional[PageRecord]:
        return None

    def navigate_to(self, record_id: str) -> None:
        self.navigated_to = record_id
