"""Host-side interfaces the outline builder writes into.

The builder never constructs outline nodes itself. It asks a LineItemSink
(usually a note/record in the host document) to create each item and then
configures the returned item through the LineItem setters.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from md_outline.classifier import BlockType
from md_outline.inline import Span


@runtime_checkable
class LineItem(Protocol):
    """A created node in the destination outline."""

    def set_segments(self, segments: list[Span]) -> None: ...

    def set_heading_size(self, size: int) -> None: ...

    def set_meta_property(self, key: str, value: Any) -> None: ...

    def set_highlight_language(self, language: str) -> None: ...


@runtime_checkable
class LineItemSink(Protocol):
    """Creates line items inside one destination document."""

    async def create_line_item(
        self,
        parent: Optional[LineItem],
        after: Optional[LineItem],
        block_type: BlockType,
    ) -> Optional[LineItem]:
        """Create an item under parent, positioned right after `after`.

        A None parent means the document root. A None `after` means the first
        position under parent. Returns None when the host cannot create the
        item.
        """
        ...
