"""Outline builder: turns markdown lines into nested line items.

One pass over the input, one line at a time. Two pieces of state are carried
between lines:

- whether we are inside a fenced code block (and what it has buffered)
- a NestingState that remembers, per indentation level, which item owns the
  next deeper level and which item the next sibling must be inserted after

Fenced code blocks and horizontal rules always land at the root and close
any open nesting.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

import structlog

from md_outline.classifier import (
    DEFAULT_INDENT_WIDTH,
    RULE_CONTENT,
    BlockType,
    classify_line,
    fence_language,
    is_fence,
    is_horizontal_rule,
)
from md_outline.inline import Span, SpanKind, tokenize_inline
from md_outline.sink import LineItem, LineItemSink

logger = structlog.get_logger()

DEFAULT_CODE_LANGUAGE = "plaintext"

_LINE_BREAK_RE = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """Split text on LF or CRLF line breaks."""
    return _LINE_BREAK_RE.split(text)


@dataclass
class NestingState:
    """Parent and insertion anchors, indexed by indentation level.

    parents[level] is the item that owns children at `level` (None for the
    document root). last_sibling[level] is the most recently created item at
    `level`, i.e. where the next item at that level goes after.

    Attributes:
        parents: Open ancestor chain; always at least [None]
        last_sibling: Insertion anchors; missing entries mean "first position"
    """

    parents: list[Optional[LineItem]] = field(default_factory=lambda: [None])
    last_sibling: list[Optional[LineItem]] = field(default_factory=lambda: [None])

    @classmethod
    def starting_after(cls, item: Optional[LineItem]) -> "NestingState":
        """State whose first root item goes after an existing item."""
        return cls(parents=[None], last_sibling=[item])

    @property
    def deepest_level(self) -> int:
        """Deepest level a new item may be created at."""
        return len(self.parents) - 1

    def clamp(self, level: int) -> int:
        """Clamp a requested level to the currently open chain."""
        return min(level, self.deepest_level)

    def anchors(self, level: int) -> tuple[Optional[LineItem], Optional[LineItem]]:
        """(parent, after) for a new item at an already clamped level."""
        after = self.last_sibling[level] if level < len(self.last_sibling) else None
        return self.parents[level], after

    def record(self, level: int, item: LineItem) -> None:
        """Register a freshly created item at `level`.

        The item becomes the anchor for its level and the parent of the next
        level down. Anything tracked below `level` belongs to a previous
        subtree and is discarded.
        """
        while len(self.last_sibling) <= level:
            self.last_sibling.append(None)
        self.last_sibling[level] = item
        del self.last_sibling[level + 1:]

        del self.parents[level + 1:]
        self.parents.append(item)

    def record_root_row(self, item: LineItem) -> None:
        """Register a blank row at the root without touching nesting."""
        self.last_sibling[0] = item

    def reset_to_root(self, item: LineItem) -> None:
        """Register a root item that closes all open nesting."""
        self.parents = [None]
        self.last_sibling = [item]


@dataclass
class BuildStats:
    """Counts collected during one builder pass.

    Attributes:
        created: Items the sink created
        dropped: Lines (or code blocks) the sink refused
    """

    created: int = 0
    dropped: int = 0


class OutlineBuilder:
    """Materializes markdown lines as items in a LineItemSink.

    Creation calls are awaited strictly one after another: every created
    item feeds the anchors of the following line.

    Example:
        >>> builder = OutlineBuilder(record)
        >>> stats = await builder.build(split_lines("- a\\n  - b"))
        >>> stats.created
        2
    """

    def __init__(
        self,
        sink: LineItemSink,
        code_language: str = DEFAULT_CODE_LANGUAGE,
        indent_width: int = DEFAULT_INDENT_WIDTH,
    ):
        """Initialize builder.

        Args:
            sink: Destination that creates the items
            code_language: Highlight language for fences without a tag
            indent_width: Columns of leading whitespace per nesting level
        """
        self.sink = sink
        self.code_language = code_language
        self.indent_width = indent_width

    async def build(
        self,
        lines: Iterable[str],
        initial_last_item: Optional[LineItem] = None,
    ) -> BuildStats:
        """Run one pass over the lines.

        Args:
            lines: Raw markdown lines
            initial_last_item: Existing root item to append after (None
                starts at the top of an empty document)

        Returns:
            BuildStats for the pass
        """
        state = NestingState.starting_after(initial_last_item)
        stats = BuildStats()

        in_code_block = False
        code_language: Optional[str] = None
        code_lines: list[str] = []

        for line in lines:
            if not line.strip():
                if in_code_block:
                    code_lines.append("")
                else:
                    await self._add_blank_row(state, stats)
                continue

            if is_fence(line):
                if in_code_block:
                    await self._add_code_block(state, stats, code_lines, code_language)
                    in_code_block = False
                    code_lines = []
                    code_language = None
                else:
                    in_code_block = True
                    code_language = fence_language(line) or self.code_language
                continue

            if in_code_block:
                code_lines.append(line)
                continue

            if is_horizontal_rule(line):
                await self._add_rule(state, stats)
                continue

            await self._add_line(state, stats, line)

        if in_code_block:
            logger.warning(
                "unterminated_code_block_dropped",
                language=code_language,
                line_count=len(code_lines),
            )

        logger.debug("outline_built", created=stats.created, dropped=stats.dropped)
        return stats

    async def _create(
        self,
        stats: BuildStats,
        parent: Optional[LineItem],
        after: Optional[LineItem],
        block_type: BlockType,
    ) -> Optional[LineItem]:
        item = await self.sink.create_line_item(parent, after, block_type)
        if item is None:
            stats.dropped += 1
            logger.debug("line_item_dropped", block_type=block_type.value)
        else:
            stats.created += 1
        return item

    async def _add_blank_row(self, state: NestingState, stats: BuildStats) -> None:
        item = await self._create(stats, None, state.last_sibling[0], BlockType.TEXT)
        if item is not None:
            item.set_segments([Span(SpanKind.TEXT, "")])
            state.record_root_row(item)

    async def _add_code_block(
        self,
        state: NestingState,
        stats: BuildStats,
        code_lines: list[str],
        language: Optional[str],
    ) -> None:
        item = await self._create(stats, None, state.last_sibling[0], BlockType.TEXT)
        if item is not None:
            item.set_segments([Span(SpanKind.TEXT, "\n".join(code_lines))])
            item.set_highlight_language(language or self.code_language)
            state.reset_to_root(item)

    async def _add_rule(self, state: NestingState, stats: BuildStats) -> None:
        item = await self._create(stats, None, state.last_sibling[0], BlockType.TEXT)
        if item is not None:
            item.set_segments([Span(SpanKind.TEXT, RULE_CONTENT)])
            state.reset_to_root(item)

    async def _add_line(self, state: NestingState, stats: BuildStats, line: str) -> None:
        classified = classify_line(line, self.indent_width)
        level = state.clamp(classified.indent_level)
        parent, after = state.anchors(level)

        item = await self._create(stats, parent, after, classified.block_type)
        if item is None:
            return

        if classified.block_type is BlockType.HEADING:
            item.set_heading_size(classified.heading_level)
        item.set_segments(tokenize_inline(classified.content))
        if classified.block_type is BlockType.TASK and classified.checked:
            item.set_meta_property("checked", 1)

        state.record(level, item)
