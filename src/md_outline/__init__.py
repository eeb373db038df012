"""Markdown outline converter - turn flat markdown into nested line items.

This package holds the conversion core used by mdpaste. It knows nothing
about where items end up: callers hand the builder a LineItemSink and it
asks the sink to create each node.

Key features:
- Classify lines (headings, tasks, bullets, numbered items, quotes, rules)
- Rebuild nesting from two-space indentation
- Collapse fenced code blocks into a single item with a highlight language
- Tokenize inline bold/italic/code spans
- Split multi-note payloads at top-level headings

Example:
    >>> from md_outline import OutlineBuilder, split_lines
    >>> stats = await OutlineBuilder(record).build(split_lines("- a\\n  - b"))
"""

from md_outline.inline import Span, SpanKind, spans_to_text, tokenize_inline
from md_outline.classifier import BlockType, ClassifiedLine, classify_line, indent_level
from md_outline.sink import LineItem, LineItemSink
from md_outline.builder import BuildStats, NestingState, OutlineBuilder, split_lines
from md_outline.splitter import Section, split_sections

__version__ = "0.1.0"

__all__ = [
    "Span",
    "SpanKind",
    "spans_to_text",
    "tokenize_inline",
    "BlockType",
    "ClassifiedLine",
    "classify_line",
    "indent_level",
    "LineItem",
    "LineItemSink",
    "BuildStats",
    "NestingState",
    "OutlineBuilder",
    "split_lines",
    "Section",
    "split_sections",
]
