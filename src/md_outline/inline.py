"""Inline span tokenizer for a single line of markdown content.

Splits block content (with its list marker or heading hashes already removed)
into styled spans. Only a small dialect is understood: inline code, bold,
italic, strikethrough and links. Strikethrough and links are recognised so
their delimiters don't get misread as emphasis, but they are flattened into
plain text spans.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class SpanKind(str, Enum):
    """Styles a span can carry."""

    TEXT = "text"
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"


@dataclass(frozen=True)
class Span:
    """One styled run of text.

    Attributes:
        kind: Span style
        text: Text with the styling delimiters removed
    """

    kind: SpanKind
    text: str

    def to_dict(self) -> dict:
        """Return the host-facing segment form ({"type": ..., "text": ...})."""
        return {"type": self.kind.value, "text": self.text}


@dataclass(frozen=True)
class _Matcher:
    name: str
    pattern: re.Pattern
    to_span: Callable[[re.Match], Span]


# Order matters: two-character delimiters must be tried before the
# one-character ones so "**x**" is bold rather than two italics.
_MATCHERS: tuple[_Matcher, ...] = (
    _Matcher(
        "code",
        re.compile(r"(`+)(.*?)\1"),
        lambda m: Span(SpanKind.CODE, m.group(2)),
    ),
    _Matcher(
        "bold",
        re.compile(r"(\*\*|__)(.*?)\1"),
        lambda m: Span(SpanKind.BOLD, m.group(2)),
    ),
    _Matcher(
        "italic",
        re.compile(r"(\*|_)(.*?)\1"),
        lambda m: Span(SpanKind.ITALIC, m.group(2)),
    ),
    _Matcher(
        "strike",
        re.compile(r"~~(.*?)~~"),
        lambda m: Span(SpanKind.TEXT, m.group(0)),
    ),
    _Matcher(
        "link",
        re.compile(r"\[([^\]]+)\]\(([^)]+)\)"),
        lambda m: Span(SpanKind.TEXT, m.group(1)),
    ),
)


def _next_token(text: str, pos: int) -> Optional[tuple[re.Match, _Matcher]]:
    """Find the leftmost token at or after pos.

    Ties on start position go to the matcher listed first in _MATCHERS.
    """
    best: Optional[tuple[re.Match, _Matcher]] = None
    for matcher in _MATCHERS:
        match = matcher.pattern.search(text, pos)
        if match is None:
            continue
        if best is None or match.start() < best[0].start():
            best = (match, matcher)
    return best


def tokenize_inline(text: str) -> list[Span]:
    """Split line content into styled spans.

    Text between and around tokens is kept verbatim as TEXT spans. The
    result is never empty: content without any characters yields a single
    empty TEXT span.

    Args:
        text: Block content without its structural prefix

    Returns:
        Ordered list of spans

    Examples:
        >>> [span.to_dict() for span in tokenize_inline("Hello **World**")]
        [{'type': 'text', 'text': 'Hello '}, {'type': 'bold', 'text': 'World'}]
        >>> spans_to_text(tokenize_inline("see [docs](https://example.com)"))
        'see docs'
    """
    spans: list[Span] = []
    pos = 0

    while pos < len(text):
        found = _next_token(text, pos)
        if found is None:
            break

        match, matcher = found
        if match.start() > pos:
            spans.append(Span(SpanKind.TEXT, text[pos:match.start()]))
        spans.append(matcher.to_span(match))
        pos = match.end()

    if pos < len(text):
        spans.append(Span(SpanKind.TEXT, text[pos:]))

    if not spans:
        spans.append(Span(SpanKind.TEXT, text))

    return spans


def spans_to_text(spans: list[Span]) -> str:
    """Concatenate span text, ignoring styles."""
    return "".join(span.text for span in spans)
