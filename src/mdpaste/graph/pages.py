"""Logseq page model: outline items that render to Logseq markdown.

A page is a list of root PageItems plus any frontmatter lines (page
properties) that precede the first bullet. Items created by the outline
builder carry a block type, spans and properties and are rendered on demand.
Items read from an existing page file keep their original lines untouched.
"""

from typing import Any, Optional

from md_outline.classifier import BlockType
from md_outline.inline import Span, SpanKind

ORDER_LIST_PROPERTY = "logseq.order-list-type:: number"

# (preferred, alternate); "*" also delimits inside words and around "_"
_SPAN_DELIMITERS = {
    SpanKind.BOLD: ("**", "__"),
    SpanKind.ITALIC: ("*", "_"),
}


def render_spans(spans: list[Span]) -> str:
    """Render spans back to inline markdown.

    Examples:
        >>> render_spans([Span(SpanKind.TEXT, "Hello "), Span(SpanKind.BOLD, "World")])
        'Hello **World**'
    """
    parts = []
    for span in spans:
        if span.kind is SpanKind.CODE:
            fence = "``" if "`" in span.text else "`"
            parts.append(f"{fence}{span.text}{fence}")
        elif span.kind in _SPAN_DELIMITERS:
            marker, alternate = _SPAN_DELIMITERS[span.kind]
            if "*" in span.text and "_" not in span.text:
                marker = alternate
            parts.append(f"{marker}{span.text}{marker}")
        else:
            parts.append(span.text)
    return "".join(parts)


class PageItem:
    """One bullet on a Logseq page.

    Attributes:
        page: Page the item belongs to (None while detached)
        block_type: Type requested by the builder, None for items parsed from disk
        lines: Original content lines of a parsed item
        segments: Inline spans set by the builder
        heading_size: Heading level, 0 for non-headings
        properties: Meta properties set by the builder
        language: Highlight language for code items
        children: Nested items in order
    """

    def __init__(
        self,
        block_type: Optional[BlockType] = None,
        lines: Optional[list[str]] = None,
        page: Any = None,
    ):
        self.page = page
        self.block_type = block_type
        self.lines = lines if lines is not None else []
        self.segments: list[Span] = []
        self.heading_size = 0
        self.properties: dict[str, Any] = {}
        self.language: Optional[str] = None
        self.children: list["PageItem"] = []

    def __repr__(self) -> str:
        kind = self.block_type.value if self.block_type else "raw"
        first = self.content_lines()[0] if self.content_lines() else ""
        return f"PageItem({kind}, {first!r}, children={len(self.children)})"

    def set_segments(self, segments: list[Span]) -> None:
        self.segments = list(segments)

    def set_heading_size(self, size: int) -> None:
        self.heading_size = size

    def set_meta_property(self, key: str, value: Any) -> None:
        self.properties[key] = value

    def set_highlight_language(self, language: str) -> None:
        self.language = language

    @property
    def text(self) -> str:
        """Inline markdown of the item's spans."""
        return render_spans(self.segments)

    @property
    def checked(self) -> bool:
        return bool(self.properties.get("checked"))

    def content_lines(self) -> list[str]:
        """Block content as Logseq lines (first line, then continuation lines).

        Returns:
            Lines without bullet or indentation
        """
        if self.block_type is None:
            return list(self.lines)

        text = self.text

        if self.language is not None:
            return [f"```{self.language}", *text.split("\n"), "```"]

        if self.block_type is BlockType.HEADING and self.heading_size:
            first = f"{'#' * self.heading_size} {text}"
        elif self.block_type is BlockType.TASK:
            first = f"{'DONE' if self.checked else 'TODO'} {text}"
        elif self.block_type is BlockType.QUOTE:
            first = f"> {text}"
        else:
            first = text

        lines = [first]
        if self.block_type is BlockType.ORDERED_LIST:
            lines.append(ORDER_LIST_PROPERTY)
        for key, value in self.properties.items():
            if key == "checked":
                continue
            lines.append(f"{key}:: {value}")
        return lines


def render_items(items: list[PageItem], indent_str: str = "  ") -> list[str]:
    """Render items (and their children) as Logseq bullet lines."""
    lines: list[str] = []

    def render_item(item: PageItem, depth: int) -> None:
        indent = indent_str * depth
        content = item.content_lines() or [""]

        if content[0] == "":
            lines.append(f"{indent}-")  # Empty bullet, no space
        else:
            lines.append(f"{indent}- {content[0]}")

        for line in content[1:]:
            lines.append(f"{indent}  {line}" if line else "")

        for child in item.children:
            render_item(child, depth + 1)

    for item in items:
        render_item(item, 0)

    return lines


def render_page(frontmatter: list[str], items: list[PageItem], indent_str: str = "  ") -> str:
    """Render a full page: frontmatter first, then the bullet tree."""
    return "\n".join([*frontmatter, *render_items(items, indent_str)])


def _is_bullet_line(line: str) -> bool:
    """Check if a line is a bullet (including empty bullets)."""
    stripped = line.lstrip()
    return stripped == "-" or stripped.startswith("- ")


def detect_indentation(lines: list[str]) -> str:
    """Detect the page's indentation unit from its indented bullets.

    Falls back to 2 spaces if no bullet is indented.
    """
    indents = []
    for line in lines:
        if not line.strip() or not _is_bullet_line(line):
            continue
        stripped = line.lstrip()
        if line != stripped:
            indents.append(line[: len(line) - len(stripped)])

    if not indents:
        return "  "
    return min(indents, key=len)


def parse_page(markdown: str, page: Any = None) -> tuple[list[str], list[PageItem], str]:
    """Parse an existing page file into frontmatter and item tree.

    Lines before the first bullet are frontmatter. Each bullet takes every
    following non-bullet line as continuation content (lines inside a code
    fence never count as bullets). Bullets whose indentation skips a level
    are attached to the root.

    Args:
        markdown: Page file content
        page: Owner assigned to every parsed item

    Returns:
        (frontmatter lines, root items, indentation unit)
    """
    if not markdown.strip():
        return [], [], "  "

    lines = markdown.split("\n")
    if markdown.endswith("\n"):
        lines.pop()

    indent_str = detect_indentation(lines)
    frontmatter: list[str] = []
    roots: list[PageItem] = []
    stack: list[tuple[int, PageItem]] = []
    current: Optional[PageItem] = None
    continuation_indent = ""
    in_fence = False

    for line in lines:
        if not in_fence and _is_bullet_line(line):
            leading = line[: len(line) - len(line.lstrip())]
            level = leading.count(indent_str)
            stripped = line.lstrip()
            first = "" if stripped == "-" else stripped[2:]

            current = PageItem(lines=[first], page=page)
            continuation_indent = leading + "  "
            in_fence = first.startswith("```") and not _closes_fence(first)

            while stack and stack[-1][0] >= level:
                stack.pop()
            if level > 0 and stack and stack[-1][0] == level - 1:
                stack[-1][1].children.append(current)
            else:
                level = 0
                roots.append(current)
                stack = []
            stack.append((level, current))
            continue

        if current is None:
            frontmatter.append(line)
            continue

        if line.lstrip().startswith("```"):
            in_fence = not in_fence
        if line.startswith(continuation_indent):
            current.lines.append(line[len(continuation_indent):])
        else:
            current.lines.append(line.lstrip())

    return frontmatter, roots, indent_str


def _closes_fence(first_line: str) -> bool:
    """True for a one-line fence such as ```code```."""
    return len(first_line) > 3 and first_line.rstrip().endswith("```")
