"""Split a multi-note markdown payload at its top-level headings."""

import re
from dataclasses import dataclass

from md_outline.builder import split_lines

DEFAULT_TITLE = "New Note"
FALLBACK_TITLE = "Imported Note"

_H1_RE = re.compile(r"^#\s+(.+)")


@dataclass(frozen=True)
class Section:
    """One independently importable note.

    Attributes:
        title: Note title (the heading text, or a placeholder)
        body: Lines under the heading joined with newlines
    """

    title: str
    body: str


def split_sections(
    text: str,
    default_title: str = DEFAULT_TITLE,
    fallback_title: str = FALLBACK_TITLE,
) -> list[Section]:
    """Partition text into sections, one per '# Heading' line.

    Lines before the first heading form a section titled default_title, but
    only if at least one of them is non-blank. When the text contains no
    top-level heading at all, the whole input becomes a single section titled
    fallback_title with the text kept verbatim.

    Args:
        text: Full markdown payload
        default_title: Title for content preceding the first heading
        fallback_title: Title used when no heading exists

    Returns:
        Sections in input order

    Examples:
        >>> split_sections("# Hello\\nWorld")
        [Section(title='Hello', body='World')]
        >>> split_sections("just text")
        [Section(title='Imported Note', body='just text')]
    """
    sections: list[Section] = []
    title = default_title
    body: list[str] = []
    found_heading = False

    for line in split_lines(text):
        match = _H1_RE.match(line)
        if not match:
            body.append(line)
            continue

        if found_heading or any(entry.strip() for entry in body):
            sections.append(Section(title, "\n".join(body)))
        title = match.group(1).strip()
        body = []
        found_heading = True

    if not found_heading:
        return [Section(fallback_title, text)]

    sections.append(Section(title, "\n".join(body)))
    return sections
