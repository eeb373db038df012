"""Line classification for the markdown outline dialect.

Each non-blank line outside a fenced code block maps to exactly one block
type. Nesting depth comes from leading whitespace on the untrimmed line.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


DEFAULT_INDENT_WIDTH = 2
RULE_CONTENT = "---"
FENCE_MARKER = "```"

_RULE_RE = re.compile(r"^(\*{3,}|-{3,}|_{3,})$")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)")
_TASK_RE = re.compile(r"^[-*]\s+\[([ xX])\]\s+(.*)")
_BULLET_RE = re.compile(r"^[-*]\s+(.*)")
_ORDERED_RE = re.compile(r"^\d+\.\s+(.*)")
_QUOTE_PREFIX_RE = re.compile(r"^>\s*")


class BlockType(str, Enum):
    """Block types a line can classify as.

    Values are the type names the host understands, except HORIZONTAL_RULE
    which hosts receive as a TEXT item.
    """

    TEXT = "text"
    HEADING = "heading"
    TASK = "task"
    UNORDERED_LIST = "ulist"
    ORDERED_LIST = "olist"
    QUOTE = "quote"
    HORIZONTAL_RULE = "hr"


@dataclass(frozen=True)
class ClassifiedLine:
    """Result of classifying one raw line.

    Attributes:
        block_type: Detected block type
        content: Line content with its structural marker removed
        indent_level: Nesting level from leading whitespace
        heading_level: Number of '#' for headings, 0 otherwise
        checked: True/False for tasks, None for everything else
    """

    block_type: BlockType
    content: str
    indent_level: int = 0
    heading_level: int = 0
    checked: Optional[bool] = None


def indent_level(line: str, indent_width: int = DEFAULT_INDENT_WIDTH) -> int:
    """Nesting level of a raw line.

    Every leading whitespace character counts as one column (tabs are not
    expanded), and each indent_width columns is one level.
    """
    leading = len(line) - len(line.lstrip())
    return leading // indent_width


def is_fence(line: str) -> bool:
    """True if the line opens or closes a fenced code block."""
    return line.strip().startswith(FENCE_MARKER)


def fence_language(line: str) -> str:
    """Language tag that follows the backtick run of a fence line."""
    return line.strip().lstrip("`").strip()


def is_horizontal_rule(line: str) -> bool:
    """True if the trimmed line is three or more '*', '-' or '_' only."""
    return _RULE_RE.match(line.strip()) is not None


def classify_line(line: str, indent_width: int = DEFAULT_INDENT_WIDTH) -> ClassifiedLine:
    """Classify one raw line.

    Must not be called with fence lines; the outline builder handles those.
    Checks run in order and the first match wins: rule, heading, task,
    bullet, numbered item, quote, plain text.

    Args:
        line: Raw line including leading whitespace
        indent_width: Columns of leading whitespace per nesting level

    Returns:
        ClassifiedLine describing the line

    Examples:
        >>> line = classify_line("  - [x] Ship it")
        >>> line.block_type, line.content, line.indent_level, line.checked
        (<BlockType.TASK: 'task'>, 'Ship it', 1, True)
        >>> classify_line("### Notes").heading_level
        3
    """
    trimmed = line.strip()
    level = indent_level(line, indent_width)

    if _RULE_RE.match(trimmed):
        return ClassifiedLine(BlockType.HORIZONTAL_RULE, RULE_CONTENT, level)

    if match := _HEADING_RE.match(trimmed):
        return ClassifiedLine(
            BlockType.HEADING,
            match.group(2),
            level,
            heading_level=len(match.group(1)),
        )

    if match := _TASK_RE.match(trimmed):
        return ClassifiedLine(
            BlockType.TASK,
            match.group(2),
            level,
            checked=match.group(1).lower() == "x",
        )

    if match := _BULLET_RE.match(trimmed):
        return ClassifiedLine(BlockType.UNORDERED_LIST, match.group(1), level)

    if match := _ORDERED_RE.match(trimmed):
        return ClassifiedLine(BlockType.ORDERED_LIST, match.group(1), level)

    if trimmed.startswith(">"):
        return ClassifiedLine(BlockType.QUOTE, _QUOTE_PREFIX_RE.sub("", trimmed), level)

    return ClassifiedLine(BlockType.TEXT, trimmed, level)
