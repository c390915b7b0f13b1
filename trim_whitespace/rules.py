"""Whitespace rewriting rules.

Each rule is a pure ``str -> str`` function. Line boundaries follow the
editor's notion of a line: a line starts at the beginning of the text or after
any line terminator (``\\n``, ``\\r``, U+2028, U+2029), and ends before one or at
the end of the text. ``\\r\\n`` is a single terminator. Python's ``^``/``$``
only know about ``\\n``, so the patterns below use explicit lookarounds instead.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .constants import (
    CHAR_NBSP,
    CHAR_SPACE,
    CHAR_TAB,
    LINE_BREAK_CHARS,
    LINE_END,
    LINE_ENDING_PATTERN,
    LINE_START,
    LIST_MARKER,
    TABLE_DELIMITER,
)

_MULTIPLE_SPACES_PATTERN = re.compile(f"{CHAR_SPACE}{{2,}}")
_MULTIPLE_TABS_PATTERN = re.compile(f"{CHAR_TAB}{{2,}}")
_BLANK_LINES_PATTERN = re.compile(rf"{LINE_START}\s+{LINE_END}")


def _character_class(chars: Iterable[str]) -> str:
    return "".join(re.escape(char) for char in chars)


def convert_non_breaking_spaces(text: str) -> str:
    """Rewrite every non-breaking space (U+00A0) as an ordinary space."""
    return text.replace(CHAR_NBSP, CHAR_SPACE)


def trim_trailing_characters(text: str, chars: Iterable[str]) -> str:
    """Remove runs of `chars` found immediately before each line ending.

    Args:
        text: Text to trim.
        chars: Characters eligible for removal, such as ``" "`` and ``"\\t"``.

    Returns:
        str: Text without trailing runs of `chars`.

    Examples:
        trim_trailing_characters("a \\nb\\t\\n", [" "])  # "a\\nb\\t\\n"
        trim_trailing_characters("a \\t \\n", [" "])  # "a \\t\\n"
    """
    char_class = _character_class(chars)
    if not char_class:
        return text
    return re.sub(rf"[{char_class}]+{LINE_END}", "", text)


def trim_trailing_lines(text: str, max_keep: int = 0) -> str:
    """Remove whitespace at the very end of the document.

    Up to `max_keep` of the line endings found in the removed tail are put
    back, in their original form (``\\r\\n`` counts as one line ending).

    Examples:
        trim_trailing_lines("text\\n \\n\\n")  # "text"
        trim_trailing_lines("text\\n\\n\\n\\n\\n", max_keep=3)  # "text\\n\\n\\n"
    """
    stripped = text.rstrip()
    if max_keep <= 0:
        return stripped

    tail = text[len(stripped) :]
    kept = LINE_ENDING_PATTERN.findall(tail)[:max_keep]
    return stripped + "".join(kept)


def trim_leading_characters(
    text: str, chars: Iterable[str], preserve_lists: bool = False
) -> str:
    """Remove runs of `chars` at the start of each line.

    With `preserve_lists`, a run that leads (possibly through more spaces or
    tabs) into a list marker such as ``*``, ``-``, ``+`` or ``1.`` is left
    alone, because it sets the nesting level of the list item.

    Examples:
        trim_leading_characters("  text\\n", [" "])  # "text\\n"
        trim_leading_characters("    * item\\n", [" "], preserve_lists=True)  # unchanged
    """
    char_class = _character_class(chars)
    if not char_class:
        return text

    pattern = rf"{LINE_START}[{char_class}]+"
    if preserve_lists:
        pattern += rf"(?![{char_class}]|[ \t]*{LIST_MARKER})"
    return re.sub(pattern, "", text)


def trim_leading_lines(text: str) -> str:
    """Remove whitespace at the very start of the document."""
    return text.lstrip()


def _is_alignment_padding(text: str, start: int, end: int) -> bool:
    """Tell whether the run ``text[start:end]`` pads a line edge or a table cell.

    The whitespace touching the run on either side is scanned. The run is
    padding when that whitespace reaches a line boundary, the edge of the text,
    or a ``|`` table delimiter.
    """
    index = start
    while index > 0 and text[index - 1].isspace():
        index -= 1
        if text[index] in LINE_BREAK_CHARS:
            return True
    if index == 0 or text[index - 1] == TABLE_DELIMITER:
        return True

    index = end
    while index < len(text) and text[index].isspace():
        if text[index] in LINE_BREAK_CHARS:
            return True
        index += 1
    return index == len(text) or text[index] == TABLE_DELIMITER


def _collapse_runs(text: str, pattern: re.Pattern[str], replacement: str) -> str:
    def _collapse(match: re.Match[str]) -> str:
        if _is_alignment_padding(match.string, match.start(), match.end()):
            return match.group(0)
        return replacement

    while True:
        collapsed = pattern.sub(_collapse, text)
        if collapsed == text:
            return collapsed
        text = collapsed


def trim_multiple_spaces(text: str) -> str:
    """Collapse inline runs of spaces into a single space.

    Runs at the start or end of a line, and runs next to a ``|`` table
    delimiter, are kept as alignment. Adjacent tabs are not merged into the run.

    Examples:
        trim_multiple_spaces("a   b")  # "a b"
        trim_multiple_spaces("| a   |")  # unchanged
        trim_multiple_spaces("a\\t\\t  b")  # "a\\t\\t b"
    """
    return _collapse_runs(text, _MULTIPLE_SPACES_PATTERN, CHAR_SPACE)


def trim_multiple_tabs(text: str) -> str:
    """Collapse inline runs of tabs into a single tab.

    Follows the same alignment exceptions as `trim_multiple_spaces`.
    """
    return _collapse_runs(text, _MULTIPLE_TABS_PATTERN, CHAR_TAB)


def trim_multiple_lines(text: str) -> str:
    """Collapse consecutive blank lines.

    From every line start, the longest stretch of whitespace that ends right
    before a line terminator (or at the end of the text) is deleted. Blank
    lines that only hold spaces or tabs go too, and a blank run at the start
    or end of the document is reduced to a single line ending rather than
    removed.

    Examples:
        trim_multiple_lines("a\\n\\n\\n\\nb")  # "a\\n\\nb"
        trim_multiple_lines("a\\n \\t\\n\\nb")  # "a\\n\\nb"
    """
    return _BLANK_LINES_PATTERN.sub("", text)
