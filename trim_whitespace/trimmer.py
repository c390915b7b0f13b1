"""Trim pipeline: applies the enabled rules in a fixed order."""

from __future__ import annotations

from .config import TrimSettings
from .constants import CHAR_SPACE, CHAR_TAB, CODE_SWAP_PATTERNS, CODE_SWAP_PREFIX
from .rules import (
    convert_non_breaking_spaces,
    trim_leading_characters,
    trim_leading_lines,
    trim_multiple_lines,
    trim_multiple_spaces,
    trim_multiple_tabs,
    trim_trailing_characters,
    trim_trailing_lines,
)
from .tokens import restore, tokenize


def _enabled_characters(spaces: bool, tabs: bool) -> list[str]:
    chars = []
    if spaces:
        chars.append(CHAR_SPACE)
    if tabs:
        chars.append(CHAR_TAB)
    return chars


def apply_rules(text: str, settings: TrimSettings) -> str:
    """Run every enabled rule over `text`.

    The order is fixed: trailing characters, trailing lines, leading
    characters, leading lines, then multiple spaces, tabs and lines. Edge runs
    are removed before inner runs are collapsed, so a trailing run is deleted
    rather than shortened to one character.

    Args:
        text: Text to trim. Protected regions must already be tokenized.
        settings: Rules to apply.

    Returns:
        str: Trimmed text.
    """
    if settings.convert_non_breaking_spaces:
        text = convert_non_breaking_spaces(text)

    trailing = _enabled_characters(settings.trim_trailing_spaces, settings.trim_trailing_tabs)
    if trailing:
        text = trim_trailing_characters(text, trailing)

    if settings.trim_trailing_lines:
        text = trim_trailing_lines(text, settings.trailing_lines_keep_max)

    leading = _enabled_characters(settings.trim_leading_spaces, settings.trim_leading_tabs)
    if leading:
        text = trim_leading_characters(text, leading, settings.preserve_indented_lists)

    if settings.trim_leading_lines:
        text = trim_leading_lines(text)

    if settings.trim_multiple_spaces:
        text = trim_multiple_spaces(text)

    if settings.trim_multiple_tabs:
        text = trim_multiple_tabs(text)

    if settings.trim_multiple_lines:
        text = trim_multiple_lines(text)

    return text


def trim_text(text: str, settings: TrimSettings) -> str:
    """Trim `text` according to `settings`, skipping code when asked to.

    With `preserve_code_blocks`, fenced blocks and inline code are swapped
    for placeholder tokens before the rules run and restored afterwards, so
    their contents come back byte for byte. An unterminated fence does not
    match and is trimmed like ordinary text.

    Args:
        text: Text to trim.
        settings: Settings snapshot; it is never modified.

    Returns:
        str: Trimmed text. Applying `trim_text` to its own output returns the
        output unchanged.

    Examples:
        trim_text("a  \\n```\\ncode  \\n```\\n", TrimSettings())
        # "a\\n```\\ncode  \\n```"
    """
    if not settings.preserve_code_blocks:
        return apply_rules(text, settings)

    protected = tokenize(text, CODE_SWAP_PREFIX, CODE_SWAP_PATTERNS)
    trimmed = apply_rules(protected.text, settings)
    return restore(trimmed, CODE_SWAP_PREFIX, protected.terms)
