from __future__ import annotations

from dataclasses import replace

import pytest

from trim_whitespace.config import TrimSettings
from trim_whitespace.document import trim_document, trim_for_trigger, trim_live, trim_selection
from trim_whitespace.models import TriggerKind, TrimResult

LEADING = TrimSettings(trim_leading_spaces=True, trim_trailing_lines=False)


def test_trim_document_without_cursor():
    result = trim_document("text  \n\n", TrimSettings())

    assert result == TrimResult(original="text  \n\n", text="text")
    assert result.changed


def test_cursor_moves_back_by_characters_removed_before_it():
    result = trim_document("  abc\n", LEADING, 6, 6)

    assert result.text == "abc\n"
    assert (result.from_offset, result.to_offset) == (4, 4)


def test_selection_offsets_are_tracked_independently():
    text = "  one\n  two\n"
    result = trim_document(text, LEADING, 2, 10)

    assert result.text == "one\ntwo\n"
    assert (result.from_offset, result.to_offset) == (0, 6)


def test_to_offset_defaults_to_from_offset():
    result = trim_document("  abc", LEADING, 5)
    assert (result.from_offset, result.to_offset) == (3, 3)


def test_reversed_offsets_are_swapped():
    result = trim_document("  abc", LEADING, 5, 0)
    assert (result.from_offset, result.to_offset) == (0, 3)


def test_offsets_are_clamped_to_the_trimmed_text():
    result = trim_document("abc   \n\n", TrimSettings(), 8, 8)

    assert result.text == "abc"
    assert (result.from_offset, result.to_offset) == (3, 3)


def test_out_of_range_offsets_are_clamped():
    result = trim_document("  abc", LEADING, -3, 99)
    assert (result.from_offset, result.to_offset) == (0, 3)


def test_unchanged_document_keeps_offsets():
    result = trim_document("clean\ntext", TrimSettings(), 7, 2)

    assert not result.changed
    assert result == TrimResult(original="clean\ntext", text="clean\ntext", from_offset=2, to_offset=7)


def test_cursor_after_protected_code_is_stable():
    settings = replace(TrimSettings(), trim_trailing_lines=False)
    text = "a  \n```\ncode  \n```\nb  "
    result = trim_document(text, settings, 19, 19)

    assert result.text == "a\n```\ncode  \n```\nb"
    assert result.from_offset == 17


def test_trim_live_leaves_region_around_cursor_alone():
    result = trim_live("a  \nb  c", TrimSettings(), 7, 7)

    assert result == TrimResult(original="a  \nb  c", text="a\nb  c", from_offset=5, to_offset=5)


def test_trim_live_trims_text_after_the_cursor():
    settings = replace(TrimSettings(), trim_multiple_spaces=True)
    text = "typing  here\nold   line  \n"
    result = trim_live(text, settings, 7, 7)

    assert result.text == "typing  here\nold line"
    assert (result.from_offset, result.to_offset) == (7, 7)


def test_trim_live_keeps_whitespace_under_cursor_without_code_preservation():
    settings = replace(TrimSettings(), preserve_code_blocks=False)
    text = "top  \n```\nx  \n```\nend  "
    result = trim_live(text, settings, 11, 11)

    assert result.text == "top\n```\nx  \n```\nend"
    assert result.from_offset == 9


def test_trim_live_selection_spans_between_regions():
    settings = replace(TrimSettings(), trim_multiple_spaces=True)
    text = "a   b   c   d"
    result = trim_live(text, settings, 5, 8)

    assert result.text == "a b   c d"
    assert (result.from_offset, result.to_offset) == (3, 6)


def test_trim_live_unchanged_is_noop():
    result = trim_live("abc", TrimSettings(), 1, 2)

    assert not result.changed
    assert (result.from_offset, result.to_offset) == (1, 2)


def test_trim_selection_offsets_wrap_trimmed_text():
    result = trim_selection("x  \n\n", TrimSettings())
    assert result == TrimResult(original="x  \n\n", text="x", from_offset=0, to_offset=1)


@pytest.mark.parametrize("kind", [TriggerKind.COMMAND, TriggerKind.SAVE])
def test_command_and_save_trim_the_whole_document(kind):
    result = trim_for_trigger(kind, "a  \nb  ", TrimSettings(), 7, 7)

    assert result.text == "a\nb"
    assert result.from_offset == 3


def test_auto_trim_uses_live_trim():
    result = trim_for_trigger(TriggerKind.AUTO_TRIM, "a  \nb  ", TrimSettings(), 7, 7)

    assert result.text == "a\nb  "
    assert result.from_offset == 5


def test_auto_trim_without_cursor_trims_whole_document():
    result = trim_for_trigger(TriggerKind.AUTO_TRIM, "a  \nb  ", TrimSettings())

    assert result.text == "a\nb"
    assert result.from_offset is None


def test_trim_live_keeps_fence_under_cursor():
    text = "top  \n```\nx  \n```\nend  "
    result = trim_live(text, TrimSettings(), 11, 11)

    # The fence and the blanks touching it stay as typed.
    assert result.text == "top  \n```\nx  \n```\nend"
    assert result.from_offset == 11


def test_trim_live_keeps_blanks_beside_fence_in_middle_of_line():
    settings = TrimSettings(trim_leading_spaces=True)
    result = trim_live("y   ```x```   z", settings, 8, 8)

    assert not result.changed
    assert result.text == "y   ```x```   z"


def test_trim_live_beside_mid_line_fence_still_trims_earlier_lines():
    settings = TrimSettings(trim_leading_spaces=True)
    result = trim_live("a  \ny   ```x```   z", settings, 12, 12)

    assert result.text == "a\ny   ```x```   z"
    assert (result.from_offset, result.to_offset) == (10, 10)


def test_cursor_inside_protected_code_keeps_its_place():
    text = "```\ncode  \nmore```\n"
    result = trim_document(text, TrimSettings(), 15, 15)

    assert result.text == "```\ncode  \nmore```"
    assert result.text[: result.from_offset] == "```\ncode  \nmore"


def test_cursor_inside_code_after_trimmed_text():
    settings = replace(TrimSettings(), trim_trailing_lines=False)
    text = "a  \n```\ncode  \n```\n"
    result = trim_document(text, settings, 12, 14)

    assert result.text == "a\n```\ncode  \n```\n"
    assert result.text[result.from_offset : result.to_offset] == text[12:14]
