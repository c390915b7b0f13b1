from __future__ import annotations

import pytest

from trim_whitespace.editor import Position, TextBuffer


def test_defaults():
    buffer = TextBuffer()

    assert buffer.get_text() == ""
    assert buffer.get_selection_text() == ""
    assert buffer.get_cursor() == Position(0, 0)


def test_position_offset_conversion():
    buffer = TextBuffer("ab\ncd\r\nef")

    assert buffer.position_of(0) == Position(0, 0)
    assert buffer.position_of(4) == Position(1, 1)
    assert buffer.position_of(7) == Position(2, 0)
    assert buffer.offset_of(Position(2, 1)) == 8
    assert buffer.offset_of(Position(1, 0)) == 3


def test_positions_are_clamped():
    buffer = TextBuffer("ab\ncd")

    assert buffer.offset_of(Position(9, 9)) == 5
    assert buffer.offset_of(Position(-1, -1)) == 0
    assert buffer.position_of(50) == Position(1, 2)


def test_selection_is_ordered_and_clamped():
    buffer = TextBuffer("hello world")
    buffer.set_selection(20, 6)

    assert buffer.get_selection_text() == "world"
    assert buffer.get_cursor("from") == Position(0, 6)
    assert buffer.get_cursor("to") == Position(0, 11)


def test_unknown_cursor_side():
    with pytest.raises(ValueError, match="Unknown cursor side"):
        TextBuffer("x").get_cursor("middle")


def test_replace_selection_leaves_cursor_after_insertion():
    buffer = TextBuffer("hello world", from_offset=0, to_offset=5)
    buffer.replace_selection("hi")

    assert buffer.get_text() == "hi world"
    assert buffer.get_cursor("from") == buffer.get_cursor("to") == Position(0, 2)


def test_insert_types_at_cursor():
    buffer = TextBuffer("ac", from_offset=1)
    buffer.insert("b\n")

    assert buffer.get_text() == "ab\nc"
    assert buffer.get_cursor() == Position(1, 0)


def test_set_text_clamps_selection():
    buffer = TextBuffer("long text", from_offset=7, to_offset=9)
    buffer.set_text("short")

    assert buffer.offset_of(buffer.get_cursor("from")) == 5
    assert buffer.offset_of(buffer.get_cursor("to")) == 5


def test_change_listeners():
    buffer = TextBuffer("abc")
    seen = []

    def listener(editor):
        seen.append((editor.get_text(), editor.get_cursor()))

    buffer.on_change(listener)
    buffer.on_change(listener)
    buffer.set_text("a")
    buffer.off_change(listener)
    buffer.set_text("b")
    buffer.off_change(listener)

    assert seen == [("a", Position(0, 0))]


def test_set_selection_does_not_notify():
    buffer = TextBuffer("abc")
    calls = []
    buffer.on_change(calls.append)
    buffer.set_selection(1, 2)

    assert calls == []
