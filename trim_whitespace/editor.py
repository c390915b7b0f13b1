"""Editor abstraction used by the trim commands.

`Editor` is the contract a host application implements. `TextBuffer` is a
complete in-memory implementation, used by the command-line tool and tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from bisect import bisect_right
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from .constants import LINE_ENDING_PATTERN

CursorSide = Literal["from", "to"]
ChangeListener = Callable[["Editor"], object]


@dataclass(frozen=True)
class Position:
    """Zero-based line and column of a cursor.

    Attributes:
        line: Line index.
        ch: Character index within the line.
    """

    line: int
    ch: int


class Editor(ABC):
    """Operations the trim commands need from a host editor."""

    @abstractmethod
    def get_text(self) -> str: ...

    @abstractmethod
    def set_text(self, text: str) -> None: ...

    @abstractmethod
    def get_selection_text(self) -> str: ...

    @abstractmethod
    def replace_selection(self, text: str) -> None:
        """Replace the selected text and leave the cursor after the insertion."""

    @abstractmethod
    def get_cursor(self, which: CursorSide = "to") -> Position: ...

    @abstractmethod
    def offset_of(self, position: Position) -> int: ...

    @abstractmethod
    def position_of(self, offset: int) -> Position: ...

    @abstractmethod
    def set_selection(self, from_offset: int, to_offset: int) -> None: ...

    @abstractmethod
    def on_change(self, listener: ChangeListener) -> None:
        """Register `listener` to be called with the editor after every change."""

    @abstractmethod
    def off_change(self, listener: ChangeListener) -> None: ...


class TextBuffer(Editor):
    """Editor backed by a plain string.

    Args:
        text: Initial contents.
        from_offset: Selection start; defaults to the start of the text.
        to_offset: Selection end; defaults to `from_offset`.

    Examples:
        buffer = TextBuffer("  abc\\n", from_offset=6)
        buffer.get_cursor("to")  # Position(line=1, ch=0)
    """

    def __init__(self, text: str = "", from_offset: int = 0, to_offset: int | None = None):
        self._text = text
        self._listeners: list[ChangeListener] = []
        self._line_starts = self._compute_line_starts(text)
        self._from = 0
        self._to = 0
        self.set_selection(from_offset, from_offset if to_offset is None else to_offset)

    @staticmethod
    def _compute_line_starts(text: str) -> list[int]:
        return [0] + [match.end() for match in LINE_ENDING_PATTERN.finditer(text)]

    def _clamp(self, offset: int) -> int:
        return max(0, min(offset, len(self._text)))

    def _replace_range(
        self, start: int, end: int, replacement: str, cursor: int | None = None
    ) -> None:
        self._text = self._text[:start] + replacement + self._text[end:]
        self._line_starts = self._compute_line_starts(self._text)
        if cursor is None:
            self._from, self._to = self._clamp(self._from), self._clamp(self._to)
        else:
            self._from = self._to = cursor
        for listener in list(self._listeners):
            listener(self)

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._replace_range(0, len(self._text), text)

    def get_selection_text(self) -> str:
        return self._text[self._from : self._to]

    def replace_selection(self, text: str) -> None:
        start, end = self._from, self._to
        self._replace_range(start, end, text, cursor=start + len(text))

    def insert(self, text: str) -> None:
        """Type `text` at the cursor, replacing any selection."""
        self.replace_selection(text)

    def get_cursor(self, which: CursorSide = "to") -> Position:
        if which not in ("from", "to"):
            raise ValueError(f"Unknown cursor side: {which!r}")
        return self.position_of(self._from if which == "from" else self._to)

    def offset_of(self, position: Position) -> int:
        line = max(0, min(position.line, len(self._line_starts) - 1))
        return self._clamp(self._line_starts[line] + max(0, position.ch))

    def position_of(self, offset: int) -> Position:
        offset = self._clamp(offset)
        line = bisect_right(self._line_starts, offset) - 1
        return Position(line=line, ch=offset - self._line_starts[line])

    def set_selection(self, from_offset: int, to_offset: int) -> None:
        from_offset, to_offset = self._clamp(from_offset), self._clamp(to_offset)
        self._from, self._to = min(from_offset, to_offset), max(from_offset, to_offset)

    def on_change(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def off_change(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
