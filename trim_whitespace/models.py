"""Data models for trim-whitespace."""

from dataclasses import dataclass, field
from enum import Enum, auto


class TriggerKind(Enum):
    """Events that can start a document trim.

    Attributes:
        COMMAND: Explicit user action on the selection or the whole document.
        SAVE: Intercepted manual save.
        AUTO_TRIM: Background trim fired after the editor has been idle.
    """

    COMMAND = auto()
    SAVE = auto()
    AUTO_TRIM = auto()


@dataclass(frozen=True)
class Span:
    """Half-open ``[start, end)`` range of character offsets.

    Attributes:
        start: First offset covered by the span.
        end: Offset one past the last covered character.
    """

    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Span start {self.start} is after end {self.end}")

    def __len__(self) -> int:
        return self.end - self.start

    def contains(self, offset: int) -> bool:
        """Return True when `offset` lies inside the span or on either boundary."""
        return self.start <= offset <= self.end


@dataclass
class ProtectedText:
    """Text whose protected regions were swapped out for placeholder tokens.

    Attributes:
        text: Text with every protected region replaced by its token.
        terms: Original substrings, indexed by the number embedded in each token.
    """

    text: str
    terms: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TrimResult:
    """Outcome of an offset-preserving trim.

    Attributes:
        original: Text before trimming.
        text: Text after trimming.
        from_offset: New offset of the selection start, or None when not tracked.
        to_offset: New offset of the selection end, or None when not tracked.
    """

    original: str
    text: str
    from_offset: int | None = None
    to_offset: int | None = None

    @property
    def changed(self) -> bool:
        return self.text != self.original
