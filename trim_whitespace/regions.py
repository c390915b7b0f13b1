"""Locate the code fence or whitespace run surrounding a cursor offset."""

from __future__ import annotations

import re
from bisect import bisect_right

from .constants import CODE_BLOCK_PATTERN, FENCE_PADDING, WHITESPACE_BLOCK_PATTERN
from .models import Span


def find_spans(text: str, pattern: re.Pattern[str]) -> list[Span]:
    """Return the spans of all non-overlapping matches of `pattern`, in order."""
    return [Span(match.start(), match.end()) for match in pattern.finditer(text)]


def _containing_span(spans: list[Span], starts: list[int], offset: int) -> Span | None:
    index = bisect_right(starts, offset) - 1
    if index < 0:
        return None
    # Touching spans share a boundary; the earlier one wins.
    if index > 0 and spans[index - 1].contains(offset):
        return spans[index - 1]
    if spans[index].contains(offset):
        return spans[index]
    return None


class RegionIndex:
    """Fence and whitespace spans of one text, computed once and searched by offset.

    Args:
        text: Text to index.
        preserve_code_blocks: When False, code fences are not indexed and only
            whitespace runs are reported.
    """

    def __init__(self, text: str, preserve_code_blocks: bool = True):
        self.length = len(text)
        self.fences = find_spans(text, CODE_BLOCK_PATTERN) if preserve_code_blocks else []
        self.whitespace = find_spans(text, WHITESPACE_BLOCK_PATTERN)
        self._fence_starts = [span.start for span in self.fences]
        self._whitespace_starts = [span.start for span in self.whitespace]

    def locate(self, offset: int) -> Span:
        """Return the zone around `offset` that a live trim must leave alone.

        A fence containing `offset` (boundaries included) wins, widened by one
        character on each side to cover the blank lines around it. Otherwise
        the whitespace run containing `offset` is returned. When neither
        applies, the result is an empty span at `offset`.

        Examples:
            RegionIndex("a   b").locate(2)  # Span(1, 4)
            RegionIndex("ab").locate(1)  # Span(1, 1)
        """
        offset = max(0, min(offset, self.length))

        fence = _containing_span(self.fences, self._fence_starts, offset)
        if fence is not None:
            return Span(
                max(0, fence.start - FENCE_PADDING),
                min(self.length, fence.end + FENCE_PADDING),
            )

        run = _containing_span(self.whitespace, self._whitespace_starts, offset)
        if run is not None:
            return run

        return Span(offset, offset)

    def widen(self, span: Span) -> Span:
        """Grow `span` over the whitespace runs touching its edges.

        A fence zone can end in the middle of a line; the blanks next to it
        must not be trimmed as if they ended or started a line.

        Examples:
            RegionIndex("y   ```x```   z").widen(Span(2, 13))  # Span(1, 14)
        """
        before = _containing_span(self.whitespace, self._whitespace_starts, span.start)
        after = _containing_span(self.whitespace, self._whitespace_starts, span.end)
        return Span(
            before.start if before is not None else span.start,
            after.end if after is not None else span.end,
        )


def locate_region(text: str, offset: int, preserve_code_blocks: bool = True) -> Span:
    """Return the protected zone around `offset` in `text`.

    See `RegionIndex.locate`; use a `RegionIndex` directly to look up several
    offsets in the same text.
    """
    return RegionIndex(text, preserve_code_blocks).locate(offset)
