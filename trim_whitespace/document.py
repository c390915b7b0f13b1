"""Offset-preserving trims of a whole document or a selection."""

from __future__ import annotations

from .config import TrimSettings
from .constants import CODE_SWAP_PATTERNS, CODE_SWAP_PREFIX
from .models import Span, TriggerKind, TrimResult
from .regions import RegionIndex
from .tokens import protected_spans
from .trimmer import trim_text


def _ordered(length: int, from_offset: int, to_offset: int) -> tuple[int, int]:
    from_offset = max(0, min(from_offset, length))
    to_offset = max(0, min(to_offset, length))
    if to_offset < from_offset:
        from_offset, to_offset = to_offset, from_offset
    return from_offset, to_offset


def trim_document(
    text: str,
    settings: TrimSettings,
    from_offset: int | None = None,
    to_offset: int | None = None,
) -> TrimResult:
    """Trim a whole document and work out where the selection moved.

    Each new offset is the length of the trimmed text before the old offset.
    An offset inside protected code keeps its distance from the start of that
    code. The mapping is approximate where trimming a prefix differs from
    trimming the whole text: the end of a prefix counts as the end of the
    text, so a cursor at the start of a line that follows trailing whitespace
    can land at the end of the previous line.

    Args:
        text: Full document text.
        settings: Settings snapshot.
        from_offset: Selection start, or None when no cursor is tracked.
        to_offset: Selection end; defaults to `from_offset`.

    Returns:
        TrimResult: Trimmed text and, when a cursor was given, its new offsets.
        When nothing changed the offsets are returned as given.

    Examples:
        settings = TrimSettings(trim_leading_spaces=True, trim_trailing_lines=False)
        trim_document("  abc\\n", settings, 6, 6)
        # TrimResult(original="  abc\\n", text="abc\\n", from_offset=4, to_offset=4)
    """
    trimmed = trim_text(text, settings)

    if from_offset is None:
        return TrimResult(original=text, text=trimmed)

    if to_offset is None:
        to_offset = from_offset
    from_offset, to_offset = _ordered(len(text), from_offset, to_offset)

    if trimmed == text:
        return TrimResult(original=text, text=text, from_offset=from_offset, to_offset=to_offset)

    spans = (
        protected_spans(text, CODE_SWAP_PREFIX, CODE_SWAP_PATTERNS)
        if settings.preserve_code_blocks
        else []
    )
    new_from = min(_trimmed_offset(text, settings, from_offset, spans), len(trimmed))
    new_to = min(_trimmed_offset(text, settings, to_offset, spans), len(trimmed))
    return TrimResult(original=text, text=trimmed, from_offset=new_from, to_offset=new_to)


def _trimmed_offset(text: str, settings: TrimSettings, offset: int, spans: list[Span]) -> int:
    # Cutting inside protected code would leave an unterminated fence.
    for span in spans:
        if span.start < offset < span.end:
            return len(trim_text(text[: span.start], settings)) + offset - span.start
    return len(trim_text(text[:offset], settings))


def trim_live(text: str, settings: TrimSettings, from_offset: int, to_offset: int) -> TrimResult:
    """Trim a document while the user is typing in it.

    The text is split into three zones. The live zone runs from the start of
    the region around `from_offset` to the end of the region around
    `to_offset` (see `RegionIndex.locate`), widened over any whitespace that
    touches it, and is kept verbatim. The text before and after it is trimmed
    independently. Both offsets shift by what the before zone lost.

    Examples:
        trim_live("a  \\nb  c", TrimSettings(), 7, 7)
        # TrimResult(original="a  \\nb  c", text="a\\nb  c", from_offset=5, to_offset=5)
    """
    from_offset, to_offset = _ordered(len(text), from_offset, to_offset)

    index = RegionIndex(text, settings.preserve_code_blocks)
    start = index.locate(from_offset).start
    live = index.widen(Span(start, max(index.locate(to_offset).end, start)))
    live_start, live_end = live.start, live.end

    before = text[:live_start]
    trimmed_before = trim_text(before, settings) if before else before
    after = text[live_end:]
    trimmed_after = trim_text(after, settings) if after else after

    trimmed = trimmed_before + text[live_start:live_end] + trimmed_after
    if trimmed == text:
        return TrimResult(original=text, text=text, from_offset=from_offset, to_offset=to_offset)

    delta = len(before) - len(trimmed_before)
    return TrimResult(
        original=text,
        text=trimmed,
        from_offset=from_offset - delta,
        to_offset=to_offset - delta,
    )


def trim_selection(selection: str, settings: TrimSettings) -> TrimResult:
    """Trim only the selected text.

    Offsets in the result are relative to the start of the selection and wrap
    the trimmed text.
    """
    trimmed = trim_text(selection, settings)
    return TrimResult(original=selection, text=trimmed, from_offset=0, to_offset=len(trimmed))


def trim_for_trigger(
    kind: TriggerKind,
    text: str,
    settings: TrimSettings,
    from_offset: int | None = None,
    to_offset: int | None = None,
) -> TrimResult:
    """Dispatch a document trim to the strategy that matches `kind`.

    Commands and saves trim the whole document. Auto-trims leave the text
    around the cursor alone, and fall back to a whole-document trim when no
    cursor is known.
    """
    if kind is TriggerKind.AUTO_TRIM and from_offset is not None:
        if to_offset is None:
            to_offset = from_offset
        return trim_live(text, settings, from_offset, to_offset)
    return trim_document(text, settings, from_offset, to_offset)
