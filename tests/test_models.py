from __future__ import annotations

import pytest

from trim_whitespace.models import ProtectedText, Span, TriggerKind, TrimResult


def test_span_length_and_containment():
    span = Span(2, 5)

    assert len(span) == 3
    assert span.contains(2)
    assert span.contains(5)
    assert not span.contains(1)
    assert not span.contains(6)


def test_empty_span_contains_its_offset():
    assert Span(4, 4).contains(4)
    assert len(Span(4, 4)) == 0


def test_span_rejects_reversed_bounds():
    with pytest.raises(ValueError, match="after end"):
        Span(3, 1)


def test_trim_result_changed():
    assert TrimResult(original="a ", text="a").changed
    assert not TrimResult(original="a", text="a", from_offset=0, to_offset=1).changed


def test_protected_text_defaults_to_no_terms():
    assert ProtectedText(text="plain").terms == []


def test_trigger_kinds_are_distinct():
    assert len({TriggerKind.COMMAND, TriggerKind.SAVE, TriggerKind.AUTO_TRIM}) == 3
