"""Placeholder substitution for regions that trimming must not touch."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .models import ProtectedText, Span


def make_token(prefix: str, index: int) -> str:
    """Return the placeholder that stands in for the protected term at `index`.

    Examples:
        make_token("CODE_", 3)  # "{{CODE_3}}"
    """
    return f"{{{{{prefix}{index}}}}}"


def tokenize(text: str, prefix: str, patterns: Iterable[re.Pattern[str]]) -> ProtectedText:
    """Swap every match of `patterns` out of `text` for a numbered placeholder.

    Patterns are applied in order. Each one is searched from the start of the
    current, already substituted text until it stops matching, so a region
    captured by an earlier pattern is never seen by a later one. Tokens are
    numbered ``0..N-1`` in the order they are inserted.

    Args:
        text: Text to scan.
        prefix: Prefix embedded in each placeholder; must not occur in `text`.
        patterns: Compiled expressions describing protected regions.

    Returns:
        ProtectedText: Substituted text and the removed terms.

    Examples:
        tokenize("a `b` c", "P_", [re.compile(r"`[^`]+`")])
        # ProtectedText(text="a {{P_0}} c", terms=["`b`"])
    """
    protected = ProtectedText(text=text)

    for pattern in patterns:
        match = pattern.search(protected.text)
        while match and match.end() > match.start():
            protected.terms.append(match.group(0))
            token = make_token(prefix, len(protected.terms) - 1)
            protected.text = protected.text[: match.start()] + token + protected.text[match.end() :]
            match = pattern.search(protected.text)

    return protected


def restore(text: str, prefix: str, terms: list[str]) -> str:
    """Put protected terms back in place of their placeholders.

    Replacement is literal, so backslashes, ``$`` and ``%`` sequences in a term
    are restored verbatim. Only the first occurrence of each placeholder is
    replaced. Terms are restored last to first: a later term may have captured
    an earlier placeholder (inline code around a fenced block), and has to be
    put back before that placeholder can be found.

    Examples:
        restore("a {{P_0}} c", "P_", ["`b`"])  # "a `b` c"
    """
    for index in reversed(range(len(terms))):
        text = text.replace(make_token(prefix, index), terms[index], 1)
    return text


def protected_spans(text: str, prefix: str, patterns: Iterable[re.Pattern[str]]) -> list[Span]:
    """Return where the regions that `tokenize` would protect sit in `text`.

    Only outermost regions are reported; a placeholder captured inside a later
    term counts as part of that term.

    Examples:
        protected_spans("a `b` c", "P_", [re.compile(r"`[^`]+`")])  # [Span(2, 5)]
    """
    protected = tokenize(text, prefix, patterns)
    token_pattern = re.compile(re.escape("{{" + prefix) + r"(\d+)\}\}")

    spans = []
    shift = 0
    for match in token_pattern.finditer(protected.text):
        term = restore(protected.terms[int(match.group(1))], prefix, protected.terms)
        start = match.start() + shift
        spans.append(Span(start, start + len(term)))
        shift += len(term) - len(match.group(0))
    return spans
