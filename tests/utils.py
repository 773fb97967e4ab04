from __future__ import annotations

from typing import Iterable, Sequence

from lexidiff.models import DiffSpan, Op, Token


def reconstruct_a(spans: Iterable[DiffSpan]) -> str:
    return "".join(span.text for span in spans if span.op is not Op.INSERT)


def reconstruct_b(spans: Iterable[DiffSpan]) -> str:
    return "".join(span.text for span in spans if span.op is not Op.DELETE)


def assert_tokens_tile(text: str, tokens: Sequence[Token]) -> None:
    """Tokens must cover ``text`` left to right without gaps or overlaps."""
    assert "".join(token.text for token in tokens) == text
    position = 0
    for token in tokens:
        assert token.start == position
        assert token.length == len(token.text) > 0
        position = token.end
    assert position == len(text)


def assert_spans_consistent(a: str, b: str, spans: Sequence[DiffSpan]) -> None:
    """Spans rebuild both sides and each span's subtokens spell its text."""
    assert reconstruct_a(spans) == a
    assert reconstruct_b(spans) == b
    for span in spans:
        assert "".join(st.text for st in span.subtokens) == span.text
