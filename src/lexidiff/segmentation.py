"""
Lossless word segmentation.

Characters are grouped into runs of the same coarse Unicode bucket (space,
word-ish, punctuation, symbol, other). Each run is then classified from the
general categories it contains. Concatenating the token texts always gives
back the segmented text; when a normalization form is requested that text is
the normalized one, not the original input.
"""

from __future__ import annotations

import unicodedata
from abc import ABC, abstractmethod
from typing import List, Tuple

from .models import Token, WordKind

NORMALIZATION_FORMS = ("NFC", "NFD", "NFKC", "NFKD")

_SPACE, _WORDISH, _PUNCT, _SYMBOL, _OTHER = range(5)

_SPACE_CATEGORIES = frozenset({"Zs", "Zl", "Zp"})


def _bucket(ch: str) -> int:
    category = unicodedata.category(ch)
    if category in _SPACE_CATEGORIES:
        return _SPACE
    major = category[0]
    if major in ("L", "M", "N"):
        return _WORDISH
    if major == "P":
        return _PUNCT
    if major == "S":
        return _SYMBOL
    return _OTHER


def classify_span(span: str) -> WordKind:
    """Classify a span from the Unicode general categories it contains."""
    has_letter = has_mark = has_number = False
    has_punct = has_symbol = has_space = False
    for ch in span:
        category = unicodedata.category(ch)
        major = category[0]
        if major == "L":
            has_letter = True
        elif major == "M":
            has_mark = True
        elif major == "N":
            has_number = True
        elif category in _SPACE_CATEGORIES:
            has_space = True
        elif major == "P":
            has_punct = True
        elif major == "S":
            has_symbol = True

    if has_space and not (has_letter or has_number or has_mark or has_punct or has_symbol):
        return WordKind.WHITESPACE
    if (has_letter or has_mark) and not has_punct and not has_symbol:
        return WordKind.WORD
    if has_number and not (has_letter or has_mark or has_punct or has_symbol):
        return WordKind.NUMBER
    if has_punct and not (has_letter or has_mark or has_number or has_symbol):
        return WordKind.PUNCTUATION
    if has_symbol and not (has_letter or has_mark or has_number or has_punct):
        return WordKind.SYMBOL
    if has_letter or has_mark or has_number:
        # Mixed content such as alphanumeric identifiers.
        return WordKind.WORD
    return WordKind.OTHER


def validate_normalization_form(form: str | None) -> str | None:
    if form is None:
        return None
    normalized = form.upper().strip()
    if normalized not in NORMALIZATION_FORMS:
        raise ValueError(
            f"Unknown normalization form '{form}'; expected one of {', '.join(NORMALIZATION_FORMS)}."
        )
    return normalized


class WordSegmenter(ABC):
    """Splits text into an ordered, gap-free sequence of classified tokens."""

    @abstractmethod
    def segment(self, text: str) -> List[Token]:
        """Return tokens covering ``text`` from left to right."""
        raise NotImplementedError


class UnicodeWordSegmenter(WordSegmenter):
    """Default segmenter driven by Unicode general categories.

    Segmentation does not depend on the locale; it is kept on the instance so
    callers that build one segmenter per language can tell them apart.
    """

    def __init__(
        self,
        locale: str = "und",
        *,
        coalesce_punctuation: bool = True,
        normalize_form: str | None = None,
    ) -> None:
        self._locale = locale or "und"
        self._coalesce_punctuation = coalesce_punctuation
        self._normalize_form = validate_normalization_form(normalize_form)

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def normalize_form(self) -> str | None:
        return self._normalize_form

    def segment(self, text: str) -> List[Token]:
        if text is None:
            raise TypeError("text must be a string, not None")
        if self._normalize_form is not None:
            text = unicodedata.normalize(self._normalize_form, text)
        if not text:
            return []

        raw = self._raw_spans(text)
        if self._coalesce_punctuation:
            raw = _fuse_punctuation_with_space(raw)
        return [Token(text=t, start=s, length=len(t), kind=k) for t, s, k in raw]

    @staticmethod
    def _raw_spans(text: str) -> List[Tuple[str, int, WordKind]]:
        spans: List[Tuple[str, int, WordKind]] = []
        start = 0
        current = _bucket(text[0])
        for idx in range(1, len(text)):
            bucket = _bucket(text[idx])
            if bucket != current:
                span = text[start:idx]
                spans.append((span, start, classify_span(span)))
                start = idx
                current = bucket
        span = text[start:]
        spans.append((span, start, classify_span(span)))
        return spans


def _fuse_punctuation_with_space(
    spans: List[Tuple[str, int, WordKind]],
) -> List[Tuple[str, int, WordKind]]:
    """Fuse punctuation/symbol spans with the whitespace span right after them."""
    merged: List[Tuple[str, int, WordKind]] = []
    idx = 0
    while idx < len(spans):
        text, start, kind = spans[idx]
        if (
            kind in (WordKind.PUNCTUATION, WordKind.SYMBOL)
            and idx + 1 < len(spans)
            and spans[idx + 1][2] is WordKind.WHITESPACE
            and start + len(text) == spans[idx + 1][1]
        ):
            merged.append((text + spans[idx + 1][0], start, WordKind.PUNCTUATION))
            idx += 2
            continue
        merged.append((text, start, kind))
        idx += 1
    return merged


def segment_words(
    text: str,
    locale: str = "und",
    *,
    coalesce_punctuation: bool = True,
    normalize_form: str | None = None,
) -> List[Token]:
    """Segment ``text`` with the default Unicode segmenter."""
    segmenter = UnicodeWordSegmenter(
        locale,
        coalesce_punctuation=coalesce_punctuation,
        normalize_form=normalize_form,
    )
    return segmenter.segment(text)
