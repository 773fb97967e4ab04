from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, List, Tuple

from nltk.tokenize.punkt import PunktSentenceTokenizer, PunktTokenizer

from .languages import punkt_language

logger = logging.getLogger(__name__)

Range = Tuple[int, int]


@lru_cache(maxsize=None)
def _punkt_for(model: str | None) -> Any:
    if model is None:
        return PunktSentenceTokenizer()
    try:
        return PunktTokenizer(model)
    except LookupError:
        logger.debug("Punkt model '%s' not installed; using untrained parameters", model)
        return PunktSentenceTokenizer()


def sentence_ranges(text: str, locale: str | None = None) -> List[Range]:
    """
    Return ``(start, length)`` sentence ranges that tile ``text``.

    Punkt reports sentences without surrounding whitespace; leading
    whitespace is folded into the first sentence and the whitespace after a
    sentence stays with it, so the ranges cover every character exactly once.
    """
    if not text:
        return []
    spans = list(_punkt_for(punkt_language(locale)).span_tokenize(text))
    if not spans:
        return [(0, len(text))]

    starts = [0] + [start for start, _ in spans[1:]]
    ends = starts[1:] + [len(text)]
    return [(start, end - start) for start, end in zip(starts, ends) if end > start]


def paragraph_ranges(text: str) -> List[Range]:
    """One range per line, including its line feed; a blank line is its own range."""
    ranges: List[Range] = []
    start = 0
    for idx, ch in enumerate(text):
        if ch == "\n":
            ranges.append((start, idx - start + 1))
            start = idx + 1
    if start < len(text):
        ranges.append((start, len(text) - start))
    return ranges
