from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Tuple

from nltk.stem.snowball import SnowballStemmer

from .languages import DEFAULT_LANGUAGE, snowball_language

LanguageDetector = Callable[[str], str]

# Some Snowball implementations keep scratch state on the instance while
# stemming, so instances are cached per thread rather than shared.
_local = threading.local()


def _stemmer_for(algorithm: str) -> Any:
    cache: Dict[str, Any] | None = getattr(_local, "stemmers", None)
    if cache is None:
        cache = {}
        _local.stemmers = cache
    stemmer = cache.get(algorithm)
    if stemmer is None:
        stemmer = SnowballStemmer(algorithm)
        cache[algorithm] = stemmer
    return stemmer


def stem(lowercased_word: str, language: str) -> str | None:
    """Return the Snowball stem of ``lowercased_word``, or None when no rule applies."""
    if not lowercased_word:
        return None
    algorithm = snowball_language(language)
    if algorithm is None:
        return None
    return str(_stemmer_for(algorithm).stem(lowercased_word))


def longest_common_prefix(a: str, b: str, ignore_case: bool = True) -> int:
    """Length of the common prefix of ``a`` and ``b`` compared per character."""
    limit = min(len(a), len(b))
    idx = 0
    while idx < limit:
        x, y = a[idx], b[idx]
        if x != y and not (
            ignore_case and (x.lower() == y.lower() or x.upper() == y.upper())
        ):
            break
        idx += 1
    return idx


def split_word(
    word: str,
    language_detector: LanguageDetector | None = None,
    default_language: str = DEFAULT_LANGUAGE,
) -> Tuple[str, str]:
    """
    Split ``word`` into ``(stem, suffix)`` so that ``stem + suffix == word``.

    The stem slice is taken from the original word, so casing and diacritics
    survive even when the stemmer folds them. Words for which no safe split
    exists come back as ``(word, "")``.
    """
    if not word or word.isspace():
        return word, ""

    language = language_detector(word) if language_detector else default_language
    stemmed = stem(word.lower(), language or default_language)
    if stemmed is None:
        return word, ""

    prefix_len = longest_common_prefix(word, stemmed, ignore_case=True)
    if prefix_len <= 1:
        return word, ""
    return word[:prefix_len], word[prefix_len:]


class MorphSplitter(ABC):
    """Splits a word into a stem and a suffix without losing any text."""

    @abstractmethod
    def split(self, word: str) -> Tuple[str, str]:
        """Return ``(stem, suffix)``; an empty suffix means no split."""
        raise NotImplementedError


class SnowballMorphSplitter(MorphSplitter):
    """Stem/suffix splitter backed by the NLTK Snowball stemmers."""

    def __init__(
        self,
        language_detector: LanguageDetector | None = None,
        default_language: str = DEFAULT_LANGUAGE,
    ) -> None:
        if language_detector is not None and not callable(language_detector):
            raise TypeError("language_detector must be callable")
        self._language_detector = language_detector
        self._default_language = default_language

    def split(self, word: str) -> Tuple[str, str]:
        return split_word(word, self._language_detector, self._default_language)
