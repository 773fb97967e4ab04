from __future__ import annotations

from typing import List

from ..languages import DEFAULT_LANGUAGE
from ..models import SubToken, TokenRole, WordKind
from ..morphology import LanguageDetector, MorphSplitter, SnowballMorphSplitter
from ..segmentation import UnicodeWordSegmenter, WordSegmenter
from .base import Tokenizer

_SPLITTABLE = (WordKind.WORD, WordKind.NUMBER)


class StemmingTokenizer(Tokenizer):
    """
    Segment text, then split word and number tokens into stem + suffix.

    Tokens the splitter leaves alone (and every non-word token) are emitted as
    a single WHOLE subtoken, so the subtoken texts always concatenate back to
    the segmented text.
    """

    def __init__(
        self,
        language_detector: LanguageDetector | None = None,
        *,
        default_language: str = DEFAULT_LANGUAGE,
        segmenter: WordSegmenter | None = None,
        splitter: MorphSplitter | None = None,
        coalesce_punctuation: bool = True,
        normalize_form: str | None = None,
    ) -> None:
        if language_detector is not None and not callable(language_detector):
            raise TypeError("language_detector must be callable")
        self._language_detector = language_detector
        self._default_language = default_language
        self._segmenter = segmenter
        self._splitter = splitter or SnowballMorphSplitter(
            language_detector, default_language
        )
        self._coalesce_punctuation = coalesce_punctuation
        self._normalize_form = normalize_form

    def create_segmenter(self, language: str) -> WordSegmenter:
        """Build the segmenter used for text detected as ``language``."""
        return UnicodeWordSegmenter(
            language,
            coalesce_punctuation=self._coalesce_punctuation,
            normalize_form=self._normalize_form,
        )

    def tokenize(self, text: str) -> List[SubToken]:
        if text is None:
            raise TypeError("text must be a string, not None")
        # The detector is keyed by word, so it is left to the splitter.
        segmenter = self._segmenter or self.create_segmenter(self._default_language)

        output: List[SubToken] = []
        for parent_idx, token in enumerate(segmenter.segment(text)):
            if token.kind in _SPLITTABLE:
                stem, suffix = self._splitter.split(token.text)
                if suffix and len(stem) + len(suffix) == token.length:
                    output.append(
                        SubToken(
                            parent_idx,
                            token.start,
                            len(stem),
                            stem,
                            TokenRole.STEM,
                            token.kind,
                        )
                    )
                    output.append(
                        SubToken(
                            parent_idx,
                            token.start + len(stem),
                            len(suffix),
                            suffix,
                            TokenRole.SUFFIX,
                            token.kind,
                        )
                    )
                    continue
            output.append(
                SubToken(
                    parent_idx,
                    token.start,
                    token.length,
                    token.text,
                    TokenRole.WHOLE,
                    token.kind,
                )
            )
        return output
