from __future__ import annotations

from typing import List

from ..models import SubToken, TokenRole
from ..segmentation import UnicodeWordSegmenter, WordSegmenter
from .base import Tokenizer


class WordTokenizer(Tokenizer):
    """Word-level tokenizer: every segmented token becomes one whole subtoken."""

    def __init__(self, segmenter: WordSegmenter | None = None) -> None:
        self._segmenter = segmenter or UnicodeWordSegmenter()

    def tokenize(self, text: str) -> List[SubToken]:
        return [
            SubToken(
                parent_index=idx,
                start=token.start,
                length=token.length,
                text=token.text,
                role=TokenRole.WHOLE,
                kind=token.kind,
            )
            for idx, token in enumerate(self._segmenter.segment(text))
        ]
