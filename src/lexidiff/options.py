from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, Union

from .differ import DEFAULT_DIFF_TIMEOUT
from .languages import DEFAULT_LANGUAGE
from .models import SubToken
from .promotion import Granularity
from .segmentation import validate_normalization_form
from .tokenizers import Tokenizer

TokenizerLike = Union[Tokenizer, Callable[[str], Sequence[SubToken]]]


@dataclass(frozen=True, slots=True)
class LexOptions:
    """Per-call options for :func:`lexidiff.compare`."""

    promote_to: Granularity = Granularity.TOKENS
    sentence_locale: str | None = None
    language_detector: Callable[[str], str] | None = None
    default_language: str = DEFAULT_LANGUAGE
    tokenizer: TokenizerLike | None = None
    normalize_form: str | None = None
    coalesce_punctuation: bool = True
    diff_timeout: float = DEFAULT_DIFF_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "promote_to", Granularity.parse(self.promote_to))
        object.__setattr__(
            self, "normalize_form", validate_normalization_form(self.normalize_form)
        )
        if self.language_detector is not None and not callable(self.language_detector):
            raise TypeError("language_detector must be callable")
        if self.tokenizer is not None and not (
            isinstance(self.tokenizer, Tokenizer) or callable(self.tokenizer)
        ):
            raise TypeError("tokenizer must be a Tokenizer or a callable")
