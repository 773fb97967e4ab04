from __future__ import annotations

import logging
import unicodedata

from .config import LexDiffConfig
from .differ import diff_texts
from .models import Op
from .options import LexOptions
from .promotion import Granularity, promote
from .result import DiffResult
from .tokenizers import CallableTokenizer, StemmingTokenizer, Tokenizer

logger = logging.getLogger(__name__)


def resolve_tokenizer(options: LexOptions) -> Tokenizer:
    """Return the tokenizer described by ``options``."""
    if isinstance(options.tokenizer, Tokenizer):
        return options.tokenizer
    if options.tokenizer is not None:
        return CallableTokenizer(options.tokenizer)
    return StemmingTokenizer(
        options.language_detector,
        default_language=options.default_language,
        coalesce_punctuation=options.coalesce_punctuation,
        normalize_form=options.normalize_form,
    )


def compare(a: str, b: str, options: LexOptions | None = None) -> DiffResult:
    """Compare two texts and return the ordered diff spans turning A into B."""
    if a is None or b is None:
        raise TypeError("Texts to compare must be strings, not None")
    if not isinstance(a, str) or not isinstance(b, str):
        raise TypeError("Texts to compare must be strings")
    options = options or LexOptions()
    tokenizer = resolve_tokenizer(options)

    if options.normalize_form:
        a = unicodedata.normalize(options.normalize_form, a)
        b = unicodedata.normalize(options.normalize_form, b)

    spans = diff_texts(a, b, tokenizer, timeout=options.diff_timeout)
    if options.promote_to is not Granularity.TOKENS:
        spans = promote(a, b, spans, options.promote_to, options.sentence_locale)

    result = DiffResult(tuple(spans))
    logger.debug(
        "Compared %d vs %d characters: %d spans, %d changed",
        len(a),
        len(b),
        len(result),
        sum(1 for span in result.spans if span.op is not Op.EQUAL),
    )
    return result


def compare_sentences(a: str, b: str, locale: str | None = None) -> DiffResult:
    """Compare two texts, reporting changes as whole sentences."""
    return compare(
        a, b, LexOptions(promote_to=Granularity.SENTENCE, sentence_locale=locale)
    )


def compare_paragraphs(a: str, b: str) -> DiffResult:
    """Compare two texts, reporting changes as whole lines."""
    return compare(a, b, LexOptions(promote_to=Granularity.PARAGRAPH))


def compare_with_config(a: str, b: str, config: LexDiffConfig) -> DiffResult:
    return compare(a, b, config.to_options())
