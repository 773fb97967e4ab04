"""
lexidiff package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .config import LexDiffConfig, config_from_dict, config_from_yaml, load_config
from .errors import CapacityExceededError, LexDiffError, PatchMismatchError
from .models import DiffSpan, Op, SubToken, Token, TokenRole, WordKind
from .options import LexOptions
from .pipeline import compare, compare_paragraphs, compare_sentences, compare_with_config
from .promotion import Granularity
from .result import DiffResult
from .segmentation import segment_words
from .morphology import split_word
from .rendering import render_inline_markup, render_unified_diff
from .tokenizers import create_tokenizer

__all__ = [
    "LexDiffConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "LexOptions",
    "Granularity",
    "DiffResult",
    "DiffSpan",
    "Op",
    "SubToken",
    "Token",
    "TokenRole",
    "WordKind",
    "LexDiffError",
    "CapacityExceededError",
    "PatchMismatchError",
    "compare",
    "compare_sentences",
    "compare_paragraphs",
    "compare_with_config",
    "segment_words",
    "split_word",
    "render_unified_diff",
    "render_inline_markup",
    "create_tokenizer",
]

__version__ = "0.1.0"
