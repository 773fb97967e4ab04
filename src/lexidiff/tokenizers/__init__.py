from __future__ import annotations

from typing import Any

from .base import CallableTokenizer, Tokenizer
from .stemming import StemmingTokenizer
from .words import WordTokenizer

__all__ = [
    "Tokenizer",
    "CallableTokenizer",
    "StemmingTokenizer",
    "WordTokenizer",
    "create_tokenizer",
]


def create_tokenizer(name: str, **kwargs: Any) -> Tokenizer:
    """Factory for building tokenizers by name."""
    normalized = name.lower().strip()
    if normalized in {"stemming", "stems", "default"}:
        return StemmingTokenizer(**kwargs)
    if normalized in {"words", "word"}:
        return WordTokenizer(**kwargs)
    raise ValueError(f"Unknown tokenizer '{name}'.")
