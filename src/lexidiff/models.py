from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class WordKind(str, Enum):
    """Coarse Unicode classification of a segmented token."""

    WORD = "word"
    NUMBER = "number"
    PUNCTUATION = "punctuation"
    SYMBOL = "symbol"
    WHITESPACE = "whitespace"
    OTHER = "other"


class TokenRole(str, Enum):
    """Which part of its parent token a subtoken covers."""

    WHOLE = "whole"
    STEM = "stem"
    SUFFIX = "suffix"


class Op(str, Enum):
    """Diff operation applied to a span."""

    EQUAL = "equal"
    INSERT = "insert"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class Token:
    """A lossless segment of the input text and its absolute offsets."""

    text: str
    start: int
    length: int
    kind: WordKind

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True, slots=True)
class SubToken:
    """A stem, suffix or whole-token view onto exactly one parent token."""

    parent_index: int
    start: int
    length: int
    text: str
    role: TokenRole = TokenRole.WHOLE
    kind: WordKind = WordKind.OTHER

    @property
    def end(self) -> int:
        return self.start + self.length

    def __str__(self) -> str:
        return f"{self.role.value}:{self.text!r}@{self.start}+{self.length} (p={self.parent_index})"


@dataclass(frozen=True, slots=True)
class DiffSpan:
    """A run of subtokens sharing one diff operation."""

    op: Op
    text: str
    subtokens: Tuple[SubToken, ...] = ()

    @classmethod
    def whole(cls, op: Op, text: str, start: int = 0, parent_index: int = 0) -> "DiffSpan":
        """Build a span backed by one synthesized subtoken covering ``text``."""
        if not text:
            return cls(op, text, ())
        subtoken = SubToken(
            parent_index=parent_index,
            start=start,
            length=len(text),
            text=text,
            role=TokenRole.WHOLE,
        )
        return cls(op, text, (subtoken,))
