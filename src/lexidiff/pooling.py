"""
Placeholder pooling.

A generic character diff knows nothing about word boundaries. Mapping every
distinct subtoken text to one private-use code point turns a subtoken
sequence into a string whose characters the diff engine compares atomically,
so no edit ever lands inside a subtoken.
"""

from __future__ import annotations

import logging
from typing import Dict, Sequence, Tuple

from .errors import CapacityExceededError
from .models import SubToken

logger = logging.getLogger(__name__)

# Basic Multilingual Plane private use area.
PUA_FIRST = 0xE000
PUA_LAST = 0xF8FF


class SymbolPool:
    """Bijection from subtoken text to placeholder symbols, allocated per comparison."""

    def __init__(self, first: int = PUA_FIRST, last: int = PUA_LAST) -> None:
        if last < first:
            raise ValueError("Symbol range must not be empty.")
        self._first = first
        self._last = last
        self._next = first
        self._symbols: Dict[str, str] = {}

    @property
    def capacity(self) -> int:
        return self._last - self._first + 1

    def __len__(self) -> int:
        return len(self._symbols)

    def symbol_for(self, text: str) -> str:
        """Return the symbol for ``text``, allocating a new one on first sight."""
        symbol = self._symbols.get(text)
        if symbol is None:
            if self._next > self._last:
                raise CapacityExceededError(self.capacity)
            symbol = chr(self._next)
            self._next += 1
            self._symbols[text] = symbol
        return symbol

    def encode(self, subtokens: Sequence[SubToken]) -> str:
        return "".join(self.symbol_for(st.text) for st in subtokens)


def encode_subtokens(
    seq_a: Sequence[SubToken],
    seq_b: Sequence[SubToken],
    pool: SymbolPool | None = None,
) -> Tuple[str, str]:
    """Encode both sequences against one shared pool."""
    pool = pool if pool is not None else SymbolPool()
    encoded_a = pool.encode(seq_a)
    encoded_b = pool.encode(seq_b)
    logger.debug(
        "Pooled %d + %d subtokens into %d/%d symbols",
        len(seq_a),
        len(seq_b),
        len(pool),
        pool.capacity,
    )
    return encoded_a, encoded_b
