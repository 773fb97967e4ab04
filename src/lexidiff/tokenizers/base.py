from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, List, Sequence

from ..models import SubToken


class Tokenizer(ABC):
    """Turns text into the subtoken sequence the differ compares."""

    @abstractmethod
    def tokenize(self, text: str) -> List[SubToken]:
        """Return subtokens whose texts concatenate back to ``text``."""
        raise NotImplementedError


class CallableTokenizer(Tokenizer):
    """Adapt an arbitrary callable into the Tokenizer interface."""

    def __init__(self, func: Callable[[str], Sequence[SubToken]]) -> None:
        if not callable(func):
            raise TypeError("tokenizer must be callable")
        self._func = func

    def tokenize(self, text: str) -> List[SubToken]:
        return list(self._func(text))
