from __future__ import annotations


class LexDiffError(RuntimeError):
    """Base class for failures raised by the diff pipeline."""


class CapacityExceededError(LexDiffError):
    """Raised when a comparison needs more placeholder symbols than exist."""

    def __init__(self, capacity: int) -> None:
        super().__init__(
            f"Exceeded placeholder capacity of {capacity} distinct subtokens; "
            "split the input into smaller chunks (e.g. per paragraph)."
        )
        self.capacity = capacity


class PatchMismatchError(LexDiffError):
    """Raised when a span sequence is applied to a source it was not built from."""
