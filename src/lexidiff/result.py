from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .codec import decode_uri, encode_uri
from .errors import PatchMismatchError
from .models import DiffSpan, Op
from .rendering import (
    ensure_matches_source,
    reconstruct,
    render_inline_markup,
    render_unified_diff,
)

_DELTA_PREFIX = {Op.EQUAL: "=", Op.DELETE: "-", Op.INSERT: "+"}


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Ordered diff spans between a source text A and a target text B."""

    spans: Tuple[DiffSpan, ...]

    def __len__(self) -> int:
        return len(self.spans)

    @property
    def has_changes(self) -> bool:
        return any(span.op is not Op.EQUAL for span in self.spans)

    def reconstruct_a(self) -> str:
        return reconstruct(self.spans, Op.DELETE)

    def reconstruct_b(self) -> str:
        return reconstruct(self.spans, Op.INSERT)

    def apply_to(self, source_a: str) -> str:
        """Return B, provided ``source_a`` is exactly the A these spans were built from."""
        if source_a is None:
            raise TypeError("source_a must be a string, not None")
        ensure_matches_source(source_a, self.spans)
        return self.reconstruct_b()

    def to_unified_diff(
        self, label_a: str = "a", label_b: str = "b", context_lines: int = 3
    ) -> str:
        return render_unified_diff(
            self.reconstruct_a(),
            self.reconstruct_b(),
            self.spans,
            label_a=label_a,
            label_b=label_b,
            context_lines=context_lines,
        )

    def to_inline_markup(self, insert_tag: str = "ins", delete_tag: str = "del") -> str:
        return render_inline_markup(self.spans, insert_tag=insert_tag, delete_tag=delete_tag)

    def to_delta(self) -> str:
        """Serialize as a diff-match-patch style delta (``=N``, ``-N``, ``+text``)."""
        parts: List[str] = []
        for span in self.spans:
            if not span.text:
                continue
            if span.op is Op.INSERT:
                parts.append("+" + encode_uri(span.text))
            else:
                parts.append(f"{_DELTA_PREFIX[span.op]}{len(span.text)}")
        return "\t".join(parts)

    @classmethod
    def from_delta(cls, source_a: str, delta: str) -> "DiffResult":
        """Rebuild a result from ``source_a`` and a delta produced by :meth:`to_delta`."""
        if source_a is None or delta is None:
            raise TypeError("source_a and delta must be strings, not None")
        spans: List[DiffSpan] = []
        pos_a = pos_b = 0
        for part in delta.split("\t") if delta else []:
            if not part:
                continue
            marker, param = part[0], part[1:]
            if marker == "+":
                text = decode_uri(param)
                spans.append(DiffSpan.whole(Op.INSERT, text, start=pos_b))
                pos_b += len(text)
                continue
            if marker not in ("=", "-"):
                raise ValueError(f"Invalid delta operation '{marker}'.")
            try:
                count = int(param)
            except ValueError as exc:
                raise ValueError(f"Invalid delta length '{param}'.") from exc
            if count < 0:
                raise ValueError(f"Negative delta length '{param}'.")
            text = source_a[pos_a : pos_a + count]
            if len(text) != count:
                raise PatchMismatchError("Delta is longer than source A.")
            op = Op.EQUAL if marker == "=" else Op.DELETE
            spans.append(DiffSpan.whole(op, text, start=pos_a))
            pos_a += count
            if op is Op.EQUAL:
                pos_b += count
        if pos_a != len(source_a):
            raise PatchMismatchError(
                f"Delta covers {pos_a} characters but source A has {len(source_a)}."
            )
        return cls(tuple(spans))
