"""
Granularity promotion.

Fine subtoken spans are re-grouped to sentence or paragraph containers: any
container touched by a change is replaced as a whole, and runs of replaced
positions come out as one delete block followed by one insert block.
Containers of A and B are aligned by position only. A sentence inserted or deleted early in the
text shifts every later index, so unchanged trailing containers can come out
as replace pairs; reconstruction of A and B is never affected.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Sequence, Set

from .models import DiffSpan, Op
from .sentences import Range, paragraph_ranges, sentence_ranges

logger = logging.getLogger(__name__)


class Granularity(str, Enum):
    """Level at which differences are reported."""

    TOKENS = "tokens"
    SENTENCE = "sentence"
    PARAGRAPH = "paragraph"

    @classmethod
    def parse(cls, value: "str | Granularity") -> "Granularity":
        if isinstance(value, Granularity):
            return value
        normalized = str(value).lower().strip()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(
            f"Unknown granularity '{value}'; expected tokens, sentence or paragraph."
        )


def container_ranges(text: str, granularity: Granularity, locale: str | None = None) -> List[Range]:
    if granularity is Granularity.SENTENCE:
        return sentence_ranges(text, locale)
    if granularity is Granularity.PARAGRAPH:
        return paragraph_ranges(text)
    raise ValueError(f"Cannot build containers for granularity '{granularity.value}'.")


def coalesce_ranges(ranges: Iterable[Range]) -> List[Range]:
    """Merge overlapping or touching ranges; empty ranges are dropped."""
    ordered = sorted((r for r in ranges if r[1] > 0), key=lambda r: r[0])
    if not ordered:
        return []
    merged: List[Range] = []
    cur_start, cur_end = ordered[0][0], ordered[0][0] + ordered[0][1]
    for start, length in ordered[1:]:
        end = start + length
        if start <= cur_end:
            cur_end = max(cur_end, end)
        else:
            merged.append((cur_start, cur_end - cur_start))
            cur_start, cur_end = start, end
    merged.append((cur_start, cur_end - cur_start))
    return merged


def ranges_overlap(first: Range, second: Range) -> bool:
    return not (first[0] + first[1] <= second[0] or second[0] + second[1] <= first[0])


def promote_to_containers(changes: Sequence[Range], containers: Sequence[Range]) -> List[Range]:
    """Replace every changed range by the full containers it overlaps."""
    promoted: List[Range] = []
    for start, length in changes:
        end = start + length
        for c_start, c_length in containers:
            if c_start + c_length <= start:
                continue
            if c_start >= end:
                break
            promoted.append((c_start, c_length))
    return promoted


def _changed_ranges(spans: Sequence[DiffSpan], side: Op) -> List[Range]:
    return coalesce_ranges(
        (st.start, st.length) for span in spans if span.op is side for st in span.subtokens
    )


def _changed_indices(containers: Sequence[Range], promoted: Sequence[Range]) -> Set[int]:
    return {
        idx
        for idx, container in enumerate(containers)
        if any(ranges_overlap(container, p) for p in promoted)
    }


def promote(
    a: str,
    b: str,
    spans: Sequence[DiffSpan],
    granularity: Granularity,
    locale: str | None = None,
) -> List[DiffSpan]:
    """Re-group fine spans so every change covers whole sentences or paragraphs."""
    granularity = Granularity.parse(granularity)
    containers_a = container_ranges(a, granularity, locale)
    containers_b = container_ranges(b, granularity, locale)

    # Deletes carry offsets into A, inserts offsets into B.
    promoted_a = coalesce_ranges(
        promote_to_containers(_changed_ranges(spans, Op.DELETE), containers_a)
    )
    promoted_b = coalesce_ranges(
        promote_to_containers(_changed_ranges(spans, Op.INSERT), containers_b)
    )
    changed_a = _changed_indices(containers_a, promoted_a)
    changed_b = _changed_indices(containers_b, promoted_b)
    logger.debug(
        "Promoting to %s: %d/%d containers changed in A, %d/%d in B",
        granularity.value,
        len(changed_a),
        len(containers_a),
        len(changed_b),
        len(containers_b),
    )
    return _build_container_diff(a, b, containers_a, containers_b, changed_a, changed_b)


def _build_container_diff(
    a: str,
    b: str,
    containers_a: Sequence[Range],
    containers_b: Sequence[Range],
    changed_a: Set[int],
    changed_b: Set[int],
) -> List[DiffSpan]:
    spans: List[DiffSpan] = []
    deleted: List[Range] = []
    inserted: List[Range] = []

    def flush_replacement() -> None:
        if deleted:
            spans.append(_container_span(Op.DELETE, a, deleted))
        if inserted:
            spans.append(_container_span(Op.INSERT, b, inserted))
        deleted.clear()
        inserted.clear()

    ia = ib = 0
    while ia < len(containers_a) or ib < len(containers_b):
        a_left = ia < len(containers_a)
        b_left = ib < len(containers_b)
        a_changed = a_left and ia in changed_a
        b_changed = b_left and ib in changed_b

        if a_changed or b_changed:
            # A change on either side replaces the containers at this position on both.
            if a_left:
                deleted.append(containers_a[ia])
                ia += 1
            if b_left:
                inserted.append(containers_b[ib])
                ib += 1
            continue

        if a_left and b_left:
            start_a, len_a = containers_a[ia]
            start_b, len_b = containers_b[ib]
            ia += 1
            ib += 1
            if a[start_a : start_a + len_a] == b[start_b : start_b + len_b]:
                flush_replacement()
                spans.append(_container_span(Op.EQUAL, a, [(start_a, len_a)]))
            else:
                # Positions drifted apart; replace rather than guess.
                deleted.append((start_a, len_a))
                inserted.append((start_b, len_b))
            continue

        if a_left:
            deleted.append(containers_a[ia])
            ia += 1
        if b_left:
            inserted.append(containers_b[ib])
            ib += 1

    flush_replacement()
    return spans


def _container_span(op: Op, source: str, ranges: Sequence[Range]) -> DiffSpan:
    start = ranges[0][0]
    end = ranges[-1][0] + ranges[-1][1]
    return DiffSpan.whole(op, source[start:end], start=start)
