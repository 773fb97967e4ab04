from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from diff_match_patch import diff_match_patch

from .models import DiffSpan, Op, SubToken
from .pooling import SymbolPool, encode_subtokens
from .tokenizers import Tokenizer

logger = logging.getLogger(__name__)

DEFAULT_DIFF_TIMEOUT = 1.0

_DMP_OPS = {
    diff_match_patch.DIFF_EQUAL: Op.EQUAL,
    diff_match_patch.DIFF_INSERT: Op.INSERT,
    diff_match_patch.DIFF_DELETE: Op.DELETE,
}


def sequence_diff(
    units_a: str,
    units_b: str,
    *,
    timeout: float = DEFAULT_DIFF_TIMEOUT,
    semantic_cleanup: bool = True,
) -> List[Tuple[Op, int]]:
    """Diff two unit strings and return ``(op, run_length)`` pairs in order."""
    dmp = diff_match_patch()
    dmp.Diff_Timeout = timeout
    diffs = dmp.diff_main(units_a, units_b, False)
    if semantic_cleanup:
        dmp.diff_cleanupSemantic(diffs)
    return [(_DMP_OPS[code], len(text)) for code, text in diffs if text]


def map_back(
    ops: Sequence[Tuple[Op, int]],
    seq_a: Sequence[SubToken],
    seq_b: Sequence[SubToken],
) -> List[DiffSpan]:
    """Rebuild diff spans by walking the ops against the original subtokens."""
    spans: List[DiffSpan] = []
    run: List[SubToken] = []
    run_op: Op | None = None
    ia = ib = 0

    def flush() -> None:
        if run_op is not None and run:
            spans.append(DiffSpan(run_op, "".join(st.text for st in run), tuple(run)))
        run.clear()

    for op, length in ops:
        if run_op is not None and op is not run_op:
            flush()
        run_op = op
        for _ in range(length):
            if op is Op.EQUAL:
                # Equal runs keep A's subtokens; B advances in lockstep.
                run.append(seq_a[ia])
                ia += 1
                ib += 1
            elif op is Op.DELETE:
                run.append(seq_a[ia])
                ia += 1
            else:
                run.append(seq_b[ib])
                ib += 1
    flush()

    if ia != len(seq_a) or ib != len(seq_b):
        raise RuntimeError(
            f"Diff operations consumed {ia}/{len(seq_a)} and {ib}/{len(seq_b)} subtokens."
        )
    return spans


def diff_subtokens(
    seq_a: Sequence[SubToken],
    seq_b: Sequence[SubToken],
    *,
    timeout: float = DEFAULT_DIFF_TIMEOUT,
    pool: SymbolPool | None = None,
) -> List[DiffSpan]:
    """Subtoken-level diff: pool, run the sequence diff, then map back."""
    encoded_a, encoded_b = encode_subtokens(seq_a, seq_b, pool)
    ops = sequence_diff(encoded_a, encoded_b, timeout=timeout)
    spans = map_back(ops, seq_a, seq_b)
    logger.debug(
        "Diffed %d vs %d subtokens into %d spans", len(seq_a), len(seq_b), len(spans)
    )
    return spans


def diff_texts(
    a: str,
    b: str,
    tokenizer: Tokenizer,
    *,
    timeout: float = DEFAULT_DIFF_TIMEOUT,
) -> List[DiffSpan]:
    """Tokenize both texts and return the fine-grained diff spans."""
    if a is None or b is None:
        raise TypeError("Texts to compare must be strings, not None")
    if not isinstance(a, str) or not isinstance(b, str):
        raise TypeError("Texts to compare must be strings")
    if tokenizer is None:
        raise TypeError("tokenizer must not be None")
    return diff_subtokens(tokenizer.tokenize(a), tokenizer.tokenize(b), timeout=timeout)
