"""
Small demo contrasting a character-level diff with the token-aware diff at
each reporting granularity.
"""

from __future__ import annotations

from diff_match_patch import diff_match_patch

from lexidiff import DiffResult, Granularity, LexOptions, compare
from lexidiff.models import Op
from lexidiff.tokenizers import WordTokenizer

V1 = (
    "Alice was beginning to get very tired of sitting by her sister on the bank, "
    "and of having nothing to do."
)
V2 = (
    "Alice was getting very tired to sit by her sister on the bank, "
    "with nothing to do."
)


def _highlight(spans) -> str:
    parts = []
    for op, text in spans:
        if op is Op.INSERT:
            parts.append(f"\x1b[4m{text}\x1b[24m")
        elif op is Op.DELETE:
            parts.append(f"[{text}]")
        else:
            parts.append(text)
    return "".join(parts)


def _result_spans(result: DiffResult):
    return [(span.op, span.text) for span in result.spans]


def main() -> None:
    print(f"< {V1}")
    print(f"> {V2}")

    dmp = diff_match_patch()
    chars = dmp.diff_main(V1, V2, False)
    dmp.diff_cleanupSemantic(chars)
    ops = {dmp.DIFF_INSERT: Op.INSERT, dmp.DIFF_DELETE: Op.DELETE, dmp.DIFF_EQUAL: Op.EQUAL}
    print("\nCharacter diff (fragments of unrelated words get recycled):")
    print(_highlight([(ops[code], text) for code, text in chars]))

    print("\nWord diff:")
    print(_highlight(_result_spans(compare(V1, V2, LexOptions(tokenizer=WordTokenizer())))))

    print("\nStem/suffix diff:")
    print(_highlight(_result_spans(compare(V1, V2))))

    print("\nSentence diff:")
    sentences = compare(V1, V2, LexOptions(promote_to=Granularity.SENTENCE))
    print(_highlight(_result_spans(sentences)))

    print("\nUnified diff:")
    print(compare(V1 + "\n", V2 + "\n").to_unified_diff("v1", "v2"), end="")


if __name__ == "__main__":
    main()
