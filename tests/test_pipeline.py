from typing import List

import pytest

from lexidiff import (
    DiffResult,
    Granularity,
    LexOptions,
    compare,
    compare_paragraphs,
    compare_sentences,
    compare_with_config,
    config_from_dict,
)
from lexidiff.errors import PatchMismatchError
from lexidiff.models import Op, SubToken
from lexidiff.tokenizers import WordTokenizer
from tests.utils import assert_spans_consistent

A = "Running, per the lexicon!\nNext entry stays.\n"
B = "Runner, per the lexicon!\nNext entry stays.\n"


@pytest.mark.parametrize("granularity", list(Granularity))
@pytest.mark.parametrize(
    ("a", "b"),
    [
        (A, B),
        ("", "Fresh text.\n"),
        ("Gone.\n", ""),
        ("One. Two. Three.", "One. Three. Four."),
        ("Line one\nLine two\n", "Line one\nLine 2\nLine three\n"),
    ],
)
def test_compare_rebuilds_both_texts(a: str, b: str, granularity: Granularity):
    result = compare(a, b, LexOptions(promote_to=granularity))

    assert_spans_consistent(a, b, result.spans)
    assert result.reconstruct_a() == a
    assert result.reconstruct_b() == b


def test_compare_defaults_to_token_granularity():
    result = compare(A, B)

    assert [span.op for span in result.spans] == [Op.DELETE, Op.INSERT, Op.EQUAL]
    assert result.has_changes
    assert not compare(A, A).has_changes


def test_apply_to_checks_the_source():
    result = compare(A, B)

    assert result.apply_to(A) == B
    with pytest.raises(PatchMismatchError):
        result.apply_to(A.upper())


def test_inline_markup():
    assert compare(A, B).to_inline_markup() == (
        "<del>Running</del><ins>Runner</ins>, per the lexicon!\nNext entry stays.\n"
    )


def test_delta_round_trip():
    result = compare(A, B)
    delta = result.to_delta()

    assert delta == f"-7\t+Runner\t={len(A) - 7}"
    rebuilt = DiffResult.from_delta(A, delta)
    assert rebuilt.reconstruct_b() == B
    assert_spans_consistent(A, B, rebuilt.spans)


def test_delta_escapes_special_characters():
    result = compare("a", "a\t100% b")

    assert "%09" in result.to_delta()
    assert DiffResult.from_delta("a", result.to_delta()).apply_to("a") == "a\t100% b"


def test_from_delta_rejects_bad_input():
    with pytest.raises(PatchMismatchError):
        DiffResult.from_delta("short", "=10")
    with pytest.raises(PatchMismatchError):
        DiffResult.from_delta("longer text", "=3")
    with pytest.raises(ValueError):
        DiffResult.from_delta("abc", "*3")
    with pytest.raises(ValueError):
        DiffResult.from_delta("abc", "=x")


def test_compare_rejects_invalid_arguments():
    with pytest.raises(TypeError):
        compare(None, "b")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        LexOptions(language_detector="en")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        LexOptions(tokenizer=42)  # type: ignore[arg-type]


def test_language_detector_is_called_per_word():
    words: List[str] = []

    def detector(word: str) -> str:
        words.append(word)
        return "fr"

    result = compare("Ils mangeaient.", "Ils mangées.", LexOptions(language_detector=detector))

    assert result.reconstruct_b() == "Ils mangées."
    assert "mangées" in words
    assert all(word.isalnum() for word in words)

    words.clear()
    compare("Hello world.", "Hello worlds.", LexOptions(language_detector=detector))
    assert sorted(words) == ["Hello", "Hello", "world", "worlds"]


def test_callable_tokenizer_override():
    def per_char(text: str) -> List[SubToken]:
        return [SubToken(i, i, 1, ch) for i, ch in enumerate(text)]

    result = compare("abc", "abd", LexOptions(tokenizer=per_char))

    assert [(s.op, s.text) for s in result.spans] == [
        (Op.EQUAL, "ab"),
        (Op.DELETE, "c"),
        (Op.INSERT, "d"),
    ]


def test_word_tokenizer_reports_whole_words():
    result = compare(A, B, LexOptions(tokenizer=WordTokenizer()))

    assert [s.text for s in result.spans if s.op is not Op.EQUAL] == ["Running", "Runner"]


def test_normalization_makes_equivalent_texts_equal():
    composed = "caf\u00e9"
    decomposed = "cafe\u0301"

    assert compare(composed, decomposed).has_changes
    assert not compare(composed, decomposed, LexOptions(normalize_form="NFC")).has_changes


def test_compare_sentences_and_paragraphs():
    sentences = compare_sentences(
        "Running, per the lexicon! Next entry stays.",
        "Runner, per the lexicon! Next entry stays.",
        locale="en",
    )
    assert sentences.spans[-1].text == "Next entry stays."

    paragraphs = compare_paragraphs(A, B)
    assert [(s.op, s.text) for s in paragraphs.spans] == [
        (Op.DELETE, "Running, per the lexicon!\n"),
        (Op.INSERT, "Runner, per the lexicon!\n"),
        (Op.EQUAL, "Next entry stays.\n"),
    ]


def test_compare_with_config_uses_configured_granularity():
    config = config_from_dict({"promote_to": "paragraph"})

    result = compare_with_config(A, B, config)

    assert result.spans[0].text == "Running, per the lexicon!\n"


def test_apply_to_rejects_none():
    with pytest.raises(TypeError):
        compare(A, B).apply_to(None)  # type: ignore[arg-type]
