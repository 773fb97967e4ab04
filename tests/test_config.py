from pathlib import Path

import pytest

from lexidiff.config import (
    LexDiffConfig,
    RenderSettings,
    config_from_dict,
    config_from_yaml,
    load_config,
)
from lexidiff.promotion import Granularity
from lexidiff.tokenizers import WordTokenizer


def test_defaults():
    config = load_config(None)

    assert config.promote_to == "tokens"
    assert config.default_language == "en"
    assert config.render == RenderSettings()
    assert config.to_dict()["render"]["context_lines"] == 3


def test_config_from_dict_builds_nested_render_settings_and_ignores_unknown_keys():
    config = config_from_dict(
        {
            "promote_to": "sentence",
            "sentence_locale": "fr",
            "render": {"context_lines": 1, "label_a": "old", "colour": "red"},
            "unknown": True,
        }
    )

    assert config.promote_to == "sentence"
    assert config.render.context_lines == 1
    assert config.render.label_a == "old"
    assert config.render.label_b == "b"


def test_config_from_dict_rejects_unknown_granularity():
    with pytest.raises(ValueError):
        config_from_dict({"promote_to": "chapter"})


def test_config_from_yaml(tmp_path: Path):
    path = tmp_path / "lexidiff.yaml"
    path.write_text(
        "promote_to: paragraph\ndefault_language: de\nrender:\n  insert_tag: mark\n",
        encoding="utf-8",
    )

    config = config_from_yaml(path)

    assert config.promote_to == "paragraph"
    assert config.default_language == "de"
    assert config.render.insert_tag == "mark"


def test_yaml_must_be_a_mapping(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError):
        config_from_yaml(path)


def test_empty_yaml_gives_defaults(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert config_from_yaml(path) == LexDiffConfig()


def test_to_options_translates_names():
    options = LexDiffConfig(
        promote_to="Paragraph", tokenizer="words", normalize_form="nfkc"
    ).to_options()

    assert options.promote_to is Granularity.PARAGRAPH
    assert options.normalize_form == "NFKC"
    assert isinstance(options.tokenizer, WordTokenizer)


def test_to_options_prefers_explicit_callables():
    def detector(word: str) -> str:
        return "fr"

    options = LexDiffConfig().to_options(language_detector=detector)

    assert options.language_detector is detector
    assert options.tokenizer is None


def test_to_options_rejects_unknown_tokenizer_name():
    with pytest.raises(ValueError):
        LexDiffConfig(tokenizer="morphemes").to_options()
