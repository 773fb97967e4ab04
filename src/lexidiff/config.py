from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Mapping, MutableMapping

import yaml

from .languages import DEFAULT_LANGUAGE
from .options import LexOptions, TokenizerLike
from .promotion import Granularity
from .segmentation import UnicodeWordSegmenter
from .tokenizers import create_tokenizer

_STEMMING_NAMES = {"stemming", "stems", "default"}


@dataclass(slots=True)
class RenderSettings:
    """Configuration block for the unified-diff and inline renderers."""

    context_lines: int = 3
    label_a: str = "a"
    label_b: str = "b"
    insert_tag: str = "ins"
    delete_tag: str = "del"


@dataclass(slots=True)
class LexDiffConfig:
    """Configuration options for the comparison pipeline."""

    promote_to: str = Granularity.TOKENS.value
    sentence_locale: str | None = None
    default_language: str = DEFAULT_LANGUAGE
    tokenizer: str = "stemming"
    normalize_form: str | None = None
    coalesce_punctuation: bool = True
    diff_timeout: float = 1.0
    render: RenderSettings = field(default_factory=RenderSettings)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))

    def to_options(
        self,
        language_detector: Callable[[str], str] | None = None,
        tokenizer: TokenizerLike | None = None,
    ) -> LexOptions:
        """Build per-call options; explicit callables win over configured names."""
        if tokenizer is None and self.tokenizer.lower().strip() not in _STEMMING_NAMES:
            tokenizer = create_tokenizer(
                self.tokenizer,
                segmenter=UnicodeWordSegmenter(
                    coalesce_punctuation=self.coalesce_punctuation,
                    normalize_form=self.normalize_form,
                ),
            )
        return LexOptions(
            promote_to=Granularity.parse(self.promote_to),
            sentence_locale=self.sentence_locale,
            language_detector=language_detector,
            default_language=self.default_language,
            tokenizer=tokenizer,
            normalize_form=self.normalize_form,
            coalesce_punctuation=self.coalesce_punctuation,
            diff_timeout=self.diff_timeout,
        )


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {f.name for f in fields(LexDiffConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    if "render" in data:
        render_value = data["render"]
        if isinstance(render_value, RenderSettings):
            kwargs["render"] = render_value
        elif isinstance(render_value, Mapping):
            kwargs["render"] = _build_render_settings(render_value)
        else:
            kwargs.pop("render")
    return kwargs


def _build_render_settings(data: Mapping[str, Any]) -> RenderSettings:
    render_allowed = {f.name for f in fields(RenderSettings)}
    filtered = {key: data[key] for key in data if key in render_allowed}
    return RenderSettings(**filtered)


def config_from_dict(data: Mapping[str, Any] | None) -> LexDiffConfig:
    """Build a LexDiffConfig from a dictionary-like input."""
    if data is None:
        return LexDiffConfig()
    config = LexDiffConfig(**_build_kwargs(data))
    # Fail early on names the pipeline would reject later.
    Granularity.parse(config.promote_to)
    return config


def config_from_yaml(path: str | Path) -> LexDiffConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> LexDiffConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return LexDiffConfig()
    return config_from_yaml(path)
