from __future__ import annotations

import json
from dataclasses import replace as dc_replace
from pathlib import Path
from typing import Dict, List

import typer
import yaml

from .config import LexDiffConfig, RenderSettings, load_config
from .errors import LexDiffError
from .pipeline import compare as compare_texts
from .promotion import Granularity
from .result import DiffResult
from .tokenizers import StemmingTokenizer, WordTokenizer

app = typer.Typer(help="Token-aware text diff CLI.", no_args_is_help=True)

_FORMATS = ("unified", "html", "json", "delta")


@app.command()
def compare(
    file_a: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    file_b: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    config: Path | None = typer.Option(None, "--config", "-c"),
    promote_to: str | None = typer.Option(
        None, "--promote-to", help="Report changes as tokens, sentence or paragraph."
    ),
    output_format: str = typer.Option(
        "unified", "--format", "-f", help="Output format: unified, html, json or delta."
    ),
    context: int | None = typer.Option(
        None, "--context", "-U", help="Number of context lines around changes."
    ),
    language: str | None = typer.Option(
        None, "--language", "-l", help="Language code used for stemming (e.g. 'fr')."
    ),
    sentence_locale: str | None = typer.Option(
        None, "--sentence-locale", help="Locale for sentence boundary detection."
    ),
    label_a: str | None = typer.Option(None, "--label-a", help="Header label for A."),
    label_b: str | None = typer.Option(None, "--label-b", help="Header label for B."),
) -> None:
    """Compare two text files and print the differences."""
    cfg = _load_config_or_fail(config)
    _apply_overrides(cfg, promote_to, context, language, sentence_locale, label_a, label_b)
    fmt = output_format.lower().strip()
    if fmt not in _FORMATS:
        raise typer.BadParameter(
            f"Unknown format '{output_format}'; expected one of {', '.join(_FORMATS)}."
        )

    text_a = _read_text(file_a)
    text_b = _read_text(file_b)
    try:
        result = compare_texts(text_a, text_b, cfg.to_options())
    except (LexDiffError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    # Labels default to the file names, as diff(1) does.
    render = dc_replace(
        cfg.render,
        label_a=label_a or (cfg.render.label_a if config else str(file_a)),
        label_b=label_b or (cfg.render.label_b if config else str(file_b)),
    )
    typer.echo(_render(result, fmt, render), nl=False)


@app.command()
def tokens(
    input_path: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    language: str = typer.Option("en", "--language", "-l"),
    words_only: bool = typer.Option(
        False, "--words-only", help="Skip stem/suffix splitting."
    ),
) -> None:
    """Print the subtokens a file is diffed on, separated by '|'."""
    text = _read_text(input_path)
    tokenizer = WordTokenizer() if words_only else StemmingTokenizer(default_language=language)
    typer.echo("|".join(subtoken.text for subtoken in tokenizer.tokenize(text)))


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = LexDiffConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _load_config_or_fail(path: Path | None) -> LexDiffConfig:
    try:
        return load_config(path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise typer.BadParameter(f"Could not load config: {exc}") from exc


def _apply_overrides(
    config: LexDiffConfig,
    promote_to: str | None,
    context: int | None,
    language: str | None,
    sentence_locale: str | None,
    label_a: str | None,
    label_b: str | None,
) -> None:
    if promote_to is not None:
        try:
            config.promote_to = Granularity.parse(promote_to).value
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
    if context is not None:
        config.render.context_lines = context
    if language is not None:
        config.default_language = language
    if sentence_locale is not None:
        config.sentence_locale = sentence_locale
    if label_a is not None:
        config.render.label_a = label_a
    if label_b is not None:
        config.render.label_b = label_b


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(f"{path} is not valid UTF-8 text.") from exc


def _render(result: DiffResult, fmt: str, render: RenderSettings) -> str:
    if fmt == "unified":
        return result.to_unified_diff(
            render.label_a, render.label_b, context_lines=render.context_lines
        )
    if fmt == "html":
        return result.to_inline_markup(render.insert_tag, render.delete_tag) + "\n"
    if fmt == "delta":
        return result.to_delta() + "\n"
    payload: List[Dict[str, str]] = [
        {"op": span.op.value, "text": span.text} for span in result.spans
    ]
    return json.dumps({"spans": payload}, indent=2, ensure_ascii=False) + "\n"


if __name__ == "__main__":
    main()
