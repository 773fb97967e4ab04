import json
from pathlib import Path

from typer.testing import CliRunner

from lexidiff.cli import app

runner = CliRunner()

A = "Running, per the lexicon!\nNext entry stays.\n"
B = "Runner, per the lexicon!\nNext entry stays.\n"


def _write_pair(tmp_path: Path) -> tuple[Path, Path]:
    file_a = tmp_path / "a.txt"
    file_b = tmp_path / "b.txt"
    file_a.write_text(A, encoding="utf-8")
    file_b.write_text(B, encoding="utf-8")
    return file_a, file_b


def test_cli_compare_prints_unified_diff(tmp_path: Path):
    """compare prints a unified diff labelled with the given names."""
    file_a, file_b = _write_pair(tmp_path)
    result = runner.invoke(
        app,
        ["compare", str(file_a), str(file_b), "--label-a", "a.txt", "--label-b", "b.txt"],
    )

    assert result.exit_code == 0
    assert result.stdout == (
        "--- a.txt\n"
        "+++ b.txt\n"
        "@@ -1,3 +1,3 @@\n"
        "-Running\n"
        "+Runner\n"
        " , per the lexicon!\n"
        " Next entry stays.\n"
    )


def test_cli_compare_defaults_labels_to_paths(tmp_path: Path):
    file_a, file_b = _write_pair(tmp_path)
    result = runner.invoke(app, ["compare", str(file_a), str(file_b)])

    assert result.exit_code == 0
    assert result.stdout.splitlines()[0] == f"--- {file_a}"


def test_cli_compare_json_with_paragraph_promotion(tmp_path: Path):
    file_a, file_b = _write_pair(tmp_path)
    result = runner.invoke(
        app,
        ["compare", str(file_a), str(file_b), "--format", "json", "--promote-to", "paragraph"],
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert [span["op"] for span in payload["spans"]] == ["delete", "insert", "equal"]
    assert payload["spans"][2]["text"] == "Next entry stays.\n"


def test_cli_compare_html_and_delta(tmp_path: Path):
    file_a, file_b = _write_pair(tmp_path)

    html = runner.invoke(app, ["compare", str(file_a), str(file_b), "--format", "html"])
    assert html.exit_code == 0
    assert html.stdout.startswith("<del>Running</del><ins>Runner</ins>")

    delta = runner.invoke(app, ["compare", str(file_a), str(file_b), "--format", "delta"])
    assert delta.exit_code == 0
    assert delta.stdout.startswith("-7\t+Runner\t=")


def test_cli_compare_reads_render_settings_from_config(tmp_path: Path):
    file_a, file_b = _write_pair(tmp_path)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "render:\n  label_a: old\n  label_b: new\n  insert_tag: mark\n", encoding="utf-8"
    )

    unified = runner.invoke(
        app, ["compare", str(file_a), str(file_b), "--config", str(config_path)]
    )
    assert unified.exit_code == 0
    assert unified.stdout.startswith("--- old\n+++ new\n")

    html = runner.invoke(
        app,
        ["compare", str(file_a), str(file_b), "-c", str(config_path), "--format", "html"],
    )
    assert "<mark>Runner</mark>" in html.stdout


def test_cli_compare_rejects_unknown_options(tmp_path: Path):
    file_a, file_b = _write_pair(tmp_path)

    bad_format = runner.invoke(app, ["compare", str(file_a), str(file_b), "--format", "xml"])
    assert bad_format.exit_code != 0

    bad_level = runner.invoke(
        app, ["compare", str(file_a), str(file_b), "--promote-to", "chapter"]
    )
    assert bad_level.exit_code != 0


def test_cli_tokens(tmp_path: Path):
    """tokens shows the stem/suffix split the diff runs on."""
    path = tmp_path / "words.txt"
    path.write_text("Running, per", encoding="utf-8")

    split = runner.invoke(app, ["tokens", str(path)])
    assert split.exit_code == 0
    assert split.stdout == "Run|ning|, |per\n"

    whole = runner.invoke(app, ["tokens", str(path), "--words-only"])
    assert whole.stdout == "Running|, |per\n"


def test_cli_print_config():
    """print-config command dumps the current configuration values."""
    result = runner.invoke(app, ["print-config"])
    assert result.exit_code == 0
    assert "promote_to: tokens" in result.stdout
    assert "context_lines: 3" in result.stdout
