"""Tests for the command line interface."""

import pytest
from typer.testing import CliRunner

from c2g import cli
from c2g.animation_pipeline import encode_game
from c2g.cli import app

from conftest import FakeRasterizer

runner = CliRunner()

PGN = "1. e4 e5 2. Qh5 Nc6 3. Bc4 Nf6 4. Qxf7# 1-0"


@pytest.fixture(autouse=True)
def fake_rendering(monkeypatch):
    """Render with solid tiles so the CLI runs without cairo."""
    monkeypatch.setattr(
        cli,
        "encode_game",
        lambda pgn_text, config, provider: encode_game(pgn_text, config, provider, FakeRasterizer()),
    )


def test_writes_gif(tmp_path):
    output = tmp_path / "game.gif"

    result = runner.invoke(app, [PGN, "--output", str(output), "--size", "64"])

    assert result.exit_code == 0, result.stdout + result.stderr
    assert output.read_bytes().startswith(b"GIF89")


def test_writes_webp(tmp_path):
    output = tmp_path / "game.webp"

    result = runner.invoke(app, [PGN, "-o", str(output), "-s", "64", "--style", "plain"])

    assert result.exit_code == 0, result.stdout + result.stderr
    assert output.read_bytes().startswith(b"RIFF")


def test_reads_input_file(tmp_path):
    pgn_file = tmp_path / "game.pgn"
    pgn_file.write_text(PGN)
    output = tmp_path / "game.gif"

    result = runner.invoke(app, ["--input", str(pgn_file), "--output", str(output), "--size", "64"])

    assert result.exit_code == 0, result.stdout + result.stderr
    assert output.exists()


def test_reads_stdin_and_writes_stdout():
    result = runner.invoke(app, ["--output", "-", "--size", "64"], input=PGN)

    assert result.exit_code == 0, result.stderr
    assert result.stdout_bytes.startswith(b"GIF89")


def test_real_delays(tmp_path):
    pgn = "1. e4 {[%clk 0:01:00]} e5 {[%clk 0:01:00]} 2. Nf3 {[%clk 0:00:58]} *"
    output = tmp_path / "game.gif"

    result = runner.invoke(app, [pgn, "--output", str(output), "--size", "64", "--delay", "real"])

    assert result.exit_code == 0, result.stdout + result.stderr


@pytest.mark.parametrize(
    "args, message",
    [
        (["--size", "100"], "not divisible by 8"),
        (["--style", "sparkles"], "Unknown style"),
        (["--dark", "nope"], "Cannot parse color"),
        (["--delay", "soon"], "Invalid delay"),
        (["--last-frame-delay", "real"], "fixed durations"),
        (["--output", "game.svg"], "Unsupported output format"),
    ],
)
def test_invalid_options(args, message):
    result = runner.invoke(app, [PGN, *args])

    assert result.exit_code == 1
    assert message in (result.stdout + result.stderr)


def test_size_from_environment():
    result = runner.invoke(app, [PGN], env={"C2G_SIZE": "100"})

    assert result.exit_code == 1
    assert "not divisible by 8" in (result.stdout + result.stderr)


def test_missing_input_file():
    result = runner.invoke(app, ["--input", "missing.pgn"])

    assert result.exit_code == 1
    assert "not found" in (result.stdout + result.stderr)


def test_argument_and_input_are_exclusive(tmp_path):
    result = runner.invoke(app, [PGN, "--input", str(tmp_path / "game.pgn")])

    assert result.exit_code == 1
    assert "Cannot specify both" in (result.stdout + result.stderr)


def test_empty_input(tmp_path):
    result = runner.invoke(app, ["--output", str(tmp_path / "game.gif")], input="")

    assert result.exit_code == 1
    assert "No game found" in (result.stdout + result.stderr)
