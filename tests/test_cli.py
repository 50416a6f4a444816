import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from subtitle_overlay.cli import _frange, app, markup_to_plain

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_root_logging(monkeypatch):
    monkeypatch.setattr("subtitle_overlay.cli.setup_logging", lambda *args, **kwargs: None)


@pytest.fixture
def srt_file(tmp_path: Path, srt_text: str) -> Path:
    path = tmp_path / "movie.srt"
    path.write_text(srt_text, encoding="utf-8")
    return path


def test_cues_command_lists_sorted_cues(srt_file: Path) -> None:
    result = runner.invoke(app, ["cues", str(srt_file)])

    assert result.exit_code == 0
    lines = result.stdout.strip().splitlines()
    assert "0:00:00.000 --> 0:00:01.500  Hello" in lines[0]
    assert "0:00:02.000 --> 0:00:03.000  World" in lines[1]


def test_cues_command_json(tmp_path: Path, vtt_text: str) -> None:
    path = tmp_path / "movie.vtt"
    path.write_text(vtt_text, encoding="utf-8")

    result = runner.invoke(app, ["cues", str(path), "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == [
        {"start": 0.0, "end": 1.5, "text": "Hello"},
        {"start": 2.0, "end": 3.0, "text": "World"},
    ]


def test_cues_command_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.srt"
    path.write_text("", encoding="utf-8")

    result = runner.invoke(app, ["cues", str(path)])

    assert result.exit_code == 0
    assert "No cues found." in result.stdout


def test_cues_command_rejects_unsupported_type(tmp_path: Path) -> None:
    path = tmp_path / "movie.mp4"
    path.write_bytes(b"\x00\x00")

    result = runner.invoke(app, ["cues", str(path)])

    assert result.exit_code == 1


def test_at_command(srt_file: Path) -> None:
    result = runner.invoke(app, ["at", str(srt_file), "0.5", "1.8", "2.5"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "0:00:00.500  Hello",
        "0:00:01.800  -",
        "0:00:02.500  World",
    ]


def test_play_command_prints_overlay_changes(srt_file: Path) -> None:
    result = runner.invoke(app, ["play", str(srt_file), "--step", "0.5"])

    assert result.exit_code == 0
    assert "Loaded 2 cues from movie.srt (active-unmanaged, enabled)" in result.stdout
    assert "[0:00:00.000] Hello" in result.stdout
    assert "[0:00:02.000] World" in result.stdout
    assert "[0:00:03.500]" not in result.stdout


def test_play_command_managed_presses_native_captions(srt_file: Path) -> None:
    result = runner.invoke(
        app,
        ["play", str(srt_file), "--step", "1", "--native-panel", "--captions-off"],
    )

    assert result.exit_code == 0
    assert "(native captions switched on)" in result.stdout
    assert "active-managed" in result.stdout
    assert "Hello" in result.stdout


def test_play_command_with_no_cues(tmp_path: Path) -> None:
    path = tmp_path / "junk.txt"
    path.write_text("no cues\n", encoding="utf-8")

    result = runner.invoke(app, ["play", str(path)])

    assert result.exit_code == 0
    assert "Loaded 0 cues from junk.txt (inactive, not loaded)" in result.stdout


def test_markup_to_plain() -> None:
    assert markup_to_plain('<span class="caption-box">a &amp; b<br>c</span>') == "a & b | c"


def test_frange() -> None:
    assert _frange(0.0, 1.0, 0.25) == [0.0, 0.25, 0.5, 0.75, 1.0]
    assert _frange(2.0, 1.0, 0.5) == []
