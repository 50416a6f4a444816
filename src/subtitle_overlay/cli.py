import html
import json
import re
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional, Sequence

import typer

from .config import get_settings
from .cues import Cue, load_cues
from .errors import SubtitleSourceError
from .host import CaptionControl, Host, MenuCallback, MenuSource, OverlaySurface
from .locator import cue_at
from .logging_setup import setup_logging
from .sources import read_subtitle_file
from .timecode import format_timestamp
from .track import SubtitleTrack

app = typer.Typer(help="Inspect local subtitle files and replay them against a simulated player.")

_TAG = re.compile(r"<[^>]+>")

SubtitleArg = typer.Argument(
    ...,
    exists=True,
    file_okay=True,
    dir_okay=False,
    readable=True,
    help="Path to an SRT or WebVTT file.",
)


def _read(path: Path) -> tuple[str, str]:
    try:
        return read_subtitle_file(path)
    except SubtitleSourceError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


def _one_line(text: str) -> str:
    return text.replace("\n", " | ")


def markup_to_plain(markup: str) -> str:
    """Undo overlay markup for terminal output."""
    return html.unescape(_TAG.sub("", markup.replace("<br>", " | ")))


class ConsoleOverlay(OverlaySurface):
    """Prints every overlay change, stamped with the current playback time."""

    def __init__(self) -> None:
        self.time = 0.0

    def show(self, markup: str) -> None:
        typer.echo(f"[{format_timestamp(self.time)}] {markup_to_plain(markup)}")

    def clear(self) -> None:
        typer.echo(f"[{format_timestamp(self.time)}] -")


class SimulatedCaptions(CaptionControl):
    def __init__(self, on: bool) -> None:
        self.on = on
        self.native_hidden = False

    def is_on(self) -> bool:
        return self.on

    def turn_on(self) -> None:
        self.on = True
        typer.echo("(native captions switched on)")

    def set_native_hidden(self, hidden: bool) -> None:
        self.native_hidden = hidden


class StaticMenu(MenuSource):
    def __init__(self, menus: Sequence[Sequence[str]]) -> None:
        self.menus = menus

    def subscribe(self, callback: MenuCallback) -> None:
        callback(self.menus)


class SimulatedHost(Host):
    def __init__(self, overlay: ConsoleOverlay, captions: SimulatedCaptions, menu: StaticMenu) -> None:
        self._overlay = overlay
        self._captions = captions
        self._menu = menu

    def overlay(self) -> ConsoleOverlay:
        return self._overlay

    def caption_control(self) -> SimulatedCaptions:
        return self._captions

    def menu(self) -> StaticMenu:
        return self._menu

    def file_picker(self) -> None:
        return None


def _frange(start: float, end: float, step: float) -> List[float]:
    count = int((end - start) / step) + 1 if end >= start else 0
    return [round(start + i * step, 6) for i in range(count)]


@app.callback()
def main_options(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (default from SUBOVERLAY_LOG_LEVEL or INFO).",
    ),
    json_logs: Optional[bool] = typer.Option(
        None,
        "--json-logs/--plain-logs",
        help="Emit JSON log lines (default from SUBOVERLAY_LOG_JSON).",
    ),
) -> None:
    setup_logging(log_level, json_logs, stream=sys.stderr)


@app.command("cues")
def list_cues(
    subtitle_file: Path = SubtitleArg,
    as_json: bool = typer.Option(False, "--json", help="Print cues as a JSON array."),
) -> None:
    """Print the parsed cues sorted by start time."""
    text, _ = _read(subtitle_file)
    cues = load_cues(text)
    if as_json:
        typer.echo(json.dumps([asdict(cue) for cue in cues], ensure_ascii=False, indent=2))
        return
    if not cues:
        typer.echo("No cues found.")
        return
    for idx, cue in enumerate(cues, start=1):
        typer.echo(
            f"{idx:>4}  {format_timestamp(cue.start)} --> {format_timestamp(cue.end)}  {_one_line(cue.text)}"
        )


@app.command("at")
def cue_at_times(
    subtitle_file: Path = SubtitleArg,
    times: List[float] = typer.Argument(..., help="Playback times in seconds."),
) -> None:
    """Print the cue text active at each playback time ('-' when none)."""
    text, _ = _read(subtitle_file)
    cues = load_cues(text)
    for t in times:
        cue: Optional[Cue] = cue_at(t, cues)
        typer.echo(f"{format_timestamp(t)}  {_one_line(cue.text) if cue else '-'}")


@app.command("play")
def play(
    subtitle_file: Path = SubtitleArg,
    start: float = typer.Option(0.0, "--start", min=0.0, help="First playback time in seconds."),
    end: Optional[float] = typer.Option(
        None,
        "--end",
        min=0.0,
        help="Last playback time in seconds (default: end of the last cue).",
    ),
    step: Optional[float] = typer.Option(
        None,
        "--step",
        min=0.001,
        help="Seconds between time samples (default from SUBOVERLAY_SAMPLE_INTERVAL).",
    ),
    native_panel: bool = typer.Option(
        False,
        "--native-panel/--no-native-panel",
        help="Simulate a player that has its own caption selection menu.",
    ),
    captions_on: bool = typer.Option(
        True,
        "--captions-on/--captions-off",
        help="Initial state of the simulated native CC button.",
    ),
) -> None:
    """Replay a subtitle file through the track engine and print overlay changes."""
    text, filename = _read(subtitle_file)

    settings = get_settings()
    overlay = ConsoleOverlay()
    captions = SimulatedCaptions(captions_on)
    menus = [["Off", "English"]] if native_panel else [["Playback speed", "Quality"]]
    track = SubtitleTrack(SimulatedHost(overlay, captions, StaticMenu(menus)), settings=settings)
    track.setup()

    count = track.load_text(text, filename)
    typer.echo(f"Loaded {count} cues from {filename} ({track.state.value}, {track.status.value})")
    if not count:
        return

    last_end = max(cue.end for cue in track.cues)
    for t in _frange(start, end if end is not None else last_end, step or settings.sample_interval_s):
        overlay.time = t
        track.on_time_sample(t)


def main() -> None:
    """Entry point for `python -m subtitle_overlay.cli`."""
    app()


if __name__ == "__main__":
    main()
