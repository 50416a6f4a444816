"""Parse SRT and WebVTT text into a normalized cue sequence."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import List, Sequence, Tuple

from .timecode import parse_timestamp

logger = logging.getLogger(__name__)

_WEBVTT_HEADER = re.compile(r"^[\s\ufeff]*WEBVTT", re.IGNORECASE)
_TIME_RANGE = re.compile(r"(.+?)\s*-->\s*(.+)")
_SRT_INDEX = re.compile(r"^\d+$")
_ARROW = "-->"
# WebVTT blocks that never carry cue text.
_VTT_SKIPPED_BLOCKS = ("NOTE", "STYLE", "REGION")


class SubtitleFormat(StrEnum):
    SRT = "srt"
    WEBVTT = "webvtt"


@dataclass(frozen=True)
class Cue:
    start: float
    end: float
    text: str

    def contains(self, time: float) -> bool:
        return self.start <= time <= self.end


class _Stage(Enum):
    SKIP_HEADER = "skip-header"
    SEEK_BLOCK = "seek-block"
    EXPECT_TIME_RANGE = "expect-time-range"
    COLLECT_TEXT = "collect-text"


def detect_format(text: str) -> SubtitleFormat:
    """WebVTT when the text opens with a ``WEBVTT`` header, SRT otherwise."""
    return SubtitleFormat.WEBVTT if _WEBVTT_HEADER.match(text or "") else SubtitleFormat.SRT


def _is_skipped_vtt_block(line: str) -> bool:
    for keyword in _VTT_SKIPPED_BLOCKS:
        if line == keyword or line.startswith(keyword + " ") or line.startswith(keyword + "\t"):
            return True
    return False


class _CueScanner:
    """
    Line cursor over subtitle text.

    Each stage consumes lines and names the next stage; a block without a
    time range line is dropped and scanning resumes on the following line.
    """

    def __init__(self, text: str, fmt: SubtitleFormat) -> None:
        self.lines = text.lstrip("\ufeff").replace("\r", "").split("\n")
        self.fmt = fmt
        self.pos = 0
        self.cues: List[Cue] = []
        self._start = 0.0
        self._end = 0.0

    def _peek(self) -> str:
        if self.pos < len(self.lines):
            return self.lines[self.pos].strip()
        return ""

    def _skip_block(self) -> None:
        while self.pos < len(self.lines) and self.lines[self.pos].strip():
            self.pos += 1

    def run(self) -> List[Cue]:
        stage = _Stage.SKIP_HEADER if self.fmt is SubtitleFormat.WEBVTT else _Stage.SEEK_BLOCK
        while self.pos < len(self.lines):
            if stage is _Stage.SKIP_HEADER:
                stage = self._skip_header()
            elif stage is _Stage.SEEK_BLOCK:
                stage = self._seek_block()
            elif stage is _Stage.EXPECT_TIME_RANGE:
                stage = self._expect_time_range()
            else:
                stage = self._collect_text()
        if stage is _Stage.COLLECT_TEXT:
            # Time range on the very last line.
            self._collect_text()
        return self.cues

    def _skip_header(self) -> _Stage:
        # The WEBVTT line and its metadata run until the first blank line.
        while self.pos < len(self.lines):
            line = self._peek()
            if not line:
                break
            if _ARROW in line:
                return _Stage.SEEK_BLOCK
            self.pos += 1
        return _Stage.SEEK_BLOCK

    def _seek_block(self) -> _Stage:
        line = self._peek()
        if not line:
            self.pos += 1
            return _Stage.SEEK_BLOCK

        if self.fmt is SubtitleFormat.WEBVTT:
            if _is_skipped_vtt_block(line):
                self._skip_block()
                return _Stage.SEEK_BLOCK
            if _ARROW not in line:
                # Optional cue identifier.
                self.pos += 1
        elif _SRT_INDEX.match(line):
            self.pos += 1
        return _Stage.EXPECT_TIME_RANGE

    def _expect_time_range(self) -> _Stage:
        line = self._peek()
        match = _TIME_RANGE.match(line)
        if not match:
            if line:
                logger.debug("Skipping subtitle block without time range at line %d", self.pos + 1)
            self.pos += 1
            return _Stage.SEEK_BLOCK

        self._start = parse_timestamp(match.group(1))
        self._end = parse_timestamp(match.group(2))
        self.pos += 1
        return _Stage.COLLECT_TEXT

    def _collect_text(self) -> _Stage:
        text_lines: List[str] = []
        while self.pos < len(self.lines) and self.lines[self.pos].strip():
            text_lines.append(self.lines[self.pos])
            self.pos += 1

        if self._end < self._start:
            logger.debug("Dropping cue ending before it starts (%.3f > %.3f)", self._start, self._end)
        else:
            self.cues.append(Cue(self._start, self._end, "\n".join(text_lines)))
        return _Stage.SEEK_BLOCK


def parse_cues(text: str, fmt: SubtitleFormat | None = None) -> List[Cue]:
    """
    Parse subtitle text into cues, in file order.

    The result is not sorted; use :func:`load_cues` for a sequence ready for
    lookup. Malformed blocks are skipped, so the worst case is an empty list.
    """
    text = text or ""
    fmt = fmt or detect_format(text)
    return _CueScanner(text, fmt).run()


def sort_cues(cues: Sequence[Cue]) -> Tuple[Cue, ...]:
    """Stable sort by start time; ties keep their file order."""
    return tuple(sorted(cues, key=lambda cue: cue.start))


def load_cues(text: str) -> Tuple[Cue, ...]:
    """Detect the format, parse, and return cues sorted by start time."""
    return sort_cues(parse_cues(text))
