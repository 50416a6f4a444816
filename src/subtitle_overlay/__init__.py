"""Overlay locally loaded SRT/WebVTT subtitles on top of a host video player."""

from .cues import Cue, SubtitleFormat, detect_format, load_cues, parse_cues
from .locator import binary_search, cue_at, locate
from .menu import MenuStatus
from .timecode import parse_timestamp
from .track import SubtitleTrack, TrackState

__all__ = [
    "Cue",
    "MenuStatus",
    "SubtitleFormat",
    "SubtitleTrack",
    "TrackState",
    "binary_search",
    "cue_at",
    "detect_format",
    "load_cues",
    "locate",
    "parse_cues",
    "parse_timestamp",
]
