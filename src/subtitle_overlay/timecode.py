"""Lenient timestamp parsing for SRT / WebVTT time ranges."""

from __future__ import annotations

import re

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _leading_int(segment: str) -> int:
    match = _INT_PREFIX.match(segment)
    return int(match.group(1)) if match else 0


def _leading_float(segment: str) -> float:
    match = _FLOAT_PREFIX.match(segment)
    return float(match.group(1)) if match else 0.0


def parse_timestamp(raw: str | None) -> float:
    """
    Convert a timestamp token into seconds.

    Supports ``hh:mm:ss.mmm``, ``mm:ss,mmm``, ``ss.mmm`` and bare integers.
    Anything after the first space or tab (cue settings such as
    ``align:start``) is ignored. Segments that cannot be read count as zero,
    so malformed input yields a best-effort offset instead of an error.
    """
    if not raw:
        return 0.0
    token = str(raw).strip()
    if not token:
        return 0.0
    token = re.split(r"[ \t]", token, maxsplit=1)[0]
    token = token.replace(",", ".", 1)

    parts = token.split(":")
    hours = minutes = 0
    seconds = 0.0
    if len(parts) == 3:
        hours = _leading_int(parts[0])
        minutes = _leading_int(parts[1])
        seconds = _leading_float(parts[2])
    elif len(parts) == 2:
        minutes = _leading_int(parts[0])
        seconds = _leading_float(parts[1])
    elif len(parts) == 1:
        seconds = _leading_float(parts[0])

    return max(0.0, hours * 3600 + minutes * 60 + seconds)


def format_timestamp(seconds: float) -> str:
    """Render seconds as ``H:MM:SS.mmm`` for CLI output."""
    millis = int(round(max(0.0, seconds) * 1000))
    hours, rem = divmod(millis, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, ms = divmod(rem, 1000)
    return f"{hours:d}:{minutes:02d}:{secs:02d}.{ms:03d}"
