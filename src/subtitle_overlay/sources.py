"""File acquisition for the CLI and the Streamlit demo."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Tuple

from .config import get_settings
from .errors import SubtitleSourceError


def check_extension(filename: str, accepted: Optional[Sequence[str]] = None) -> None:
    accepted = accepted if accepted is not None else get_settings().accepted_extensions
    suffix = Path(filename).suffix.lower()
    if accepted and suffix not in accepted:
        raise SubtitleSourceError(
            f"Unsupported subtitle type {suffix or '(none)'}; expected one of {', '.join(accepted)}",
            filename=filename,
        )


def decode_subtitle_bytes(data: bytes, encoding: Optional[str] = None) -> str:
    """Decode uploaded bytes; undecodable sequences become U+FFFD instead of failing."""
    encoding = encoding or get_settings().subtitle_encoding
    try:
        return data.decode(encoding, errors="replace")
    except LookupError as exc:
        raise SubtitleSourceError(f"Unknown text encoding: {encoding}") from exc


def read_subtitle_file(path: Path, encoding: Optional[str] = None) -> Tuple[str, str]:
    """Return ``(text, filename)`` for a subtitle file on disk."""
    check_extension(path.name)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise SubtitleSourceError(f"Cannot read {path.name}: {exc.strerror or exc}", filename=path.name) from exc
    return decode_subtitle_bytes(data, encoding), path.name
