"""Errors raised at the file acquisition boundary."""


class SubtitleSourceError(Exception):
    """A subtitle file could not be read or is not a supported type."""

    def __init__(self, message: str, filename: str | None = None) -> None:
        super().__init__(message)
        self.filename = filename
