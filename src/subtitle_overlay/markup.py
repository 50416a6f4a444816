"""Turn cue text into overlay markup."""

from __future__ import annotations


def escape_text(text: str) -> str:
    """Escape the characters that would otherwise be read as markup."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def cue_markup(text: str, box_class: str = "caption-box") -> str:
    """
    Wrap cue text for the overlay, keeping its line breaks.

    Returns an empty string for empty text so callers can treat it as a clear.
    """
    if not text:
        return ""
    body = escape_text(text).replace("\n", "<br>")
    return f'<span class="{box_class}">{body}</span>'
