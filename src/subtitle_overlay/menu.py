"""Host caption menu helpers: native panel detection and status labels."""

from __future__ import annotations

from enum import StrEnum
from typing import Iterable, Sequence


class MenuStatus(StrEnum):
    NOT_LOADED = "not loaded"
    LOADED = "loaded"
    ENABLED = "enabled"


def is_off_label(label: str, off_labels: Sequence[str]) -> bool:
    """
    Whether a menu entry is an explicit "off" option.

    Latin labels must match exactly (ignoring case); other scripts match as a
    substring, since localized menus decorate the word.
    """
    label = label.strip()
    for off in off_labels:
        if off.isascii():
            if label.lower() == off.lower():
                return True
        elif off in label:
            return True
    return False


def has_native_caption_panel(menus: Iterable[Sequence[str]], off_labels: Sequence[str]) -> bool:
    """A host menu exposes caption selection when any panel offers an "off" entry."""
    return any(
        any(is_off_label(label, off_labels) for label in labels)
        for labels in menus
    )


def menu_status(has_cues: bool, activated: bool) -> MenuStatus:
    if not has_cues:
        return MenuStatus.NOT_LOADED
    if activated:
        return MenuStatus.ENABLED
    return MenuStatus.LOADED
