"""Interfaces the track engine expects from the surrounding player page."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

MenuCallback = Callable[[Sequence[Sequence[str]]], None]


class OverlaySurface(ABC):
    @abstractmethod
    def show(self, markup: str) -> None:
        """Display escaped caption markup."""

    @abstractmethod
    def clear(self) -> None:
        pass


class CaptionControl(ABC):
    """The host player's own CC button."""

    @abstractmethod
    def is_on(self) -> bool:
        pass

    @abstractmethod
    def turn_on(self) -> None:
        pass

    @abstractmethod
    def set_native_hidden(self, hidden: bool) -> None:
        """Hide or reveal the player's own caption window."""


class MenuSource(ABC):
    @abstractmethod
    def subscribe(self, callback: MenuCallback) -> None:
        """
        Register ``callback`` for menu mutations.

        The callback receives the labels of every panel in the menu, once on
        subscription and again after each change.
        """


class FilePicker(ABC):
    @abstractmethod
    def request(self) -> None:
        """Ask the user for a subtitle file; the result goes to ``SubtitleTrack.load_text``."""


class Host(ABC):
    """
    Lookup of player collaborators.

    Each method returns ``None`` while the corresponding piece of the player
    page is not available yet.
    """

    @abstractmethod
    def overlay(self) -> Optional[OverlaySurface]:
        pass

    @abstractmethod
    def caption_control(self) -> Optional[CaptionControl]:
        pass

    @abstractmethod
    def menu(self) -> Optional[MenuSource]:
        pass

    @abstractmethod
    def file_picker(self) -> Optional[FilePicker]:
        pass
