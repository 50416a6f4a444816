"""Subtitle track engine: activation state, native caption arbitration and rendering."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Optional, Sequence, Tuple

from .config import Settings, get_settings
from .cues import Cue, detect_format, load_cues
from .host import CaptionControl, FilePicker, Host, MenuSource, OverlaySurface
from .locator import NO_CUE, locate
from .markup import cue_markup
from .menu import MenuStatus, has_native_caption_panel, menu_status
from .metrics import log_track_metrics, measure_time

logger = logging.getLogger(__name__)


class TrackState(StrEnum):
    INACTIVE = "inactive"
    ACTIVE_UNMANAGED = "active-unmanaged"
    ACTIVE_MANAGED = "active-managed"


class SubtitleTrack:
    """
    One local subtitle track laid over a host player.

    All inbound events are plain method calls (time samples, menu clicks,
    native caption changes, navigation); the engine never schedules work on
    its own. Collaborators are looked up through ``host`` by :meth:`setup`,
    and every operation quietly does nothing while one is missing.
    """

    def __init__(self, host: Optional[Host] = None, settings: Optional[Settings] = None) -> None:
        self.host = host
        self.settings = settings or get_settings()

        self.cues: Tuple[Cue, ...] = ()
        self.filename: Optional[str] = None
        self.activated = False
        self.has_competing_native_track = False
        self.current_index = NO_CUE
        self.last_time: Optional[float] = None

        self._overlay: Optional[OverlaySurface] = None
        self._captions: Optional[CaptionControl] = None
        self._picker: Optional[FilePicker] = None
        self._menu: Optional[MenuSource] = None
        # Cue index currently on the overlay; None when unknown.
        self._shown: Optional[int] = None

    # --- Derived state -------------------------------------------------

    @property
    def state(self) -> TrackState:
        if not self.activated:
            return TrackState.INACTIVE
        if self.has_competing_native_track:
            return TrackState.ACTIVE_MANAGED
        return TrackState.ACTIVE_UNMANAGED

    @property
    def status(self) -> MenuStatus:
        return menu_status(bool(self.cues), self.activated)

    @property
    def active_cue(self) -> Optional[Cue]:
        if 0 <= self.current_index < len(self.cues):
            return self.cues[self.current_index]
        return None

    # --- Setup ---------------------------------------------------------

    def setup(self) -> None:
        """
        Bind whatever collaborators the host currently offers.

        Safe to call repeatedly: known collaborators are kept, and a menu is
        subscribed to only once.
        """
        if self.host is None:
            return

        overlay = self.host.overlay()
        if overlay is not None and overlay is not self._overlay:
            self._overlay = overlay
            self._shown = None

        captions = self.host.caption_control()
        if captions is not None:
            self._captions = captions

        picker = self.host.file_picker()
        if picker is not None:
            self._picker = picker

        menu = self.host.menu()
        if menu is not None and menu is not self._menu:
            self._menu = menu
            menu.subscribe(self.on_menu_changed)

        self._sync_native_visibility()

    # --- Inbound events ------------------------------------------------

    def load_text(self, text: str, filename: Optional[str] = None) -> int:
        """
        Replace the cue sequence with the subtitles in ``text``.

        The track switches itself on when at least one cue was found. Returns
        the number of cues loaded.
        """
        timings: dict[str, float] = {}
        with measure_time(timings, "parse_s"):
            cues = load_cues(text)

        self._clear(force=True)
        self.cues = cues
        self.filename = filename
        self.current_index = NO_CUE
        self.activated = bool(cues)
        self._sync_native_visibility()

        fmt = detect_format(text)
        if cues:
            logger.info("Loaded subtitles %s: %d cues (%s)", filename, len(cues), fmt.value)
        else:
            logger.warning("No cues found in %s", filename)
        log_track_metrics(
            {
                "event": "load",
                "filename": filename,
                "format": fmt.value,
                "cue_count": len(cues),
                "timings": timings,
            }
        )

        self._ensure_native_captions_on()
        if self.last_time is not None:
            self._tick(self.last_time)
        return len(cues)

    def on_time_sample(self, time: float) -> None:
        self.last_time = time
        self._tick(time)

    def on_menu_item_activated(self) -> None:
        """The local-subtitles entry in the root menu was clicked."""
        if not self.cues:
            if self._picker is None:
                logger.debug("No file picker available; ignoring menu click")
                return
            self._picker.request()
            return
        self.on_local_track_toggle()

    def on_local_track_toggle(self) -> None:
        if not self.cues:
            logger.debug("Toggle ignored: no subtitles loaded")
            return

        self.activated = not self.activated
        logger.debug("Local track %s", "enabled" if self.activated else "disabled")
        self._sync_native_visibility()
        if self.activated:
            self._ensure_native_captions_on()
            if self.last_time is not None:
                self._tick(self.last_time)
        else:
            self._deactivate()

    def on_native_track_changed(self) -> None:
        """The user picked a native caption option (or native "off")."""
        if self.activated:
            logger.debug("Native caption selection took over from the local track")
        self.activated = False
        self._sync_native_visibility()
        self._deactivate()

    def on_menu_changed(self, menus: Sequence[Sequence[str]]) -> None:
        present = has_native_caption_panel(menus, self.settings.native_off_labels)
        if present != self.has_competing_native_track:
            logger.debug("Native caption panel %s", "detected" if present else "gone")
        self.has_competing_native_track = present

    def on_content_change_start(self) -> None:
        """Navigation to another video began: drop everything."""
        self.cues = ()
        self.filename = None
        self.current_index = NO_CUE
        self.activated = False
        self.has_competing_native_track = False
        self.last_time = None
        self._clear(force=True)
        self._sync_native_visibility()

    def on_content_change_finish(self) -> None:
        self.setup()

    # --- Internals -----------------------------------------------------

    def _tick(self, time: float) -> None:
        if not self.cues or not self.activated:
            self._clear()
            return

        if self.has_competing_native_track and not self._native_captions_on():
            # Keep current_index so switching CC back on resumes in place.
            self._clear()
            return

        self.current_index = locate(time, self.cues, self.current_index)
        self._render(self.current_index)

    def _deactivate(self) -> None:
        self._clear(force=True)
        self.current_index = NO_CUE

    def _native_captions_on(self) -> bool:
        if self._captions is None:
            return True
        return self._captions.is_on()

    def _ensure_native_captions_on(self) -> None:
        if not (self.activated and self.has_competing_native_track):
            return
        if self._captions is not None and not self._captions.is_on():
            self._captions.turn_on()

    def _sync_native_visibility(self) -> None:
        if self._captions is not None:
            self._captions.set_native_hidden(self.activated)

    def _render(self, index: int) -> None:
        if index == NO_CUE:
            self._clear()
            return
        if self._overlay is None or self._shown == index:
            return
        markup = cue_markup(self.cues[index].text, self.settings.caption_box_class)
        if markup:
            self._overlay.show(markup)
        else:
            self._overlay.clear()
        self._shown = index

    def _clear(self, force: bool = False) -> None:
        if self._overlay is None:
            return
        if force or self._shown != NO_CUE:
            self._overlay.clear()
            self._shown = NO_CUE
