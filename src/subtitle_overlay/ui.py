from __future__ import annotations

import html
from typing import Any, MutableMapping, Optional, Sequence

import streamlit as st

from .host import CaptionControl, FilePicker, Host, MenuCallback, MenuSource, OverlaySurface
from .menu import MenuStatus

OVERLAY_KEY = "overlay_markup"
CAPTIONS_ON_KEY = "native_captions_on"
NATIVE_HIDDEN_KEY = "native_hidden"
PICKER_OPEN_KEY = "picker_open"

OVERLAY_CSS = """
<style>
.caption-stage {
    position: relative;
    height: 220px;
    background: #121214;
    border: 1px dashed #27272a;
    border-radius: 12px;
}
.caption-stage .caption-line {
    position: absolute;
    left: 0;
    right: 0;
    bottom: 8%;
    padding: 0 4%;
    text-align: center;
    font-size: 24px;
    line-height: 1.4;
    color: #fff;
    text-shadow: 0 0 2px #000, 0 0 4px #000;
}
.caption-box {
    display: inline-block;
    background: rgba(8, 8, 8, 0.80);
    padding: 2px 8px;
    border-radius: 2px;
}
.dashboard-card {
    padding: 12px 16px;
    background: #18181b;
    border: 1px solid #27272a;
    border-radius: 10px;
}
.dashboard-card .stat-label {
    font-size: 12px;
    color: #a1a1aa;
    text-transform: uppercase;
    letter-spacing: 0.04em;
}
.dashboard-card .stat-value {
    margin-top: 4px;
    font-size: 18px;
    font-weight: 600;
    color: #fafafa;
    overflow-wrap: anywhere;
}
</style>
"""


class SessionOverlay(OverlaySurface):
    """Overlay surface backed by Streamlit session state."""

    def __init__(self, state: MutableMapping[str, Any]) -> None:
        self.state = state

    def show(self, markup: str) -> None:
        self.state[OVERLAY_KEY] = markup

    def clear(self) -> None:
        self.state[OVERLAY_KEY] = ""


class SessionCaptions(CaptionControl):
    """The simulated player's CC button."""

    def __init__(self, state: MutableMapping[str, Any]) -> None:
        self.state = state

    def is_on(self) -> bool:
        return bool(self.state.get(CAPTIONS_ON_KEY, False))

    def turn_on(self) -> None:
        self.state[CAPTIONS_ON_KEY] = True

    def set_native_hidden(self, hidden: bool) -> None:
        self.state[NATIVE_HIDDEN_KEY] = hidden


class SessionMenu(MenuSource):
    def __init__(self) -> None:
        self._callbacks: list[MenuCallback] = []
        self.menus: Sequence[Sequence[str]] = []

    def subscribe(self, callback: MenuCallback) -> None:
        self._callbacks.append(callback)
        callback(self.menus)

    def publish(self, menus: Sequence[Sequence[str]]) -> None:
        self.menus = menus
        for callback in self._callbacks:
            callback(menus)


class UploadPicker(FilePicker):
    """Reveals the sidebar uploader; the upload itself arrives on the next rerun."""

    def __init__(self, state: MutableMapping[str, Any]) -> None:
        self.state = state

    def request(self) -> None:
        self.state[PICKER_OPEN_KEY] = True


class SessionHost(Host):
    def __init__(self, state: MutableMapping[str, Any], player_ready: bool = True) -> None:
        self.player_ready = player_ready
        self._overlay = SessionOverlay(state)
        self._captions = SessionCaptions(state)
        self._picker = UploadPicker(state)
        self.session_menu = SessionMenu()

    def overlay(self) -> Optional[SessionOverlay]:
        return self._overlay if self.player_ready else None

    def caption_control(self) -> Optional[SessionCaptions]:
        return self._captions if self.player_ready else None

    def menu(self) -> Optional[SessionMenu]:
        return self.session_menu if self.player_ready else None

    def file_picker(self) -> UploadPicker:
        return self._picker


def status_label(status: MenuStatus) -> str:
    return f"Local subtitles · {status.value}"


def render_sidebar_header() -> None:
    """Renders the minimalist sidebar branding."""
    st.markdown(
        """
        <div style="padding-bottom: 20px; margin-bottom: 20px; border-bottom: 1px solid rgba(255,255,255,0.1);">
            <div style="font-weight: 600; font-size: 15px; color: #fff;">Subtitle Overlay</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_overlay(markup: str) -> None:
    """Draw the caption stage with the current overlay markup (already escaped)."""
    st.markdown(OVERLAY_CSS, unsafe_allow_html=True)
    st.markdown(
        f'<div class="caption-stage"><div class="caption-line">{markup}</div></div>',
        unsafe_allow_html=True,
    )


def render_stat_card(label: str, value: str) -> None:
    st.markdown(
        f"""
        <div class="dashboard-card">
            <div class="stat-label">{html.escape(label)}</div>
            <div class="stat-value">{html.escape(value)}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )
