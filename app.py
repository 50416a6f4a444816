from __future__ import annotations

import sys
import traceback
from pathlib import Path
from typing import Any, MutableMapping

import streamlit as st

# --- Helper utilities -----------------------------------------------------


def _configure_page() -> None:
    """Apply shared Streamlit page configuration."""
    st.set_page_config(
        page_title="Subtitle Overlay",
        page_icon="💬",
        layout="wide",
        initial_sidebar_state="expanded",
    )


def _should_autorun() -> bool:
    """Detect whether the app is running inside a Streamlit runtime."""
    return st.runtime.exists()


# Ensure src/ is on the import path when running via `streamlit run app.py`
ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from subtitle_overlay import metrics  # type: ignore  # noqa: E402
from subtitle_overlay.config import get_settings  # type: ignore  # noqa: E402
from subtitle_overlay.errors import SubtitleSourceError  # type: ignore  # noqa: E402
from subtitle_overlay.logging_setup import setup_logging  # type: ignore  # noqa: E402
from subtitle_overlay.sources import check_extension, decode_subtitle_bytes  # type: ignore  # noqa: E402
from subtitle_overlay.track import SubtitleTrack  # type: ignore  # noqa: E402
from subtitle_overlay.ui import (  # type: ignore  # noqa: E402
    CAPTIONS_ON_KEY,
    OVERLAY_KEY,
    PICKER_OPEN_KEY,
    SessionHost,
    render_overlay,
    render_sidebar_header,
    render_stat_card,
    status_label,
)

NATIVE_PANEL_MENUS = [["Off", "English (auto-generated)", "Auto-translate"]]
PLAIN_MENUS = [["Playback speed", "Quality"]]


def _log_ui_error(exc: Exception, context: dict | None = None) -> None:
    """Best-effort logging for UI-triggered errors."""
    event: dict[str, object] = {
        "status": "error",
        "error": f"{type(exc).__name__}: {exc}",
        "traceback": traceback.format_exc(),
    }
    if context:
        event.update(context)
    metrics.log_track_metrics(event)


def _get_track(state: MutableMapping[str, Any]) -> SubtitleTrack:
    """Create the per-session engine once, then re-run its idempotent setup."""
    if "track" not in state:
        state.setdefault(CAPTIONS_ON_KEY, True)
        state.setdefault(OVERLAY_KEY, "")
        host = SessionHost(state)
        state["host"] = host
        state["track"] = SubtitleTrack(host)
    track: SubtitleTrack = state["track"]
    track.setup()
    return track


def _sync_native_panel(state: MutableMapping[str, Any], has_panel: bool) -> None:
    """Publish a menu change only when the checkbox actually flipped."""
    if state.get("native_panel") == has_panel:
        return
    state["native_panel"] = has_panel
    host: SessionHost = state["host"]
    host.session_menu.publish(NATIVE_PANEL_MENUS if has_panel else PLAIN_MENUS)


def _load_upload(state: MutableMapping[str, Any], name: str, data: bytes) -> int:
    """Hand an uploaded file to the engine once per distinct upload."""
    marker = (name, len(data))
    if state.get("loaded_upload") == marker:
        return -1
    check_extension(name)
    text = decode_subtitle_bytes(data)
    state["loaded_upload"] = marker
    state[PICKER_OPEN_KEY] = False
    track: SubtitleTrack = state["track"]
    return track.load_text(text, name)


def _navigate(state: MutableMapping[str, Any]) -> None:
    """Simulate the player moving to another video."""
    # Forget the last upload so the same file can be applied to the new video.
    state.pop("loaded_upload", None)
    track: SubtitleTrack = state["track"]
    track.on_content_change_start()
    track.on_content_change_finish()
    # The new video rebuilds its settings menu.
    host: SessionHost = state["host"]
    host.session_menu.publish(host.session_menu.menus)


def _playback_range(track: SubtitleTrack) -> float:
    if not track.cues:
        return 60.0
    return max(60.0, max(cue.end for cue in track.cues) + 1.0)


def run_app() -> None:
    _configure_page()
    setup_logging()
    settings = get_settings()
    state = st.session_state
    track = _get_track(state)

    with st.sidebar:
        render_sidebar_header()

        has_panel = st.checkbox("Player offers its own caption menu", value=bool(state.get("native_panel")))
        _sync_native_panel(state, has_panel)

        captions_on = st.toggle("Native CC button", value=bool(state.get(CAPTIONS_ON_KEY)))
        state[CAPTIONS_ON_KEY] = captions_on

        if st.button("Pick a native caption track", use_container_width=True):
            track.on_native_track_changed()

        uploaded = st.file_uploader(
            "Subtitle file",
            type=[ext.lstrip(".") for ext in settings.accepted_extensions],
        )
        if uploaded is None:
            state.pop("loaded_upload", None)
        else:
            try:
                count = _load_upload(state, uploaded.name, uploaded.getvalue())
                if count == 0:
                    st.warning("No subtitles found in that file.")
            except SubtitleSourceError as exc:
                _log_ui_error(exc, {"filename": uploaded.name})
                st.error(str(exc))

        if st.button("Navigate to next video", use_container_width=True):
            _navigate(state)

    if st.button(status_label(track.status), type="primary"):
        track.on_menu_item_activated()
        st.rerun()
    if state.get(PICKER_OPEN_KEY):
        st.info("Choose a subtitle file in the sidebar.")

    t = st.slider("Playback time (s)", 0.0, _playback_range(track), step=0.1, key="playback_time")
    track.on_time_sample(t)

    render_overlay(state.get(OVERLAY_KEY, ""))

    cols = st.columns(4)
    with cols[0]:
        render_stat_card("Track", track.state.value)
    with cols[1]:
        render_stat_card("Source", track.filename or "none")
    with cols[2]:
        render_stat_card("Cues", str(len(track.cues)))
    with cols[3]:
        render_stat_card("Active cue", str(track.current_index))


if _should_autorun():  # pragma: no cover
    run_app()
