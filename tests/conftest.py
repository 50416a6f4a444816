from __future__ import annotations

import pytest
from fakes import FakeCaptions, FakeHost, FakeMenu, FakeOverlay, FakePicker

from subtitle_overlay.config import get_settings

SRT_SAMPLE = """1
00:00:00,000 --> 00:00:01,500
Hello

2
00:00:02,000 --> 00:00:03,000
World
"""

VTT_SAMPLE = """WEBVTT

00:00.000 --> 00:01.500
Hello

00:02.000 --> 00:03.000
World
"""


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Settings are cached per process; rebuild them around every test."""
    monkeypatch.delenv("PIPELINE_LOGGING", raising=False)
    monkeypatch.delenv("PIPELINE_LOG_PATH", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


NATIVE_MENUS = [["Playback speed", "Subtitles/CC"], ["Off", "English", "Auto-translate"]]
PLAIN_MENUS = [["Playback speed", "Quality"]]


@pytest.fixture
def overlay() -> FakeOverlay:
    return FakeOverlay()


@pytest.fixture
def captions() -> FakeCaptions:
    return FakeCaptions(on=True)


@pytest.fixture
def menu() -> FakeMenu:
    return FakeMenu(PLAIN_MENUS)


@pytest.fixture
def picker() -> FakePicker:
    return FakePicker()


@pytest.fixture
def host(overlay, captions, menu, picker) -> FakeHost:
    return FakeHost(overlay, captions, menu, picker)


@pytest.fixture
def srt_text() -> str:
    return SRT_SAMPLE


@pytest.fixture
def vtt_text() -> str:
    return VTT_SAMPLE


@pytest.fixture
def native_menus() -> list:
    return NATIVE_MENUS


@pytest.fixture
def plain_menus() -> list:
    return PLAIN_MENUS
