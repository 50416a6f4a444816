"""Application environment names accepted by ``Settings.app_env``."""

from __future__ import annotations

from enum import StrEnum


class AppEnv(StrEnum):
    DEV = "dev"
    PRODUCTION = "production"


_DEV_ALIASES = {"dev", "development", "local", "localhost"}


def normalize_app_env(value: str | None) -> AppEnv:
    """
    Map a free-form environment name onto ``AppEnv``.

    Unset means DEV. Anything unrecognised is PRODUCTION, so dev-only
    behaviour (the metrics file) stays opt-in.
    """
    if value is None:
        return AppEnv.DEV
    if value.strip().lower() in _DEV_ALIASES:
        return AppEnv.DEV
    return AppEnv.PRODUCTION
