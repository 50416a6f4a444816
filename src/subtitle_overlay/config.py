"""Configuration for the subtitle overlay using pydantic-settings."""

from __future__ import annotations

import functools
import json
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .env import AppEnv, normalize_app_env

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

DEFAULT_ACCEPTED_EXTENSIONS = [".srt", ".vtt", ".ass", ".ssa", ".lrc", ".txt"]
# Labels that mark a host menu panel as a caption-selection surface.
DEFAULT_NATIVE_OFF_LABELS = ["Off", "关闭", "關閉"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # --- Environment ---
    app_env: AppEnv = Field(
        default=AppEnv.DEV,
        validation_alias=AliasChoices("SUBOVERLAY_APP_ENV", "APP_ENV", "ENV"),
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("SUBOVERLAY_LOG_LEVEL", "LOG_LEVEL"),
    )
    log_json: bool = Field(default=True, validation_alias="SUBOVERLAY_LOG_JSON")

    # --- Project Paths ---
    project_root: Path = PROJECT_ROOT

    # --- Metrics ---
    metrics_enabled: bool | None = Field(default=None, validation_alias="PIPELINE_LOGGING")
    metrics_path: Path | None = Field(default=None, validation_alias="PIPELINE_LOG_PATH")

    # --- Subtitle sources ---
    subtitle_encoding: str = Field(default="utf-8", validation_alias="SUBOVERLAY_ENCODING")
    accepted_extensions: Any = Field(
        default_factory=lambda: list(DEFAULT_ACCEPTED_EXTENSIONS),
        validation_alias="SUBOVERLAY_ACCEPTED_EXTENSIONS",
    )

    # --- Host integration ---
    native_off_labels: Any = Field(
        default_factory=lambda: list(DEFAULT_NATIVE_OFF_LABELS),
        validation_alias="SUBOVERLAY_NATIVE_OFF_LABELS",
    )
    caption_box_class: str = "caption-box"

    # --- CLI playback ---
    sample_interval_s: float = Field(default=0.25, gt=0, validation_alias="SUBOVERLAY_SAMPLE_INTERVAL")

    @field_validator("app_env", mode="before")
    @classmethod
    def normalize_env(cls, v: Any) -> AppEnv:
        if isinstance(v, AppEnv):
            return v
        return normalize_app_env(v if isinstance(v, str) else None)

    @field_validator("metrics_enabled", mode="before")
    @classmethod
    def parse_switch(cls, v: Any) -> bool | None:
        if v is None or isinstance(v, bool):
            return v
        lowered = str(v).strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        return None

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> str:
        return str(v or "INFO").strip().upper()

    @field_validator("accepted_extensions", "native_off_labels", mode="before")
    @classmethod
    def parse_list(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            v_stripped = v.strip()
            if not v_stripped:
                return []
            if v_stripped.startswith("[") and v_stripped.endswith("]"):
                try:
                    return [str(x) for x in json.loads(v_stripped)]
                except ValueError:
                    pass
            return [x.strip() for x in v_stripped.split(",") if x.strip()]
        return list(v or [])

    @field_validator("accepted_extensions", mode="after")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]

    @property
    def is_dev(self) -> bool:
        return self.app_env == AppEnv.DEV

    @property
    def resolved_metrics_path(self) -> Path:
        if self.metrics_path is not None:
            return Path(self.metrics_path).expanduser().resolve()
        return (self.project_root / "logs" / "track_metrics.jsonl").resolve()


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read once from env and ``.env``."""
    return Settings()
