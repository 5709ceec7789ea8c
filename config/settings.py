"""Application settings loaded from environment variables.

Uses pydantic-settings for validation and type coercion. All keys use
the ``VISION_ASSIST_`` prefix and may also come from a ``.env`` file.
Haptic timings are deliberately absent: users learn the patterns, so
they are constants in :mod:`vision_assist.services.haptics`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Central configuration for the Vision Assist core.

    Environment variables are loaded from a ``.env`` file when present.
    """

    model_config = SettingsConfigDict(
        env_prefix="VISION_ASSIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # ── App ────────────────────────────────────────────────────────────
    env: Literal["development", "production"] = "development"

    # ── Logging ────────────────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    # ── Image analysis ─────────────────────────────────────────────────
    analysis_max_attempts: int = Field(default=2, ge=1)
    analysis_retry_max_wait: float = Field(default=4.0, gt=0)  # seconds

    # ── Speech output ──────────────────────────────────────────────────
    speech_language: str = "en"
    speech_pitch: float = Field(default=1.0, gt=0)
    speech_rate: float = Field(default=0.9, gt=0)

    # ── Emotion feedback toggles ───────────────────────────────────────
    emotion_detection_enabled: bool = True
    morse_code_enabled: bool = True
    auto_play_morse: bool = True

    # ── Derived Properties ─────────────────────────────────────────────

    @property
    def is_production(self) -> bool:
        return self.env == Environment.PRODUCTION


# Module-level singleton; import ``settings`` everywhere.
settings = Settings()
