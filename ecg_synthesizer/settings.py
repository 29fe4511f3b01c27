"""Service settings for the ECG synthesis API."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


@dataclass
class Settings:
    """Top-level service settings."""

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables.

        ``ECG_SYNTH_CORS_ORIGINS`` is a comma-separated list of origins.
        """
        origins = os.getenv("ECG_SYNTH_CORS_ORIGINS")
        return cls(
            host=os.getenv("ECG_SYNTH_HOST", "0.0.0.0"),
            port=int(os.getenv("ECG_SYNTH_PORT", "8000")),
            log_level=os.getenv("ECG_SYNTH_LOG_LEVEL", "INFO").upper(),
            cors_origins=(
                [origin.strip() for origin in origins.split(",") if origin.strip()]
                if origins is not None else list(DEFAULT_CORS_ORIGINS)
            ),
        )
