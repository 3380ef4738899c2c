"""Application settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv()  # Load environment variables from .env file if present


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    """Runtime configuration for the relay.

    Keep credentials and paths centralized here; `get_settings()` builds the
    process-wide instance from the environment, tests construct their own.
    """

    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash-preview-05-20"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    training_data_path: Path = BASE_DIR / "data" / "training-data.json"
    public_dir: Path = BASE_DIR / "public"
    max_body_bytes: int = 15 * 1024 * 1024
    relay_timeout_seconds: float = 60.0
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", defaults.gemini_model),
            gemini_api_base=os.getenv("GEMINI_API_BASE", defaults.gemini_api_base).rstrip("/"),
            training_data_path=Path(
                os.getenv("TRAINING_DATA_PATH", str(defaults.training_data_path))
            ).expanduser(),
            public_dir=Path(os.getenv("PUBLIC_DIR", str(defaults.public_dir))).expanduser(),
            max_body_bytes=int(os.getenv("MAX_BODY_BYTES", str(defaults.max_body_bytes))),
            relay_timeout_seconds=float(
                os.getenv("RELAY_TIMEOUT_SECONDS", str(defaults.relay_timeout_seconds))
            ),
            cors_allow_origins=_split_origins(os.getenv("CORS_ALLOW_ORIGINS", "*")),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
            host=os.getenv("HOST", defaults.host),
            port=int(os.getenv("PORT", str(defaults.port))),
        )

    @property
    def generate_content_url(self) -> str:
        """Return the Gemini generateContent endpoint for the configured model."""
        return f"{self.gemini_api_base}/models/{self.gemini_model}:generateContent"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
