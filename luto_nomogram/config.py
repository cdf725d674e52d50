"""
Nomogram Service — Configuration
================================
Centralised settings for logging and the HTTP service.
Loads overrides from the project-level .env file.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")


def _parse_color(raw: str) -> Optional[bool]:
    """'auto' defers to TTY detection; anything else is read as a boolean."""
    raw = raw.strip().lower()
    if raw in ("", "auto"):
        return None
    return raw in ("1", "true", "yes", "on")


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the environment."""
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_color: Optional[bool] = None
    api_title: str = "Toronto LUTO Nomogram API"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            log_level=os.getenv("LUTO_LOG_LEVEL", "INFO"),
            log_file=os.getenv("LUTO_LOG_FILE") or None,
            log_color=_parse_color(os.getenv("LUTO_LOG_COLOR", "auto")),
            api_title=os.getenv("LUTO_API_TITLE", "Toronto LUTO Nomogram API"),
            cors_origins=_split_origins(os.getenv("LUTO_CORS_ORIGINS", "*")),
        )


settings = Settings.from_env()
