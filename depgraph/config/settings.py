"""
Application Settings

Environment configuration for the command line and report defaults.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass
class Settings:
    """Application settings from environment."""

    log_level: str = "INFO"
    report_limit: int = 10
    layout: str = "force"
    detect_cycles: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            log_level=os.getenv("DEPGRAPH_LOG_LEVEL", "INFO").upper(),
            report_limit=_env_int("DEPGRAPH_REPORT_LIMIT", 10),
            layout=os.getenv("DEPGRAPH_LAYOUT", "force"),
            detect_cycles=_env_bool(os.getenv("DEPGRAPH_DETECT_CYCLES"), True),
        )
