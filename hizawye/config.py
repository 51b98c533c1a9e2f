"""
Hizawye Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


def _flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


EXPAND_POLICIES = ("discard", "deepen", "strict")


class Config:
    """Application configuration loaded from environment variables."""

    # Seed for the production random source. None means an unseeded generator.
    SEED: Optional[int] = _optional_int("HIZAWYE_SEED")

    # Event log capacity (most recent entries kept)
    LOG_CAPACITY: int = int(os.getenv("HIZAWYE_LOG_CAPACITY", "21"))

    # How an ExpandKnowledge goal at the head of the queue is resolved
    EXPAND_POLICY: str = os.getenv("HIZAWYE_EXPAND_POLICY", "discard")

    # Console output
    VERBOSE: bool = _flag("HIZAWYE_VERBOSE")

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    SNAPSHOTS_DIR: Path = PROJECT_ROOT / "examples" / "snapshots"

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are out of range."""
        if cls.LOG_CAPACITY < 1:
            raise ValueError(
                f"HIZAWYE_LOG_CAPACITY must be at least 1 (got {cls.LOG_CAPACITY})"
            )

        if cls.EXPAND_POLICY not in EXPAND_POLICIES:
            raise ValueError(
                f"HIZAWYE_EXPAND_POLICY must be one of {', '.join(EXPAND_POLICIES)} "
                f"(got '{cls.EXPAND_POLICY}')"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Hizawye Configuration:",
            f"  Seed: {cls.SEED if cls.SEED is not None else 'unseeded'}",
            f"  Log Capacity: {cls.LOG_CAPACITY}",
            f"  Expand Policy: {cls.EXPAND_POLICY}",
            f"  Verbose: {cls.VERBOSE}",
        ]
        return "\n".join(lines)
