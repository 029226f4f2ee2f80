"""Runtime configuration read from environment variables."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Final, Optional


def env_str(name: str, *, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def env_float(name: str, *, default: float) -> float:
    """Return a float from the environment, or ``default`` if unset or invalid."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def env_int(name: str, *, default: Optional[int] = None) -> Optional[int]:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


SAVE_DIR: Final[Path] = Path(
    env_str(
        "GOBANG_SAVE_DIR",
        default=str(Path(__file__).resolve().parents[1] / "saved_games"),
    )
)
# Pause before the AI reply so the human's stone is drawn first
AI_MOVE_DELAY: Final[float] = env_float("GOBANG_AI_DELAY", default=0.5)
LOG_LEVEL: Final[str] = env_str("GOBANG_LOG_LEVEL", default="INFO").upper()
# Fixed seed for the AI's random source; unset means nondeterministic play
AI_SEED: Final[Optional[int]] = env_int("GOBANG_SEED")

__all__ = [
    "AI_MOVE_DELAY",
    "AI_SEED",
    "LOG_LEVEL",
    "SAVE_DIR",
    "env_float",
    "env_int",
    "env_str",
]
