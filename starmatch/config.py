"""
Configuration - Game settings with environment overrides.

Environment:
    STARMATCH_DURATION_SEC   Seconds on the clock (default 10)
    STARMATCH_MAX_TARGET     Largest star count (default 9)
    STARMATCH_SEED           Seed for reproducible games (default random)
    STARMATCH_LOG_LEVEL      Logging level name (default WARNING)
"""

from typing import Optional
import os

from pydantic import BaseModel, Field, field_validator


class GameSettings(BaseModel):
    """Validated settings for a game session."""
    duration_seconds: int = Field(10, ge=1, description="Seconds on the countdown")
    max_target: int = Field(9, ge=1, le=9, description="Largest star count")
    seed: Optional[int] = Field(None, description="Seed for the puzzle generator")
    log_level: str = "WARNING"

    model_config = {"frozen": True}

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return value

    @classmethod
    def from_env(cls, **overrides) -> "GameSettings":
        """Build settings from STARMATCH_* variables, then apply overrides."""
        values = {}
        env_map = {
            "duration_seconds": "STARMATCH_DURATION_SEC",
            "max_target": "STARMATCH_MAX_TARGET",
            "seed": "STARMATCH_SEED",
            "log_level": "STARMATCH_LOG_LEVEL",
        }
        for name, env_var in env_map.items():
            raw = os.getenv(env_var)
            if raw not in (None, ""):
                values[name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
