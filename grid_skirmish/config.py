"""
Configuration management for Grid Skirmish.
Uses pydantic-settings for environment variable parsing.
"""

import logging
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from .constants import (
    ATTACK_RADIUS,
    BOARD_SIZE,
    MAX_HIT_POINTS,
    MOVE_RANGE,
    UNITS_PER_TEAM,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    # Board
    board_size: int = Field(
        default=BOARD_SIZE,
        ge=1,
        description="Number of rows and columns on the square board"
    )

    # Teams
    units_per_team: int = Field(
        default=UNITS_PER_TEAM,
        ge=1,
        description="Units each team must place before the battle starts"
    )
    max_hit_points: int = Field(
        default=MAX_HIT_POINTS,
        ge=1,
        le=MAX_HIT_POINTS,
        description="Hit points of a freshly placed unit"
    )
    starting_team: Literal["A", "B"] = Field(
        default="A",
        description="Team that takes the first turn"
    )

    # Rules
    move_range: int = Field(
        default=MOVE_RANGE,
        ge=1,
        description="Max cells a unit may move along one cardinal axis"
    )
    attack_radius: int = Field(
        default=ATTACK_RADIUS,
        ge=0,
        description="Chebyshev radius around each friendly unit that can be attacked"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Level passed to configure_logging()"
    )

    class Config:
        env_prefix = "GRID_SKIRMISH_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Pass an explicit Settings to the engine to bypass the environment.
    """
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for a host application.
    The engine modules only create loggers; they never call this.
    """
    if level is None:
        level = get_settings().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
