"""
Central application configuration using pydantic-settings.

This module provides typed access to environment-based configuration for
turn pacing, the log window and house rules. Database configuration lives
in `grandline.data.config.DatabaseSettings`; rule constants live in
`grandline.core.game.config.GameConfig`.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GameSettings(BaseSettings):
    """
    Runtime settings for the turn engine.

    Environment variables (prefix: GRANDLINE_):
        GRANDLINE_AI_TURN_DELAY_MS    - Delay before a scheduled AI turn runs (default: 1000)
        GRANDLINE_LOG_WINDOW          - Log entries returned with a game view (default: 10)
        GRANDLINE_MAX_AI_OPPONENTS    - Upper bound on AI seats per game (default: 7)
        GRANDLINE_BANKRUPTCY_ENABLED  - Unpayable rent/tax bankrupts the payer (default: true)
        GRANDLINE_RNG_SEED            - Seed for dice and AI draws (default: unseeded)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="GRANDLINE_",
    )

    ai_turn_delay_ms: int = Field(
        default=1000,
        ge=0,
        le=60_000,
        description="Delay before a scheduled AI turn runs, in milliseconds.",
    )
    log_window: int = Field(
        default=10,
        gt=0,
        le=500,
        description="Number of most recent log entries included in a game view.",
    )
    max_ai_opponents: int = Field(default=7, ge=1, le=7)
    bankruptcy_enabled: bool = Field(
        default=True,
        description="Bankrupt a player who cannot pay rent or tax in full.",
    )
    rng_seed: Optional[int] = Field(default=None)

    @property
    def ai_turn_delay_seconds(self) -> float:
        return self.ai_turn_delay_ms / 1000.0


@lru_cache
def get_game_settings() -> GameSettings:
    """Return cached game settings instance."""
    return GameSettings()
