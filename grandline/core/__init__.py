"""
Core domain layer for Grand Line Monopoly.

Exposes the board model, rule functions and built-in AI agents.
"""

from grandline.core.game import (
    BOARD,
    AIDifficulty,
    Board,
    GameConfig,
    GameStatus,
    Seat,
    Space,
    SpaceType,
    TurnOrder,
    TurnPhase,
)
from grandline.core.agents import Agent, EasyAgent, HardAgent, MediumAgent, RandomAgent, build_agent

__all__ = [
    "BOARD",
    "AIDifficulty",
    "Board",
    "GameConfig",
    "GameStatus",
    "Seat",
    "Space",
    "SpaceType",
    "TurnOrder",
    "TurnPhase",
    "Agent",
    "EasyAgent",
    "MediumAgent",
    "HardAgent",
    "RandomAgent",
    "build_agent",
]
