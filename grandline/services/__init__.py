"""
Application services: the turn engine, AI scheduling and the game log.
"""

from grandline.services.ai_controller import AIController
from grandline.services.game_service import AIOpponent, GameService
from grandline.services.identity import Identity
from grandline.services.log_recorder import GameLogRecorder
from grandline.services.scheduler import AsyncioTurnScheduler, TurnScheduler, run_after_commit
from grandline.services.snapshot import serialize_game
from grandline.services.turn_engine import TurnEngine

__all__ = [
    "AIController",
    "AIOpponent",
    "AsyncioTurnScheduler",
    "GameLogRecorder",
    "GameService",
    "Identity",
    "TurnEngine",
    "TurnScheduler",
    "run_after_commit",
    "serialize_game",
]
