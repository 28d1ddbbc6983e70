from grandline.core.game.board import BOARD, Board
from grandline.core.game.config import GameConfig
from grandline.core.game.spaces import Space, SpaceType
from grandline.core.game.state import AIDifficulty, GameStatus, Seat, TurnOrder, TurnPhase

__all__ = [
    "BOARD",
    "Board",
    "GameConfig",
    "Space",
    "SpaceType",
    "AIDifficulty",
    "GameStatus",
    "Seat",
    "TurnOrder",
    "TurnPhase",
]
