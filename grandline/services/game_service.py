"""
GameService orchestrates the turn engine with persistence and logging.

This is the operation surface used by the API: game creation, the public
game view, and the human turn actions delegated to ``TurnEngine``.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from grandline.core.exceptions import AuthorizationError, GameNotFoundError, ValidationError
from grandline.core.game.board import BOARD, Board
from grandline.core.game.config import GameConfig
from grandline.core.game.rules import DiceRoll
from grandline.core.game.state import AIDifficulty, GameStatus, TurnPhase
from grandline.data.models import Property
from grandline.data.repository import GameRepository
from grandline.services.identity import Identity
from grandline.services.scheduler import TurnScheduler
from grandline.services.snapshot import serialize_game
from grandline.services.turn_engine import TurnEngine
from grandline.settings import GameSettings, get_game_settings

logger = logging.getLogger(__name__)

VALID_DIFFICULTIES = tuple(d.value for d in AIDifficulty)


@dataclass(frozen=True)
class AIOpponent:
    """An AI seat requested at game creation."""

    name: str
    difficulty: str = AIDifficulty.MEDIUM.value


class GameService:
    """Use-case service for creating games and playing the human seat."""

    def __init__(
        self,
        repo: GameRepository,
        scheduler: Optional[TurnScheduler] = None,
        *,
        config: Optional[GameConfig] = None,
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
        board: Board = BOARD,
    ):
        self.repo = repo
        self.config = config or GameConfig()
        self.settings = settings or get_game_settings()
        self.board = board
        self.engine = TurnEngine(
            repo,
            scheduler,
            config=self.config,
            settings=self.settings,
            rng=rng,
            board=board,
        )
        self.log = self.engine.log

    async def create_game(self, identity: Optional[Identity], ai_opponents: Sequence[AIOpponent]) -> str:
        """
        Create a game for ``identity`` against ``ai_opponents`` and start it.

        The human takes seat 0 and moves first; AI seats follow in the order
        given. Every seat starts on GO with the starting money, and one
        unowned Property record is created per ownable space.

        Returns:
            The new game's id
        """
        if identity is None:
            raise AuthorizationError("Must be logged in to create a game")
        self._validate_opponents(ai_opponents)

        game = await self.repo.create_game(host_id=identity.user_id)

        human = await self.repo.add_player(
            game.id,
            name=identity.name,
            order=0,
            money=self.config.starting_money,
            user_id=identity.user_id,
        )
        for order, opponent in enumerate(ai_opponents, start=1):
            await self.repo.add_player(
                game.id,
                name=opponent.name.strip(),
                order=order,
                money=self.config.starting_money,
                is_ai=True,
                ai_difficulty=opponent.difficulty,
            )

        await self.repo.add_properties(game.id, [s.position for s in self.board.ownable_spaces()])

        game.status = GameStatus.PLAYING.value
        game.turn_phase = TurnPhase.ROLLING.value
        game.current_player_index = 0
        game.current_player_id = human.id
        await self.log.record(game.id, "Game started! Roll the dice to begin.")

        logger.info(f"Game {game.id} started by {identity.user_id} with {len(ai_opponents)} AI opponent(s)")
        return game.id

    def _validate_opponents(self, ai_opponents: Sequence[AIOpponent]) -> None:
        count = len(ai_opponents)
        if not 1 <= count <= self.settings.max_ai_opponents:
            raise ValidationError(
                f"A game needs between 1 and {self.settings.max_ai_opponents} AI opponents, got {count}"
            )
        for opponent in ai_opponents:
            if not opponent.name or not opponent.name.strip():
                raise ValidationError("AI opponent name must not be empty")
            if opponent.difficulty not in VALID_DIFFICULTIES:
                raise ValidationError(
                    f"Unknown difficulty {opponent.difficulty!r}; expected one of {', '.join(VALID_DIFFICULTIES)}"
                )

    async def get_game(self, game_id: str) -> Dict[str, Any]:
        """Public view of a game with its trailing log window."""
        game = await self.repo.get_game(game_id)
        if game is None:
            raise GameNotFoundError(f"Game {game_id} not found")

        players = await self.repo.list_players(game_id)
        properties = await self.repo.list_properties(game_id)
        log_entries = await self.log.recent(game_id, limit=self.settings.log_window)
        return serialize_game(game, players, properties, log_entries, self.board)

    # ---- Turn actions ----

    async def roll_dice(self, game_id: str, identity: Optional[Identity]) -> DiceRoll:
        return await self.engine.roll_dice(game_id, identity)

    async def buy_property(self, game_id: str, identity: Optional[Identity]) -> Property:
        return await self.engine.buy_property(game_id, identity)

    async def skip_buying(self, game_id: str, identity: Optional[Identity]) -> None:
        await self.engine.skip_buying(game_id, identity)

    async def confirm_payment(self, game_id: str, identity: Optional[Identity]) -> None:
        await self.engine.confirm_payment(game_id, identity)
