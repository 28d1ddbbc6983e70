"""
AI controller: the scheduled callback that plays AI turns.

Each fired timer opens its own session, so an AI turn commits (or rolls
back) independently of the request that scheduled it. A committed AI turn
that hands off to another AI seat schedules the next turn itself, which
is how consecutive AI seats chain.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from grandline.core.game.config import GameConfig
from grandline.data.repository import GameRepository
from grandline.data.session import session_scope
from grandline.services.scheduler import AsyncioTurnScheduler, TurnScheduler
from grandline.services.turn_engine import TurnEngine
from grandline.settings import GameSettings, get_game_settings

logger = logging.getLogger(__name__)


class AIController:
    """Owns the turn scheduler and runs AI turns when their timers fire."""

    def __init__(
        self,
        scheduler: Optional[TurnScheduler] = None,
        *,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
        config: Optional[GameConfig] = None,
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.scheduler = scheduler or AsyncioTurnScheduler()
        if isinstance(self.scheduler, AsyncioTurnScheduler):
            self.scheduler.set_callback(self.run_turn)
        self.session_factory = session_factory
        self.config = config or GameConfig()
        self.settings = settings or get_game_settings()
        self.rng = rng or random.Random(self.settings.rng_seed)

    async def run_turn(self, game_id: str, player_id: int) -> bool:
        """Play one AI turn in a fresh transaction. Returns whether it ran."""
        async with session_scope(self.session_factory) as session:
            engine = TurnEngine(
                GameRepository(session),
                self.scheduler,
                config=self.config,
                settings=self.settings,
                rng=self.rng,
            )
            played = await engine.process_ai_turn(game_id, player_id)

        if played:
            logger.debug(f"AI player {player_id} finished a turn in game {game_id}")
        return played

    async def shutdown(self) -> None:
        if isinstance(self.scheduler, AsyncioTurnScheduler):
            await self.scheduler.shutdown()
