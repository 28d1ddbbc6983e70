"""
Repository pattern for game data operations.

Encapsulates all database queries for games, players, properties and
log entries. Provides a clean interface for the application layer.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from grandline.data.models import Game, LogEntry, Player, Property

logger = logging.getLogger(__name__)


class GameRepository:
    """
    Repository for game-related database operations.

    Writes are flushed but never committed here; the session owner decides
    when the unit of work commits.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with a database session.

        Args:
            session: Active async SQLAlchemy session
        """
        self.session = session

    async def flush(self) -> None:
        """Push pending changes so later queries in this transaction see them."""
        await self.session.flush()

    # ---- Game Operations ----

    async def create_game(self, host_id: str) -> Game:
        """
        Create a new game record in the ``waiting`` status.

        Args:
            host_id: Identity of the creating user

        Returns:
            Created Game instance
        """
        game = Game(
            host_id=host_id,
            status="waiting",
            current_player_index=0,
            turn_phase="rolling",
            round=1,
        )

        self.session.add(game)
        await self.session.flush()
        logger.info(f"Created game: {game.id} (host: {host_id})")

        return game

    async def get_game(self, game_id: str, *, for_update: bool = False) -> Optional[Game]:
        """
        Fetch game by identifier.

        Args:
            game_id: Game identifier
            for_update: Lock the row for the rest of the transaction

        Returns:
            Game instance or None if not found
        """
        stmt = select(Game).where(Game.id == game_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    # ---- Player Operations ----

    async def add_player(
        self,
        game_id: str,
        *,
        name: str,
        order: int,
        money: int,
        is_ai: bool = False,
        ai_difficulty: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Player:
        """
        Add a player to a game.

        Args:
            game_id: Game identifier
            name: Player display name
            order: Stable rotation key (0 for the human, 1..N for AIs)
            money: Starting money
            is_ai: Whether the seat is AI-controlled
            ai_difficulty: easy | medium | hard (AI only)
            user_id: Identity controlling the seat (human only)

        Returns:
            Created Player instance
        """
        player = Player(
            game_id=game_id,
            name=name,
            order=order,
            money=money,
            position=0,
            is_ai=is_ai,
            ai_difficulty=ai_difficulty if is_ai else None,
            user_id=user_id,
            is_in_jail=False,
            jail_turns=0,
            is_bankrupt=False,
        )

        self.session.add(player)
        await self.session.flush()
        logger.debug(f"Added player {player.id} ({name}, order {order}) to game {game_id}")

        return player

    async def get_player(self, player_id: int) -> Optional[Player]:
        return await self.session.get(Player, player_id)

    async def list_players(self, game_id: str) -> List[Player]:
        """All players of a game sorted by ``order``."""
        stmt = select(Player).where(Player.game_id == game_id).order_by(Player.order)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    # ---- Property Operations ----

    async def add_properties(self, game_id: str, space_ids: List[int]) -> List[Property]:
        """Create one unowned Property record per space."""
        properties = [
            Property(
                game_id=game_id,
                space_id=space_id,
                houses=0,
                has_hotel=False,
                is_mortgaged=False,
            )
            for space_id in space_ids
        ]
        self.session.add_all(properties)
        await self.session.flush()
        logger.debug(f"Added {len(properties)} properties to game {game_id}")

        return properties

    async def get_property(self, game_id: str, space_id: int) -> Optional[Property]:
        stmt = select(Property).where(
            Property.game_id == game_id,
            Property.space_id == space_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_properties(self, game_id: str) -> List[Property]:
        stmt = select(Property).where(Property.game_id == game_id).order_by(Property.space_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_owned_properties(self, owner_id: int) -> List[Property]:
        stmt = select(Property).where(Property.owner_id == owner_id).order_by(Property.space_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    # ---- Log Operations ----

    async def add_log_entry(
        self,
        game_id: str,
        message: str,
        player_id: Optional[int] = None,
    ) -> LogEntry:
        entry = LogEntry(game_id=game_id, message=message, player_id=player_id)
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def get_recent_log_entries(self, game_id: str, limit: int = 10) -> List[LogEntry]:
        """
        Most recent ``limit`` entries, returned oldest first.

        Args:
            game_id: Game identifier
            limit: Size of the trailing window

        Returns:
            LogEntry instances in chronological order
        """
        stmt = (
            select(LogEntry)
            .where(LogEntry.game_id == game_id)
            .order_by(LogEntry.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        entries = list(result.scalars().all())
        entries.reverse()
        return entries

    async def count_log_entries(self, game_id: str) -> int:
        stmt = select(func.count(LogEntry.id)).where(LogEntry.game_id == game_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()
