"""
Game log recorder: the append-only narration side channel.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from grandline.data.models import LogEntry
from grandline.data.repository import GameRepository

logger = logging.getLogger(__name__)


class GameLogRecorder:
    """
    Appends human-readable log lines for a game and reads back the trailing
    window. Entries are ordered purely by insertion; nothing is merged,
    edited or deleted.
    """

    def __init__(self, repo: GameRepository):
        self.repo = repo

    async def record(self, game_id: str, message: str, player_id: Optional[int] = None) -> LogEntry:
        """Append one entry to the game's log."""
        entry = await self.repo.add_log_entry(game_id, message, player_id)
        logger.debug(f"[{game_id}] {message}")
        return entry

    async def recent(self, game_id: str, limit: int = 10) -> List[LogEntry]:
        """The most recent ``limit`` entries, oldest first."""
        return await self.repo.get_recent_log_entries(game_id, limit=limit)
