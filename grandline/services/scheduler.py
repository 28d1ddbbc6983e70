"""
Delayed execution of AI turns.

The engine only knows the ``TurnScheduler`` interface: "run the AI turn for
player P of game G after D seconds", plus a per-game cancel. The asyncio
implementation keeps one timer per scheduled turn and runs the callback as
a task when it fires. Callbacks must re-check the game state themselves;
a timer may outlive the turn it was scheduled for.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Dict, List, Optional, Set

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

TurnCallback = Callable[[str, int], Awaitable[None]]

_AFTER_COMMIT_KEY = "grandline.after_commit"


class TurnScheduler(ABC):
    """Schedules an AI turn to run later."""

    @abstractmethod
    def schedule(self, game_id: str, player_id: int, delay_seconds: float) -> None:
        """Run the AI turn for ``player_id`` in ``game_id`` after ``delay_seconds``."""

    @abstractmethod
    def cancel(self, game_id: str) -> None:
        """Drop every turn still waiting to fire for ``game_id``."""


class AsyncioTurnScheduler(TurnScheduler):
    """
    Fire-and-forget timers on the running event loop.

    Each fired timer becomes a task running ``callback(game_id, player_id)``.
    Exceptions from the callback are logged; there is no retry.
    """

    def __init__(self, callback: Optional[TurnCallback] = None):
        self._callback = callback
        self._timers: Dict[str, Set[asyncio.TimerHandle]] = {}
        self._tasks: Set[asyncio.Task] = set()

    def set_callback(self, callback: TurnCallback) -> None:
        self._callback = callback

    def schedule(self, game_id: str, player_id: int, delay_seconds: float) -> None:
        if self._callback is None:
            raise RuntimeError("AsyncioTurnScheduler has no callback to run")

        loop = asyncio.get_running_loop()
        timers = self._timers.setdefault(game_id, set())

        def fire() -> None:
            timers.discard(handle)
            if not timers and self._timers.get(game_id) is timers:
                del self._timers[game_id]
            task = loop.create_task(self._run(game_id, player_id))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

        handle = loop.call_later(max(0.0, delay_seconds), fire)
        timers.add(handle)
        logger.debug(f"Scheduled AI turn for player {player_id} in game {game_id} in {delay_seconds:.2f}s")

    def cancel(self, game_id: str) -> None:
        timers = self._timers.pop(game_id, set())
        for handle in timers:
            handle.cancel()
        if timers:
            logger.info(f"Cancelled {len(timers)} scheduled turn(s) for game {game_id}")

    def pending(self, game_id: str) -> int:
        """Number of timers for ``game_id`` that have not fired yet."""
        return len(self._timers.get(game_id, ()))

    async def _run(self, game_id: str, player_id: int) -> None:
        try:
            await self._callback(game_id, player_id)
        except Exception:
            logger.exception(f"Scheduled AI turn failed (game {game_id}, player {player_id})")

    async def shutdown(self) -> None:
        """Cancel all timers and running turns. Called on application stop."""
        for game_id in list(self._timers):
            self.cancel(game_id)
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()


# ---- Commit hooks ----


def _run_after_commit(sync_session) -> None:
    for callback in sync_session.info.pop(_AFTER_COMMIT_KEY, []):
        callback()


def _discard_after_rollback(sync_session) -> None:
    sync_session.info.pop(_AFTER_COMMIT_KEY, None)


def run_after_commit(session: AsyncSession, callback: Callable[[], None]) -> None:
    """
    Defer ``callback`` until ``session`` commits.

    Scheduled turns must not observe uncommitted state, and a rolled-back
    operation must not schedule anything, so side effects on the scheduler
    are queued here instead of being applied immediately.
    """
    sync_session = session.sync_session
    if not event.contains(sync_session, "after_commit", _run_after_commit):
        event.listen(sync_session, "after_commit", _run_after_commit)
        event.listen(sync_session, "after_rollback", _discard_after_rollback)
    callbacks: List[Callable[[], None]] = sync_session.info.setdefault(_AFTER_COMMIT_KEY, [])
    callbacks.append(callback)
