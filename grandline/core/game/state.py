"""
Game lifecycle enums and the turn-order pointer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple


class GameStatus(str, Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class TurnPhase(str, Enum):
    """Sub-state of the current player's turn."""

    ROLLING = "rolling"
    MOVING = "moving"
    # Reserved for card effects; no transition enters it yet
    ACTION = "action"
    BUYING = "buying"
    PAYING = "paying"


class AIDifficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class Seat:
    """A player's place in the rotation."""

    player_id: int
    order: int
    is_ai: bool = False
    is_bankrupt: bool = False


class TurnOrder:
    """
    Ordered sequence of stable player ids with a pointer to whose turn it is.

    Only non-bankrupt seats take part in the rotation. The pointer is a
    player id, so removing a seat never shifts whose turn it is; the index
    into the active list is derived from it.
    """

    def __init__(self, seats: Iterable[Seat]):
        self.seats: List[Seat] = sorted(seats, key=lambda s: s.order)

    @property
    def active(self) -> List[Seat]:
        return [s for s in self.seats if not s.is_bankrupt]

    def seat_of(self, player_id: int) -> Optional[Seat]:
        for seat in self.seats:
            if seat.player_id == player_id:
                return seat
        return None

    def index_of(self, player_id: int) -> Optional[int]:
        """Index of ``player_id`` in the active list, or None if absent or bankrupt."""
        for index, seat in enumerate(self.active):
            if seat.player_id == player_id:
                return index
        return None

    def next_after(self, player_id: Optional[int]) -> Tuple[int, Seat, bool]:
        """
        Pick the seat that plays after ``player_id``.

        Returns ``(index, seat, wrapped)`` where ``index`` points into the
        active list and ``wrapped`` is True when the rotation went back to the
        lowest seat. Works even if ``player_id`` itself just went bankrupt.
        """
        active = self.active
        if not active:
            raise ValueError("No active players left in the rotation")

        current = self.seat_of(player_id) if player_id is not None else None
        if current is not None:
            for index, seat in enumerate(active):
                if seat.order > current.order:
                    return index, seat, False
        return 0, active[0], True
