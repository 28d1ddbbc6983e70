"""
Public game view serialization.

Produces a JSON-friendly dict of a persisted game: the game row, its seats
in turn order, every property record, the trailing log window and the
static board.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from grandline.core.game.board import BOARD, Board
from grandline.data.models import Game, LogEntry, Player, Property


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def serialize_player(player: Player) -> Dict[str, Any]:
    return {
        "id": player.id,
        "user_id": player.user_id,
        "name": player.name,
        "is_ai": player.is_ai,
        "ai_difficulty": player.ai_difficulty,
        "position": player.position,
        "money": player.money,
        "is_in_jail": player.is_in_jail,
        "jail_turns": player.jail_turns,
        "is_bankrupt": player.is_bankrupt,
        "order": player.order,
    }


def serialize_property(prop: Property, board: Board = BOARD) -> Dict[str, Any]:
    space = board.get_space(prop.space_id)
    return {
        "space_id": prop.space_id,
        "name": space.name,
        "owner_id": prop.owner_id,
        "houses": prop.houses,
        "has_hotel": prop.has_hotel,
        "is_mortgaged": prop.is_mortgaged,
    }


def serialize_log_entry(entry: LogEntry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "player_id": entry.player_id,
        "message": entry.message,
        "timestamp": _iso(entry.timestamp),
    }


def serialize_game(
    game: Game,
    players: Sequence[Player],
    properties: Sequence[Property],
    log_entries: Sequence[LogEntry],
    board: Board = BOARD,
) -> Dict[str, Any]:
    """Serialize a game and its related rows into the public game view.

    ``players`` are re-sorted by turn order and ``log_entries`` are expected
    oldest first, as returned by ``GameRepository.get_recent_log_entries``.
    """
    seats: List[Dict[str, Any]] = [
        serialize_player(p) for p in sorted(players, key=lambda p: p.order)
    ]

    return {
        "id": game.id,
        "host_id": game.host_id,
        "status": game.status,
        "current_player_index": game.current_player_index,
        "current_player_id": game.current_player_id,
        "turn_phase": game.turn_phase,
        "dice_roll": list(game.dice_roll) if game.dice_roll else None,
        "pending_rent": game.pending_rent,
        "round": game.round,
        "winner_id": game.winner_id,
        "created_at": _iso(game.created_at),
        "updated_at": _iso(game.updated_at),
        "finished_at": _iso(game.finished_at),
        "players": seats,
        "properties": [serialize_property(p, board) for p in properties],
        "log": [serialize_log_entry(e) for e in log_entries],
        "board": board.to_dict(),
    }
