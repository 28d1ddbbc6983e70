from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from grandline.core.game.state import AIDifficulty


class AIOpponentRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    difficulty: AIDifficulty = AIDifficulty.MEDIUM


class CreateGameRequest(BaseModel):
    ai_opponents: List[AIOpponentRequest] = Field(..., min_length=1, max_length=7)


class CrewMemberView(BaseModel):
    name: str
    difficulty: AIDifficulty
    description: str


class CreateGameResponse(BaseModel):
    game_id: str


class OkResponse(BaseModel):
    ok: bool = True


class PlayerView(BaseModel):
    id: int
    user_id: Optional[str] = None
    name: str
    is_ai: bool
    ai_difficulty: Optional[str] = None
    position: int
    money: int
    is_in_jail: bool
    jail_turns: int
    is_bankrupt: bool
    order: int


class PropertyView(BaseModel):
    space_id: int
    name: str
    owner_id: Optional[int] = None
    houses: int
    has_hotel: bool
    is_mortgaged: bool


class LogEntryView(BaseModel):
    id: int
    player_id: Optional[int] = None
    message: str
    timestamp: Optional[datetime] = None


class GameView(BaseModel):
    id: str
    host_id: str
    status: str
    current_player_index: int
    current_player_id: Optional[int] = None
    turn_phase: str
    dice_roll: Optional[List[int]] = None
    pending_rent: Optional[int] = None
    round: int
    winner_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    players: List[PlayerView]
    properties: List[PropertyView]
    log: List[LogEntryView]
    board: Dict[str, Any] = Field(default_factory=dict)
