"""
SQLAlchemy models for Grand Line Monopoly.

Architecture:
- Game: one per match, owns the turn pointer and phase
- Player: seats in a game; bankruptcy is a soft delete
- Property: ownership record per ownable board space
- LogEntry: append-only narration, ordered by insertion
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


def utc_now() -> datetime:
    """Generate timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


def new_game_id() -> str:
    """Opaque per-game identifier."""
    return uuid.uuid4().hex[:12]


class Game(Base):
    """
    Game table.

    ``current_player_id`` is the stable turn pointer; ``current_player_index``
    is its position in the active, order-sorted player list and is recomputed
    whenever the turn is handed off.
    """

    __tablename__ = "games"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_game_id)
    host_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Identity of the user who created the game",
    )

    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default="waiting",
        index=True,
        comment="waiting | playing | finished",
    )
    current_player_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_player_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    turn_phase: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default="rolling",
        comment="rolling | moving | action | buying | paying",
    )
    dice_roll: Mapped[Optional[List[int]]] = mapped_column(JSON, nullable=True)
    pending_rent: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Rent shown to a human during the paying phase",
    )
    round: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    winner_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )
    finished_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    players: Mapped[List["Player"]] = relationship(
        "Player",
        back_populates="game",
        cascade="all, delete-orphan",
        lazy="noload",
        order_by="Player.order",
    )
    properties: Mapped[List["Property"]] = relationship(
        "Property",
        back_populates="game",
        cascade="all, delete-orphan",
        lazy="noload",
    )
    log_entries: Mapped[List["LogEntry"]] = relationship(
        "LogEntry",
        back_populates="game",
        cascade="all, delete-orphan",
        lazy="noload",  # Log window loaded explicitly via repository
    )

    def __repr__(self) -> str:
        return f"<Game(id={self.id}, status={self.status}, phase={self.turn_phase}, round={self.round})>"


class Player(Base):
    """A seat in a game. ``order`` is the stable rotation key."""

    __tablename__ = "players"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Identity controlling this seat (humans only)",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_ai: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    ai_difficulty: Mapped[Optional[str]] = mapped_column(
        String(16),
        nullable=True,
        comment="easy | medium | hard (AI only)",
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    money: Mapped[int] = mapped_column(Integer, nullable=False, default=1500)
    is_in_jail: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    jail_turns: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_bankrupt: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    order: Mapped[int] = mapped_column("turn_order", Integer, nullable=False)

    game: Mapped["Game"] = relationship("Game", back_populates="players")

    __table_args__ = (
        UniqueConstraint("game_id", "turn_order", name="uq_player_game_order"),
    )

    def __repr__(self) -> str:
        return f"<Player(id={self.id}, name={self.name}, money={self.money}, position={self.position})>"


class Property(Base):
    """Ownership state of one ownable space in one game."""

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    space_id: Mapped[int] = mapped_column(Integer, nullable=False)
    owner_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("players.id", ondelete="SET NULL"),
        nullable=True,
    )
    houses: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    has_hotel: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_mortgaged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    game: Mapped["Game"] = relationship("Game", back_populates="properties")

    __table_args__ = (
        UniqueConstraint("game_id", "space_id", name="uq_property_game_space"),
        Index("ix_properties_game_space", "game_id", "space_id"),
    )

    def __repr__(self) -> str:
        return f"<Property(game={self.game_id}, space={self.space_id}, owner={self.owner_id})>"


class LogEntry(Base):
    """Append-only narration line. The autoincrement id is the ordering key."""

    __tablename__ = "log_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    game_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False,
    )
    player_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)

    game: Mapped["Game"] = relationship("Game", back_populates="log_entries")

    __table_args__ = (
        Index("ix_log_entries_game_id_id", "game_id", "id"),
    )

    def __repr__(self) -> str:
        return f"<LogEntry(game={self.game_id}, id={self.id}, message={self.message!r})>"
