from grandline.data.config import get_settings
from grandline.data.models import Base, Game, LogEntry, Player, Property
from grandline.data.session import (
    get_session,
    init_db,
    close_db,
    session_scope,
    create_tables,
    drop_tables,
    configure_sqlite_engine,
    get_engine,
    get_session_factory,
    make_session_factory,
)
from grandline.data.repository import GameRepository

__all__ = [
    "get_settings",
    "Base",
    "Game",
    "LogEntry",
    "Player",
    "Property",
    "get_session",
    "init_db",
    "close_db",
    "session_scope",
    "create_tables",
    "drop_tables",
    "get_engine",
    "get_session_factory",
    "make_session_factory",
    "configure_sqlite_engine",
    "GameRepository",
]
