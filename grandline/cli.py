"""
Command line entry point.

Usage:
    grandline init                 # Create tables
    grandline reset --yes          # Drop and recreate tables (DESTROYS ALL DATA)
    grandline stats                # Row counts per table
    grandline serve [--host H] [--port P]
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from sqlalchemy import func, select

from grandline.data import (
    Game,
    LogEntry,
    Player,
    Property,
    close_db,
    create_tables,
    drop_tables,
    get_settings,
    init_db,
    session_scope,
)


async def init() -> None:
    """Initialize database connection and create tables."""
    print("Initializing database...")
    await init_db()
    try:
        await create_tables()
        print("Tables created")
    finally:
        await close_db()


async def reset() -> None:
    """Drop all tables and recreate them."""
    await init_db()
    try:
        await drop_tables()
        print("Tables dropped")
        await create_tables()
        print("Tables created")
    finally:
        await close_db()


async def stats() -> None:
    """Show row counts for every table."""
    await init_db()
    try:
        async with session_scope() as session:
            for label, model in (("Games", Game), ("Players", Player), ("Properties", Property), ("Log entries", LogEntry)):
                result = await session.execute(select(func.count()).select_from(model))
                print(f"{label}: {result.scalar_one()}")

            result = await session.execute(
                select(Game.id, Game.status, Game.round, Game.created_at).order_by(Game.created_at.desc()).limit(5)
            )
            recent = result.all()
            if recent:
                print("\nRecent games:")
                for game_id, status, round_no, created_at in recent:
                    print(f"   - {game_id}: {status} (round {round_no}) - {created_at:%Y-%m-%d %H:%M:%S}")
    finally:
        await close_db()


def serve(host: str, port: int, reload: bool = False) -> None:
    import uvicorn

    uvicorn.run("grandline.server.app:app", host=host, port=port, reload=reload)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="grandline", description="Grand Line Monopoly server and database tools")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Create database tables")

    reset_parser = sub.add_parser("reset", help="Drop and recreate all tables")
    reset_parser.add_argument("--yes", action="store_true", help="Confirm that all data will be deleted")

    sub.add_parser("stats", help="Show database statistics")

    serve_parser = sub.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=get_settings().log_level)

    if args.command == "init":
        asyncio.run(init())
    elif args.command == "reset":
        if not args.yes:
            print("Refusing to drop all tables without --yes", file=sys.stderr)
            return 1
        asyncio.run(reset())
    elif args.command == "stats":
        asyncio.run(stats())
    elif args.command == "serve":
        serve(args.host, args.port, reload=args.reload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
