from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from grandline.core.exceptions import (
    AuthorizationError,
    GameNotFoundError,
    InsufficientFundsError,
    MonopolyError,
    PreconditionError,
    ValidationError,
)
from grandline.core.agents import CREW
from grandline.core.game.board import BOARD
from grandline.data import GameRepository, close_db, create_tables, get_session, get_settings, init_db
from grandline.server.auth import get_identity
from grandline.server.schemas import (
    CreateGameRequest,
    CreateGameResponse,
    CrewMemberView,
    GameView,
    OkResponse,
)
from grandline.services import AIController, AIOpponent, GameService, Identity
from grandline.settings import get_game_settings

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (AuthorizationError, 401),
    (GameNotFoundError, 404),
    (PreconditionError, 409),
    (InsufficientFundsError, 409),
    (ValidationError, 422),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Startup
    logger.info("Starting Grand Line Monopoly server")
    await init_db(settings)
    if settings.db_auto_create:
        await create_tables()
    app.state.ai_controller = AIController(settings=get_game_settings())
    logger.info("Server ready")

    yield

    # Shutdown
    logger.info("Shutting down server")
    await app.state.ai_controller.shutdown()
    await close_db()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Grand Line Monopoly",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(MonopolyError)
async def monopoly_error_handler(request: Request, exc: MonopolyError) -> JSONResponse:
    status_code = 500
    for error_cls, code in STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            status_code = code
            break
    if status_code == 500:
        logger.error(f"Unhandled game error on {request.url.path}: {exc!r}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


# ---- Dependencies ----
async def get_repo(session: AsyncSession = Depends(get_session)) -> GameRepository:
    return GameRepository(session)


async def get_game_service(request: Request, repo: GameRepository = Depends(get_repo)) -> GameService:
    controller: AIController = request.app.state.ai_controller
    return GameService(
        repo,
        controller.scheduler,
        config=controller.config,
        settings=controller.settings,
        rng=controller.rng,
    )


# ---- Games ----
@app.post("/games", response_model=CreateGameResponse)
async def create_game(
    req: CreateGameRequest,
    identity: Optional[Identity] = Depends(get_identity),
    service: GameService = Depends(get_game_service),
):
    opponents = [AIOpponent(name=o.name, difficulty=o.difficulty.value) for o in req.ai_opponents]
    game_id = await service.create_game(identity, opponents)
    return CreateGameResponse(game_id=game_id)


@app.get("/games/{game_id}", response_model=GameView)
async def get_game(game_id: str, service: GameService = Depends(get_game_service)):
    return await service.get_game(game_id)


@app.post("/games/{game_id}/roll", response_model=OkResponse)
async def roll_dice(
    game_id: str,
    identity: Optional[Identity] = Depends(get_identity),
    service: GameService = Depends(get_game_service),
):
    await service.roll_dice(game_id, identity)
    return OkResponse()


@app.post("/games/{game_id}/buy", response_model=OkResponse)
async def buy_property(
    game_id: str,
    identity: Optional[Identity] = Depends(get_identity),
    service: GameService = Depends(get_game_service),
):
    await service.buy_property(game_id, identity)
    return OkResponse()


@app.post("/games/{game_id}/skip", response_model=OkResponse)
async def skip_buying(
    game_id: str,
    identity: Optional[Identity] = Depends(get_identity),
    service: GameService = Depends(get_game_service),
):
    await service.skip_buying(game_id, identity)
    return OkResponse()


@app.post("/games/{game_id}/confirm", response_model=OkResponse)
async def confirm_payment(
    game_id: str,
    identity: Optional[Identity] = Depends(get_identity),
    service: GameService = Depends(get_game_service),
):
    await service.confirm_payment(game_id, identity)
    return OkResponse()


# ---- Static data ----
@app.get("/board")
async def get_board():
    return BOARD.to_dict()


@app.get("/crew", response_model=List[CrewMemberView])
async def get_crew():
    """Preset opponents a client can offer when creating a game."""
    return [member.to_dict() for member in CREW]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("grandline.server.app:app", host="0.0.0.0", port=8000)
