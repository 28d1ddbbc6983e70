"""
Turn state machine.

Phases cycle ``rolling -> moving -> buying | paying | (end of turn) -> rolling``.
``moving`` only exists inside a roll: landing resolution always moves the
game on before the operation returns.

Every public method runs inside the caller's session and either raises
before anything is committed or leaves the game in a consistent phase.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Tuple

from grandline.core.agents import build_agent
from grandline.core.exceptions import (
    AuthorizationError,
    GameNotFoundError,
    InsufficientFundsError,
    PreconditionError,
    PropertyNotFoundError,
)
from grandline.core.game.board import BOARD, Board
from grandline.core.game.config import GameConfig
from grandline.core.game.rules import DiceRoll, calculate_rent, debit, move, roll_dice, tax_due
from grandline.core.game.spaces import Space, SpaceType
from grandline.core.game.state import GameStatus, Seat, TurnOrder, TurnPhase
from grandline.data.models import Game, Player, Property, utc_now
from grandline.data.repository import GameRepository
from grandline.services.identity import Identity
from grandline.services.log_recorder import GameLogRecorder
from grandline.services.scheduler import TurnScheduler, run_after_commit
from grandline.settings import GameSettings, get_game_settings

logger = logging.getLogger(__name__)


class TurnEngine:
    """Advances one game through rolls, landings and turn handoffs."""

    def __init__(
        self,
        repo: GameRepository,
        scheduler: Optional[TurnScheduler] = None,
        *,
        config: Optional[GameConfig] = None,
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
        board: Board = BOARD,
    ):
        self.repo = repo
        self.log = GameLogRecorder(repo)
        self.scheduler = scheduler
        self.config = config or GameConfig()
        self.settings = settings or get_game_settings()
        self.rng = rng or random.Random(self.settings.rng_seed)
        self.board = board

    # ---- Human operations ----

    async def roll_dice(self, game_id: str, identity: Optional[Identity]) -> DiceRoll:
        """Roll for the current human player, move, and resolve the landing."""
        game, player = await self._load_human_turn(game_id, identity, TurnPhase.ROLLING)
        dice = await self._roll_and_move(game, player)
        await self._resolve_landing(game, player, autonomous=False)
        return dice

    async def buy_property(self, game_id: str, identity: Optional[Identity]) -> Property:
        """Buy the unowned space the current human player is standing on."""
        game, player = await self._load_human_turn(game_id, identity, TurnPhase.BUYING)
        space = self.board.get_space(player.position)
        prop = await self._get_property(game, space)

        if prop.owner_id is not None:
            raise PreconditionError(f"{space.name} is already owned")
        if player.money < space.price:
            raise InsufficientFundsError(
                f"{player.name} has {player.money} {self.config.currency}, "
                f"{space.name} costs {space.price}"
            )

        await self._purchase(game, player, space, prop)
        await self._end_turn(game)
        return prop

    async def skip_buying(self, game_id: str, identity: Optional[Identity]) -> None:
        """Decline the purchase and end the turn."""
        game, player = await self._load_human_turn(game_id, identity, TurnPhase.BUYING)
        space = self.board.get_space(player.position)
        await self.log.record(game.id, f"{player.name} decided not to buy {space.name}", player.id)
        await self._end_turn(game)

    async def confirm_payment(self, game_id: str, identity: Optional[Identity]) -> None:
        """Acknowledge the rent settled on landing and end the turn."""
        game, _ = await self._load_human_turn(game_id, identity, TurnPhase.PAYING)
        await self._end_turn(game)

    # ---- AI operation ----

    async def process_ai_turn(self, game_id: str, player_id: int) -> bool:
        """
        Play a whole turn for an AI seat.

        Returns False without touching anything when the turn is no longer
        valid: the game is gone or not playing, or it is not this player's
        rolling phase any more.
        """
        game = await self.repo.get_game(game_id, for_update=True)
        if game is None or game.status != GameStatus.PLAYING.value:
            logger.info(f"Skipping AI turn: game {game_id} is not playing")
            return False

        player = await self.repo.get_player(player_id)
        if player is None or player.game_id != game.id or not player.is_ai or player.is_bankrupt:
            logger.warning(f"Skipping AI turn: player {player_id} cannot act in game {game_id}")
            return False

        if game.current_player_id != player.id or game.turn_phase != TurnPhase.ROLLING.value:
            logger.warning(
                f"Skipping AI turn: not player {player_id}'s roll in game {game_id} "
                f"(current={game.current_player_id}, phase={game.turn_phase})"
            )
            return False

        await self._roll_and_move(game, player)
        await self._resolve_landing(game, player, autonomous=True)
        return True

    # ---- Preconditions ----

    async def _load_human_turn(
        self,
        game_id: str,
        identity: Optional[Identity],
        phase: TurnPhase,
    ) -> Tuple[Game, Player]:
        if identity is None:
            raise AuthorizationError("Must be logged in")

        game = await self.repo.get_game(game_id, for_update=True)
        if game is None:
            raise GameNotFoundError(f"Game {game_id} not found")
        if game.status != GameStatus.PLAYING.value:
            raise PreconditionError(f"Game {game_id} is {game.status}, not playing")
        if game.turn_phase != phase.value:
            raise PreconditionError(f"Wrong phase: expected {phase.value}, game is {game.turn_phase}")

        player = await self.current_player(game)
        if player.is_ai:
            raise PreconditionError("Not your turn: an AI player is acting")
        if player.user_id != identity.user_id:
            raise PreconditionError("Not your turn")

        return game, player

    async def current_player(self, game: Game) -> Player:
        player = None
        if game.current_player_id is not None:
            player = await self.repo.get_player(game.current_player_id)
        if player is None:
            raise PreconditionError(f"Game {game.id} has no current player")
        return player

    async def _get_property(self, game: Game, space: Space) -> Property:
        prop = await self.repo.get_property(game.id, space.position)
        if prop is None:
            raise PropertyNotFoundError(f"No property record for {space.name} in game {game.id}")
        return prop

    # ---- Movement & landing ----

    async def _roll_and_move(self, game: Game, player: Player) -> DiceRoll:
        dice = roll_dice(self.rng)
        game.dice_roll = dice.as_list()
        game.turn_phase = TurnPhase.MOVING.value
        await self.log.record(
            game.id,
            f"{player.name} rolled {dice.first} + {dice.second} = {dice.total}",
            player.id,
        )

        movement = move(player.position, dice.total, self.config)
        if movement.passed_go:
            player.money += movement.salary
            await self.log.record(
                game.id,
                f"{player.name} passed GO and collected {movement.salary} {self.config.currency}!",
                player.id,
            )
        player.position = movement.end
        return dice

    async def _resolve_landing(self, game: Game, player: Player, *, autonomous: bool) -> None:
        """
        Apply the effect of the space ``player`` stands on.

        Human players may stop in ``buying`` or ``paying``; AI players
        (``autonomous``) always finish their turn here.
        """
        space = self.board.get_space(player.position)
        await self.log.record(game.id, f"{player.name} landed on {space.name}", player.id)

        awaiting: Optional[TurnPhase] = None
        if space.is_ownable:
            awaiting = await self._land_on_ownable(game, player, space, autonomous=autonomous)
        elif space.space_type == SpaceType.TAX:
            await self._charge_tax(game, player, space)
        elif space.space_type == SpaceType.GO_TO_JAIL:
            await self._send_to_jail(game, player)
        # GO, jail visit, free parking and card spaces have no effect

        if awaiting is None or autonomous:
            await self._end_turn(game)
        else:
            game.turn_phase = awaiting.value

    async def _land_on_ownable(
        self,
        game: Game,
        player: Player,
        space: Space,
        *,
        autonomous: bool,
    ) -> Optional[TurnPhase]:
        prop = await self._get_property(game, space)

        if prop.owner_id is None:
            if not autonomous:
                return TurnPhase.BUYING
            await self._ai_consider_purchase(game, player, space, prop)
            return None

        if prop.owner_id != player.id and not prop.is_mortgaged:
            rent = calculate_rent(space, prop.houses, prop.has_hotel, self.config)
            await self._settle_rent(game, player, prop.owner_id, rent)
            if autonomous or player.is_bankrupt or game.status == GameStatus.FINISHED.value:
                return None
            game.pending_rent = rent
            return TurnPhase.PAYING

        return None

    async def _ai_consider_purchase(self, game: Game, player: Player, space: Space, prop: Property) -> None:
        agent = build_agent(player.ai_difficulty, self.rng, self.config)
        if agent.should_buy(player.money, space) and player.money >= space.price:
            await self._purchase(game, player, space, prop)
        else:
            await self.log.record(game.id, f"{player.name} decided not to buy {space.name}", player.id)

    async def _purchase(self, game: Game, player: Player, space: Space, prop: Property) -> None:
        prop.owner_id = player.id
        player.money -= space.price
        await self.log.record(
            game.id,
            f"{player.name} bought {space.name} for {space.price} {self.config.currency}",
            player.id,
        )

    # ---- Money ----

    async def _settle_rent(self, game: Game, payer: Player, owner_id: int, rent: int) -> None:
        """Move rent from payer to owner. The owner receives only what was actually paid."""
        owner = await self.repo.get_player(owner_id)
        result = debit(payer.money, rent)
        payer.money = result.balance
        if owner is not None:
            owner.money += result.paid

        owner_name = owner.name if owner is not None else "the bank"
        await self.log.record(
            game.id,
            f"{payer.name} paid {result.paid} {self.config.currency} rent to {owner_name}",
            payer.id,
        )
        if result.shortfall:
            await self._handle_shortfall(game, payer, result.shortfall)

    async def _charge_tax(self, game: Game, player: Player, space: Space) -> None:
        result = debit(player.money, tax_due(space))
        player.money = result.balance
        await self.log.record(
            game.id,
            f"{player.name} paid {result.paid} {self.config.currency} in taxes",
            player.id,
        )
        if result.shortfall:
            await self._handle_shortfall(game, player, result.shortfall)

    async def _send_to_jail(self, game: Game, player: Player) -> None:
        player.position = self.config.jail_position
        player.is_in_jail = True
        player.jail_turns = 0
        await self.log.record(game.id, f"{player.name} was sent to Impel Down!", player.id)

    async def _handle_shortfall(self, game: Game, player: Player, shortfall: int) -> None:
        if not self.settings.bankruptcy_enabled:
            return
        await self.log.record(
            game.id,
            f"{player.name} is {shortfall} {self.config.currency} short and goes bankrupt",
            player.id,
        )
        await self._declare_bankruptcy(game, player)

    async def _declare_bankruptcy(self, game: Game, player: Player) -> None:
        """Remove ``player`` from the rotation and return their properties to the bank."""
        player.is_bankrupt = True
        player.money = 0
        await self.repo.flush()
        for prop in await self.repo.list_owned_properties(player.id):
            prop.owner_id = None
            prop.houses = 0
            prop.has_hotel = False
            prop.is_mortgaged = False
        await self.repo.flush()
        logger.info(f"Player {player.id} ({player.name}) went bankrupt in game {game.id}")

        active = [p for p in await self.repo.list_players(game.id) if not p.is_bankrupt]
        if len(active) <= 1:
            await self._finish_game(game, active[0] if active else None)

    async def _finish_game(self, game: Game, winner: Optional[Player]) -> None:
        game.status = GameStatus.FINISHED.value
        game.winner_id = winner.id if winner is not None else None
        game.finished_at = utc_now()
        game.pending_rent = None
        if winner is not None:
            await self.log.record(game.id, f"{winner.name} wins the game!", winner.id)
        logger.info(f"Game {game.id} finished (winner: {game.winner_id})")

        if self.scheduler is not None:
            scheduler = self.scheduler
            run_after_commit(self.repo.session, lambda: scheduler.cancel(game.id))

    # ---- Turn handoff ----

    async def _end_turn(self, game: Game) -> None:
        """Hand the turn to the next active player and reset per-turn state."""
        game.pending_rent = None
        game.turn_phase = TurnPhase.ROLLING.value
        if game.status != GameStatus.PLAYING.value:
            return

        players = await self.repo.list_players(game.id)
        order = TurnOrder(Seat(p.id, p.order, p.is_ai, p.is_bankrupt) for p in players)
        index, seat, wrapped = order.next_after(game.current_player_id)

        game.current_player_index = index
        game.current_player_id = seat.player_id
        game.dice_roll = None
        if wrapped:
            game.round += 1

        if seat.is_ai:
            self._schedule_ai_turn(game.id, seat.player_id)

    def _schedule_ai_turn(self, game_id: str, player_id: int) -> None:
        if self.scheduler is None:
            logger.warning(f"No scheduler configured; AI turn for player {player_id} in game {game_id} will not run")
            return
        scheduler = self.scheduler
        delay = self.settings.ai_turn_delay_seconds
        run_after_commit(self.repo.session, lambda: scheduler.schedule(game_id, player_id, delay))
