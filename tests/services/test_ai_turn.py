"""
Tests for autonomous AI turns and the AI controller callback.
"""

import pytest

from grandline.data.repository import GameRepository
from grandline.services.ai_controller import AIController
from grandline.services.game_service import AIOpponent, GameService
from grandline.services.turn_engine import TurnEngine


@pytest.fixture
def service(repo, scheduler, settings, rng):
    return GameService(repo, scheduler, settings=settings, rng=rng)


@pytest.fixture
def engine_(service):
    return service.engine


async def _hand_turn_to_ai(service, rng, identity, *opponents):
    """Create a game and let the human skip so the first AI is on the move."""
    opponents = opponents or (AIOpponent("Buggy", "easy"),)
    game_id = await service.create_game(identity, list(opponents))
    rng.queue_roll(1, 2)
    await service.roll_dice(game_id, identity)
    await service.skip_buying(game_id, identity)
    await service.repo.session.commit()
    return game_id, await service.repo.list_players(game_id)


async def test_ai_buys_when_policy_agrees(service, engine_, repo, scheduler, rng, luffy):
    game_id, (human, ai) = await _hand_turn_to_ai(service, rng, luffy)
    scheduler.scheduled.clear()

    rng.queue_roll(1, 2)
    rng.draws.append(0.1)
    assert await engine_.process_ai_turn(game_id, ai.id) is True

    assert ai.position == 3
    assert ai.money == 1440
    assert (await repo.get_property(game_id, 3)).owner_id == ai.id

    game = await repo.get_game(game_id)
    assert game.current_player_id == human.id
    assert game.current_player_index == 0
    assert game.turn_phase == "rolling"
    assert game.round == 2

    await repo.session.commit()
    assert scheduler.scheduled == []

    messages = [e.message for e in await repo.get_recent_log_entries(game_id)]
    assert messages[-1] == "Buggy bought Shells Town for 60 Berries"


async def test_ai_declines_purchase(service, engine_, repo, rng, luffy):
    game_id, (human, ai) = await _hand_turn_to_ai(service, rng, luffy)

    rng.queue_roll(1, 2)
    rng.draws.append(0.99)
    assert await engine_.process_ai_turn(game_id, ai.id) is True

    assert ai.money == 1500
    assert (await repo.get_property(game_id, 3)).owner_id is None
    assert (await repo.get_game(game_id)).current_player_id == human.id
    messages = [e.message for e in await repo.get_recent_log_entries(game_id)]
    assert messages[-1] == "Buggy decided not to buy Shells Town"


async def test_ai_that_cannot_afford_does_not_buy(service, engine_, repo, rng, luffy):
    game_id, (_, ai) = await _hand_turn_to_ai(service, rng, luffy)
    ai.money = 5000
    ai.position = 35

    # Easy agent always wants to buy when this rich; Laugh Tale is affordable
    rng.queue_roll(2, 2)
    assert await engine_.process_ai_turn(game_id, ai.id) is True
    assert (await repo.get_property(game_id, 39)).owner_id == ai.id

    ai.money = 30
    game = await repo.get_game(game_id)
    game.current_player_id = ai.id
    ai.position = 0
    rng.queue_roll(1, 2)
    rng.draws.append(0.0)
    assert await engine_.process_ai_turn(game_id, ai.id) is True
    assert (await repo.get_property(game_id, 3)).owner_id is None
    assert ai.money == 30


async def test_ai_pays_rent_without_paying_phase(service, engine_, repo, rng, luffy):
    game_id, (human, ai) = await _hand_turn_to_ai(service, rng, luffy)
    (await repo.get_property(game_id, 3)).owner_id = human.id

    rng.queue_roll(1, 2)
    assert await engine_.process_ai_turn(game_id, ai.id) is True

    game = await repo.get_game(game_id)
    assert ai.money == 1496
    assert human.money == 1504
    assert game.turn_phase == "rolling"
    assert game.pending_rent is None
    assert game.current_player_id == human.id


async def test_consecutive_ai_seats_chain(service, engine_, repo, scheduler, rng, luffy):
    game_id, (human, buggy, crocodile) = await _hand_turn_to_ai(
        service, rng, luffy, AIOpponent("Buggy", "easy"), AIOpponent("Crocodile", "medium")
    )
    assert scheduler.scheduled == [(game_id, buggy.id, 1.0)]

    rng.queue_roll(3, 4)
    await engine_.process_ai_turn(game_id, buggy.id)
    await repo.session.commit()

    game = await repo.get_game(game_id)
    assert game.current_player_id == crocodile.id
    assert game.current_player_index == 2
    assert scheduler.scheduled[-1] == (game_id, crocodile.id, 1.0)


async def test_stale_turn_is_a_no_op(service, engine_, repo, rng, luffy):
    game_id, (human, ai) = await _hand_turn_to_ai(service, rng, luffy)

    rng.queue_roll(3, 4)
    assert await engine_.process_ai_turn(game_id, ai.id) is True
    # The same timer firing twice must not play a second turn
    assert await engine_.process_ai_turn(game_id, ai.id) is False
    assert ai.position == 7


async def test_guard_rejects_human_and_unknown_players(service, engine_, rng, luffy):
    game_id, (human, ai) = await _hand_turn_to_ai(service, rng, luffy)
    assert await engine_.process_ai_turn(game_id, human.id) is False
    assert await engine_.process_ai_turn(game_id, 9999) is False
    assert await engine_.process_ai_turn("missing", ai.id) is False


async def test_finished_game_is_a_no_op(service, engine_, repo, rng, luffy):
    game_id, (_, ai) = await _hand_turn_to_ai(service, rng, luffy)
    game = await repo.get_game(game_id)
    game.status = "finished"

    assert await engine_.process_ai_turn(game_id, ai.id) is False
    assert ai.position == 0


async def test_bankrupt_ai_does_not_play(service, engine_, rng, luffy):
    game_id, (_, ai) = await _hand_turn_to_ai(service, rng, luffy)
    ai.is_bankrupt = True
    assert await engine_.process_ai_turn(game_id, ai.id) is False


async def test_controller_runs_turn_in_its_own_transaction(
    service, session_factory, scheduler, settings, rng, luffy
):
    game_id, (human, ai) = await _hand_turn_to_ai(service, rng, luffy)

    controller = AIController(scheduler, session_factory=session_factory, settings=settings, rng=rng)
    rng.queue_roll(3, 4)
    assert await controller.run_turn(game_id, ai.id) is True

    async with session_factory() as session:
        repo = GameRepository(session)
        game = await repo.get_game(game_id)
        player = await repo.get_player(ai.id)
        assert player.position == 7
        assert game.current_player_id == human.id

    # A second firing sees the committed handoff and does nothing
    assert await controller.run_turn(game_id, ai.id) is False


async def test_engine_without_scheduler_still_hands_off(repo, settings, rng, luffy):
    service = GameService(repo, None, settings=settings, rng=rng)
    assert isinstance(service.engine, TurnEngine)
    game_id = await service.create_game(luffy, [AIOpponent("Buggy", "hard")])
    rng.queue_roll(3, 4)
    await service.roll_dice(game_id, luffy)
    await repo.session.commit()

    human, ai = await repo.list_players(game_id)
    assert (await repo.get_game(game_id)).current_player_id == ai.id
