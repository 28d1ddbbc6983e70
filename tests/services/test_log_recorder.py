"""
Tests for the append-only game log.
"""

from grandline.services.log_recorder import GameLogRecorder


async def test_recent_returns_trailing_window_in_order(repo):
    game = await repo.create_game(host_id="user-nami")
    recorder = GameLogRecorder(repo)

    for i in range(15):
        await recorder.record(game.id, f"entry {i}")

    recent = await recorder.recent(game.id)
    assert [e.message for e in recent] == [f"entry {i}" for i in range(5, 15)]
    assert await repo.count_log_entries(game.id) == 15


async def test_recent_with_custom_limit(repo):
    game = await repo.create_game(host_id="user-nami")
    recorder = GameLogRecorder(repo)
    for i in range(4):
        await recorder.record(game.id, f"entry {i}")

    assert [e.message for e in await recorder.recent(game.id, limit=2)] == ["entry 2", "entry 3"]
    assert len(await recorder.recent(game.id, limit=50)) == 4


async def test_entries_are_scoped_to_their_game(repo):
    first = await repo.create_game(host_id="user-nami")
    second = await repo.create_game(host_id="user-usopp")
    recorder = GameLogRecorder(repo)

    await recorder.record(first.id, "in the first game")
    entry = await recorder.record(second.id, "in the second game", player_id=7)

    assert entry.player_id == 7
    assert [e.message for e in await recorder.recent(first.id)] == ["in the first game"]
    assert [e.message for e in await recorder.recent(second.id)] == ["in the second game"]
