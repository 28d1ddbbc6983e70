"""
Tests for the asyncio turn scheduler and the after-commit hook.
"""

import asyncio

import pytest

from grandline.services.scheduler import AsyncioTurnScheduler, run_after_commit


class CallRecorder:
    def __init__(self, fail: bool = False):
        self.calls = []
        self.fail = fail

    async def __call__(self, game_id, player_id):
        self.calls.append((game_id, player_id))
        if self.fail:
            raise RuntimeError("boom")


async def test_scheduled_turn_fires_after_delay():
    recorder = CallRecorder()
    scheduler = AsyncioTurnScheduler(recorder)

    scheduler.schedule("g1", 2, 0.01)
    assert scheduler.pending("g1") == 1
    await asyncio.sleep(0.1)

    assert recorder.calls == [("g1", 2)]
    assert scheduler.pending("g1") == 0
    await scheduler.shutdown()


async def test_cancel_drops_pending_turns_for_one_game():
    recorder = CallRecorder()
    scheduler = AsyncioTurnScheduler(recorder)

    scheduler.schedule("g1", 2, 0.05)
    scheduler.schedule("g2", 5, 0.05)
    scheduler.cancel("g1")
    await asyncio.sleep(0.15)

    assert recorder.calls == [("g2", 5)]
    await scheduler.shutdown()


async def test_failing_callback_is_logged_not_raised(caplog):
    scheduler = AsyncioTurnScheduler(CallRecorder(fail=True))

    scheduler.schedule("g1", 2, 0)
    await asyncio.sleep(0.05)

    assert "Scheduled AI turn failed" in caplog.text
    await scheduler.shutdown()


async def test_shutdown_cancels_everything():
    recorder = CallRecorder()
    scheduler = AsyncioTurnScheduler(recorder)
    scheduler.schedule("g1", 2, 10)
    scheduler.schedule("g2", 3, 10)

    await scheduler.shutdown()
    assert scheduler.pending("g1") == 0
    assert scheduler.pending("g2") == 0
    assert recorder.calls == []


async def test_schedule_requires_callback():
    scheduler = AsyncioTurnScheduler()
    with pytest.raises(RuntimeError):
        scheduler.schedule("g1", 2, 0)


async def test_after_commit_callbacks_run_on_commit(repo):
    calls = []
    await repo.create_game(host_id="user-robin")
    run_after_commit(repo.session, lambda: calls.append("first"))
    run_after_commit(repo.session, lambda: calls.append("second"))
    assert calls == []

    await repo.session.commit()
    assert calls == ["first", "second"]

    # Callbacks run once; a later commit does not replay them
    await repo.create_game(host_id="user-robin")
    await repo.session.commit()
    assert calls == ["first", "second"]


async def test_after_commit_callbacks_are_dropped_on_rollback(repo):
    calls = []
    await repo.create_game(host_id="user-robin")
    run_after_commit(repo.session, lambda: calls.append("never"))

    await repo.session.rollback()
    await repo.create_game(host_id="user-robin")
    await repo.session.commit()
    assert calls == []


async def test_fired_timers_leave_no_entry_behind():
    scheduler = AsyncioTurnScheduler(CallRecorder())
    for i in range(20):
        scheduler.schedule(f"g{i}", 1, 0)
    await asyncio.sleep(0.05)

    assert scheduler._timers == {}
    await scheduler.shutdown()
