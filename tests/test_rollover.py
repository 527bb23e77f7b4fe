import pytest

from conftest import at
from wordle_cup.services.leaderboard import LeaderboardAggregator
from wordle_cup.services.rollover import CupRolloverMonitor


async def seed(store, day, player_id, score, cup_key):
    await store.ensure_player(player_id)
    await store.ensure_period(day)
    await store.record_score(day, player_id, score, cup_key, day * 1000 + player_id)


def make_monitor(database, store, scoring_config, clock):
    aggregator = LeaderboardAggregator(database, scoring_config, clock=clock, store=store)
    return CupRolloverMonitor(database, aggregator, scoring_config, clock=clock, store=store)


@pytest.mark.asyncio
async def test_first_start_adopts_current_cup(database, store, scoring_config, clock):
    monitor = make_monitor(database, store, scoring_config, clock)

    assert await monitor.start() == "2024-1"
    assert await store.get_state(CupRolloverMonitor.HELD_CUP_KEY) == "2024-1"
    assert await monitor.check() is None


@pytest.mark.asyncio
async def test_rollover_without_scores_announces_no_winner_once(database, store, scoring_config, clock):
    monitor = make_monitor(database, store, scoring_config, clock)
    await monitor.start()
    await seed(store, 1, 5, 0, "2024-1")

    clock.now = at(2024, 2, 1, 0)
    event = await monitor.check()

    assert event is not None
    assert (event.cup_key, event.new_cup_key) == ("2024-1", "2024-2")
    assert event.winner_id is None
    assert not event.has_winner
    assert monitor.held_cup_key == "2024-2"

    clock.now = at(2024, 2, 1, 2)
    assert await monitor.check() is None
    clock.now = at(2024, 2, 20)
    assert await monitor.check() is None

    results = await store.get_cup_results()
    assert [(r.cup_key, r.winner_id) for r in results] == [("2024-1", None)]


@pytest.mark.asyncio
async def test_rollover_picks_cup_leader(database, store, scoring_config, clock):
    monitor = make_monitor(database, store, scoring_config, clock)
    await monitor.start()
    await seed(store, 1, 5, 4, "2024-1")
    await seed(store, 1, 6, 2, "2024-1")
    await seed(store, 32, 5, 1, "2024-2")  # next cup, does not count

    clock.now = at(2024, 2, 2)
    event = await monitor.check()

    assert (event.winner_id, event.winner_score) == (6, 8)
    assert (await store.get_cup_result("2024-1")).winner_id == 6


@pytest.mark.asyncio
async def test_restart_does_not_repeat_announcement(database, store, scoring_config, clock):
    monitor = make_monitor(database, store, scoring_config, clock)
    await monitor.start()
    await seed(store, 1, 5, 3, "2024-1")

    clock.now = at(2024, 2)
    assert await monitor.check() is not None

    restarted = make_monitor(database, store, scoring_config, clock)
    assert await restarted.start() == "2024-2"
    assert await restarted.check() is None


@pytest.mark.asyncio
async def test_restart_detects_rollover_missed_while_down(database, store, scoring_config, clock):
    monitor = make_monitor(database, store, scoring_config, clock)
    await monitor.start()
    await seed(store, 1, 5, 3, "2024-1")

    # bot was stopped during January and comes back in February
    clock.now = at(2024, 2, 3)
    restarted = make_monitor(database, store, scoring_config, clock)
    assert await restarted.start() == "2024-1"

    event = await restarted.check()
    assert (event.cup_key, event.winner_id) == ("2024-1", 5)


@pytest.mark.asyncio
async def test_already_stored_result_is_not_emitted_again(database, store, scoring_config, clock):
    await store.set_state(CupRolloverMonitor.HELD_CUP_KEY, "2024-1")
    await store.add_cup_result("2024-1", None, None)

    clock.now = at(2024, 2)
    monitor = make_monitor(database, store, scoring_config, clock)
    assert await monitor.check() is None
    assert monitor.held_cup_key == "2024-2"
    assert await store.get_state(CupRolloverMonitor.HELD_CUP_KEY) == "2024-2"


@pytest.mark.asyncio
async def test_cup_stays_pending_until_announced(database, store, scoring_config, clock):
    monitor = make_monitor(database, store, scoring_config, clock)
    await monitor.start()
    await seed(store, 1, 5, 2, "2024-1")

    clock.now = at(2024, 2)
    event = await monitor.check()
    assert await monitor.pending_announcements() == [event]

    # sending failed, so nothing was marked; a restart still sees the cup as pending
    restarted = make_monitor(database, store, scoring_config, clock)
    await restarted.start()
    assert await restarted.check() is None
    pending = await restarted.pending_announcements()
    assert [(p.cup_key, p.new_cup_key, p.winner_id, p.winner_score) for p in pending] == [("2024-1", "2024-2", 5, 8)]

    await restarted.mark_announced(pending[0])
    assert await restarted.pending_announcements() == []
    cup_result = await store.get_cup_result("2024-1")
    assert cup_result.announced
    assert cup_result.announced_at is not None


@pytest.mark.asyncio
async def test_marking_unknown_cup_is_a_no_op(store):
    assert await store.mark_cup_announced("1999-1") is False
    assert await store.get_unannounced_cup_results() == []
