import pytest

from conftest import at
from wordle_cup.config import ScoringConfig
from wordle_cup.services.leaderboard import LeaderboardAggregator, ScoreWindow


async def seed(store, day, player_id, score, cup_key):
    await store.ensure_player(player_id)
    await store.ensure_period(day)
    await store.record_score(day, player_id, score, cup_key, day * 1000 + player_id)


@pytest.fixture
def aggregator(database, store, scoring_config, clock):
    return LeaderboardAggregator(database, scoring_config, clock=clock, store=store)


@pytest.mark.asyncio
async def test_weighted_scores_and_order(store, aggregator):
    for day, score in zip((1, 2, 3), (1, 3, 0)):
        await seed(store, day, 1, score, "2024-1")
    await seed(store, 1, 2, 2, "2024-1")

    ranking = await aggregator.rank(ScoreWindow.cup("2024-1"))

    assert [(e.rank, e.player_id, e.weighted_score, e.games_played) for e in ranking] == [
        (1, 1, 18, 3),
        (2, 2, 8, 1),
    ]


@pytest.mark.asyncio
async def test_zero_score_players_are_left_out(store, aggregator):
    await seed(store, 1, 1, 0, "2024-1")
    await seed(store, 2, 1, 0, "2024-1")
    await seed(store, 1, 2, 6, "2024-1")
    await store.ensure_player(3)

    ranking = await aggregator.rank(ScoreWindow.cup("2024-1"))
    assert [e.player_id for e in ranking] == [2]


@pytest.mark.asyncio
async def test_ties_are_broken_by_player_id(store, aggregator):
    await seed(store, 1, 30, 3, "2024-1")
    await seed(store, 1, 10, 3, "2024-1")
    await seed(store, 1, 20, 3, "2024-1")

    ranking = await aggregator.rank(ScoreWindow.cup("2024-1"))
    assert [e.player_id for e in ranking] == [10, 20, 30]
    assert [e.rank for e in ranking] == [1, 2, 3]


@pytest.mark.asyncio
async def test_windows(store, aggregator, clock):
    await seed(store, 10, 1, 1, "2023-12")   # 13
    await seed(store, 40, 1, 6, "2024-1")    # 1
    await seed(store, 40, 2, 4, "2024-1")    # 3
    await seed(store, 70, 2, 2, "2024-2")    # 8

    everything = await aggregator.rank(ScoreWindow.all_history())
    assert [(e.player_id, e.weighted_score) for e in everything] == [(1, 14), (2, 11)]

    current = await aggregator.rank(ScoreWindow.current_cup())
    assert [(e.player_id, e.weighted_score) for e in current] == [(2, 3), (1, 1)]

    clock.now = at(2024, 2)
    current = await aggregator.rank(ScoreWindow.current_cup())
    assert [(e.player_id, e.weighted_score) for e in current] == [(2, 8)]

    since = await aggregator.rank(ScoreWindow.since_period(40))
    assert [(e.player_id, e.weighted_score) for e in since] == [(2, 11), (1, 1)]


@pytest.mark.asyncio
async def test_leader(store, aggregator):
    assert await aggregator.leader(ScoreWindow.cup("2024-1")) is None

    await seed(store, 1, 7, 2, "2024-1")
    leader = await aggregator.leader(ScoreWindow.cup("2024-1"))
    assert (leader.player_id, leader.weighted_score) == (7, 8)


@pytest.mark.asyncio
async def test_alternate_weight_table(database, store, clock):
    flat = ScoringConfig(weights={0: 0, 1: 1, 2: 1, 3: 1, 4: 1, 5: 1, 6: 1})
    aggregator = LeaderboardAggregator(database, flat, clock=clock, store=store)

    await seed(store, 1, 1, 1, "2024-1")
    await seed(store, 1, 2, 6, "2024-1")
    await seed(store, 2, 2, 6, "2024-1")

    ranking = await aggregator.rank(ScoreWindow.cup("2024-1"))
    assert [(e.player_id, e.weighted_score) for e in ranking] == [(2, 2), (1, 1)]


def test_unknown_window_is_rejected(aggregator):
    with pytest.raises(ValueError):
        aggregator.resolve(ScoreWindow(kind="weekly"))
