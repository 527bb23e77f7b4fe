"""
Per-player statistics: games played, lifetime medals and guess distribution.
"""

import logging

from wordle_cup.constants import MAX_GUESSES, Placement
from wordle_cup.data_models.profile import PlayerStats
from wordle_cup.services.base import BaseService

logger = logging.getLogger(__name__)


class StatsService(BaseService):

    async def player_stats(self, player_id: int) -> PlayerStats:
        async with self.read_session() as s:
            games_played = await self.store.count_games(player_id, session=s)
            medal_counts = await self.store.get_medal_counts(player_id, session=s)
            scores = await self.store.get_player_scores(player_id, session=s)

        medals = medal_counts.get(player_id, {placement: 0 for placement in Placement})

        distribution = {guesses: 0 for guesses in range(MAX_GUESSES + 1)}
        for score in scores:
            distribution[score] = distribution.get(score, 0) + 1

        return PlayerStats(
            player_id=player_id,
            games_played=games_played,
            medals=medals,
            distribution=distribution,
        )
