"""
Cup leaderboard aggregation.

Ranks players by weighted score over a window of score sheets: the whole
history, one cup, the current cup, or every day from a given day onward.
Each guess count is worth a fixed number of points (13, 8, 5, 3, 2, 1 for
1..6 guesses by default) so early solves count for much more than late ones.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from wordle_cup.config import ScoringConfig
from wordle_cup.data_models.leaderboard import LeaderboardEntry
from wordle_cup.services.base import BaseService
from wordle_cup.utils.cup import Clock, cup_key_for, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreWindow:
    """Which score sheets a ranking covers."""
    kind: str  # "all" | "cup" | "current" | "since"
    cup_key: Optional[str] = None
    from_period: Optional[int] = None

    @classmethod
    def all_history(cls) -> "ScoreWindow":
        return cls(kind="all")

    @classmethod
    def cup(cls, cup_key: str) -> "ScoreWindow":
        return cls(kind="cup", cup_key=cup_key)

    @classmethod
    def current_cup(cls) -> "ScoreWindow":
        return cls(kind="current")

    @classmethod
    def since_period(cls, period_id: int) -> "ScoreWindow":
        return cls(kind="since", from_period=period_id)


class LeaderboardAggregator(BaseService):
    """Read-only weighted ranking over the score store."""

    def __init__(self, database, scoring_config: ScoringConfig, clock: Clock = utc_now, store=None):
        super().__init__(database, store)
        self.scoring_config = scoring_config
        self.clock = clock

    def resolve(self, window: ScoreWindow) -> ScoreWindow:
        """Pin "current cup" to a concrete cup key."""
        if window.kind == "current":
            return ScoreWindow.cup(cup_key_for(self.clock(), self.scoring_config.timezone))
        if window.kind not in ("all", "cup", "since"):
            raise ValueError(f"Unknown score window: {window.kind}")
        return window

    async def rank(
        self,
        window: ScoreWindow,
        session: Optional[AsyncSession] = None
    ) -> List[LeaderboardEntry]:
        """
        Weighted ranking for a window.

        Players whose weighted score is 0 are left out. Equal scores are
        ordered by player id ascending.
        """
        window = self.resolve(window)

        totals = await self.store.get_weighted_totals(
            self.scoring_config.weights,
            cup_key=window.cup_key if window.kind == "cup" else None,
            from_period=window.from_period if window.kind == "since" else None,
            session=session
        )

        logger.debug(f"Ranked {len(totals)} players for window {window}")
        return [
            LeaderboardEntry(rank=position, player_id=player_id, weighted_score=total, games_played=games)
            for position, (player_id, total, games) in enumerate(totals, start=1)
        ]

    async def leader(
        self,
        window: ScoreWindow,
        session: Optional[AsyncSession] = None
    ) -> Optional[LeaderboardEntry]:
        """Top entry of a window, None if nobody has scored."""
        ranking = await self.rank(window, session=session)
        return ranking[0] if ranking else None
