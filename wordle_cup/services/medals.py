"""
Medal resolution for a Wordle day.

A player holds a placement on a day when their score equals the day's
high-score value for that placement. Ties share the placement.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from wordle_cup.constants import Placement
from wordle_cup.data_models.leaderboard import DailyStandings, MedalHolder
from wordle_cup.services.base import BaseService

logger = logging.getLogger(__name__)


class MedalResolver(BaseService):
    """Answers "who holds gold/silver/bronze on day N"."""

    async def medalists(
        self,
        placement: Placement,
        period_id: Optional[int] = None,
        session: Optional[AsyncSession] = None
    ) -> Optional[List[MedalHolder]]:
        """
        Holders of a placement on a day (latest day when period_id is None).

        Returns None when the placement is not decided yet, which is different
        from an empty list.
        """
        async with self.read_session(session) as s:
            if period_id is None:
                period_id = await self.store.get_latest_period(session=s)
                if period_id is None:
                    return None

            triple = await self.store.get_daily_high_scores(period_id, session=s)
            if triple is None:
                return None

            value = triple.value_for(placement)
            if value is None:
                return None

            sheets = await self.store.get_scores_for_period(period_id, score=value, session=s)
            return [
                MedalHolder(player_id=sheet.player_id, message_id=sheet.msg_id, score=sheet.score)
                for sheet in sheets
            ]

    async def standings(
        self,
        period_id: Optional[int] = None,
        session: Optional[AsyncSession] = None
    ) -> DailyStandings:
        """All three placements of a day, read from one snapshot."""
        async with self.read_session(session) as s:
            if period_id is None:
                period_id = await self.store.get_latest_period(session=s)

            holders = {}
            for placement in Placement:
                if period_id is None:
                    holders[placement] = None
                else:
                    holders[placement] = await self.medalists(placement, period_id, session=s)

            return DailyStandings(period_id=period_id, holders=holders)
