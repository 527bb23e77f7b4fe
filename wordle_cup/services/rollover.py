"""
Cup rollover detection.

The monitor holds the key of the cup it last saw. Each check compares it to
the cup key of "now"; when they differ the held cup has ended, its leader is
looked up and a single CupRolloverEvent is produced. The held key and the
finished cup's result are stored in the same transaction, so stopping and
restarting the bot between checks neither loses nor repeats a rollover. A
result stays pending until the caller marks it announced, so a failed send
is retried on the next wake.
"""

import logging
from typing import List, Optional

from wordle_cup.config import ScoringConfig
from wordle_cup.data_models.leaderboard import CupRolloverEvent
from wordle_cup.services.base import BaseService
from wordle_cup.services.leaderboard import LeaderboardAggregator, ScoreWindow
from wordle_cup.utils.cup import Clock, cup_key_for, utc_now

logger = logging.getLogger(__name__)


class CupRolloverMonitor(BaseService):
    """Detects month changes and resolves the finished cup's winner exactly once."""

    HELD_CUP_KEY = 'rollover.held_cup_key'

    def __init__(
        self,
        database,
        aggregator: LeaderboardAggregator,
        scoring_config: ScoringConfig,
        clock: Clock = utc_now,
        store=None
    ):
        super().__init__(database, store or aggregator.store)
        self.aggregator = aggregator
        self.scoring_config = scoring_config
        self.clock = clock
        self._held_cup_key: Optional[str] = None

    @property
    def held_cup_key(self) -> Optional[str]:
        return self._held_cup_key

    def _current_cup_key(self) -> str:
        return cup_key_for(self.clock(), self.scoring_config.timezone)

    async def start(self) -> str:
        """Load the held cup key, adopting the current cup on first run."""
        held = await self.store.get_state(self.HELD_CUP_KEY)
        if held is None:
            held = self._current_cup_key()
            await self.store.set_state(self.HELD_CUP_KEY, held)
            logger.info(f"No cup on record, starting with cup {held}")
        self._held_cup_key = held
        return held

    async def check(self) -> Optional[CupRolloverEvent]:
        """
        Run one wake cycle.

        Returns the rollover event when the held cup has just ended, else None.
        A cup with no non-zero scores still produces an event, with no winner.
        """
        if self._held_cup_key is None:
            await self.start()

        held = self._held_cup_key
        current = self._current_cup_key()
        if current == held:
            logger.debug(f"No new cup winner for cup {held}.")
            return None

        leader = await self.aggregator.leader(ScoreWindow.cup(held))
        winner_id = leader.player_id if leader else None
        winner_score = leader.weighted_score if leader else None

        async with self.write_transaction() as session:
            stored = await self.store.add_cup_result(held, winner_id, winner_score, session=session)
            await self.store.set_state(self.HELD_CUP_KEY, current, session=session)

        self._held_cup_key = current

        if not stored:
            logger.info(f"Cup {held} was already announced, now holding {current}")
            return None

        if winner_id is None:
            logger.warning(f"Cup {held} ended without a winner")
        else:
            logger.info(f"Cup {held} won by player {winner_id} with {winner_score} points")

        return CupRolloverEvent(
            cup_key=held,
            new_cup_key=current,
            winner_id=winner_id,
            winner_score=winner_score,
        )

    async def pending_announcements(self) -> List[CupRolloverEvent]:
        """
        Finished cups not yet announced, oldest first.

        Includes the event just returned by check(), so a caller that only
        works through this list still announces every cup exactly once.
        """
        events = []
        for cup_result in await self.store.get_unannounced_cup_results():
            events.append(CupRolloverEvent(
                cup_key=cup_result.cup_key,
                new_cup_key=self._held_cup_key,
                winner_id=cup_result.winner_id,
                winner_score=cup_result.winner_score,
            ))
        return events

    async def mark_announced(self, event: CupRolloverEvent) -> None:
        await self.store.mark_cup_announced(event.cup_key)
        logger.info(f"Cup {event.cup_key} marked as announced")
