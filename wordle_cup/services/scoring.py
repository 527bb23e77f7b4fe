"""
Score recording pipeline.

Turns a posted Wordle result into stored state. Everything a single message
changes (player row, day row, score sheet, day podium) is written inside one
exclusive transaction, and the medal holders of the day are read before and
after the insert so the caller knows which reactions to take away and which
to hand out.

Also replays channel history through the same path.
"""

import logging
from typing import AsyncIterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from wordle_cup.config import ScoringConfig
from wordle_cup.data_models.leaderboard import DailyStandings
from wordle_cup.data_models.results import MedalChanges, RecordOutcome, ReplaySummary, ResultMessage
from wordle_cup.services.base import BaseService
from wordle_cup.services.medals import MedalResolver
from wordle_cup.utils.cup import cup_key_for
from wordle_cup.utils.exceptions import MessageParseError
from wordle_cup.utils.high_scores import upsert_high_score
from wordle_cup.utils.parser import looks_like_result, parse_result_message

logger = logging.getLogger(__name__)


def diff_standings(period_id: int, before: DailyStandings, after: DailyStandings) -> MedalChanges:
    """Reaction changes needed to go from one day's standings to the next."""
    old_markers = before.markers()
    new_markers = after.markers()
    return MedalChanges(
        period_id=period_id,
        to_remove=[marker for marker in old_markers if marker not in new_markers],
        to_add=[marker for marker in new_markers if marker not in old_markers],
    )


class ScoringService(BaseService):
    """Records results and keeps each day's podium current."""

    def __init__(self, database, scoring_config: ScoringConfig, store=None, medal_resolver: Optional[MedalResolver] = None):
        super().__init__(database, store)
        self.scoring_config = scoring_config
        self.medals = medal_resolver or MedalResolver(database, self.store)

    async def _update_podium(self, period_id: int, guess_count: int, session: AsyncSession) -> None:
        triple = await self.store.get_daily_high_scores(period_id, session=session)
        updated = upsert_high_score(triple, guess_count)
        if updated != triple:
            await self.store.update_daily_high_scores(period_id, updated, session=session)
            logger.debug(f"Day {period_id} podium {triple.as_tuple()} -> {updated.as_tuple()}")

    async def record_result(self, message: ResultMessage) -> RecordOutcome:
        """
        Parse and store one result message.

        Raises:
            MessageParseError: the text is not a valid result, nothing is stored
            StorageError: the transaction failed, nothing is stored
        """
        parsed = parse_result_message(message.text)
        cup_key = cup_key_for(message.timestamp, self.scoring_config.timezone)
        day = parsed.period_id

        async with self.write_transaction() as session:
            await self.store.ensure_player(message.author_id, session=session)
            await self.store.ensure_period(day, session=session)

            before = await self.medals.standings(day, session=session)

            inserted = await self.store.record_score(
                period_id=day,
                player_id=message.author_id,
                guess_count=parsed.guess_count,
                cup_key=cup_key,
                source_message_id=message.message_id,
                session=session
            )
            if inserted:
                await self._update_podium(day, parsed.guess_count, session)

            after = await self.medals.standings(day, session=session)

        changes = diff_standings(day, before, after)
        logger.info(
            f"Day {day}: player {message.author_id} scored {parsed.guess_count} "
            f"(cup {cup_key}, inserted={inserted}, medal changes: -{len(changes.to_remove)} +{len(changes.to_add)})"
        )
        return RecordOutcome(
            period_id=day,
            player_id=message.author_id,
            guess_count=parsed.guess_count,
            cup_key=cup_key,
            inserted=inserted,
            medal_changes=changes,
        )

    async def replay(self, messages: AsyncIterable[ResultMessage]) -> ReplaySummary:
        """
        Record a batch of historical messages, oldest first.

        Already stored results are skipped by the first-submission rule, so a
        replay can be run any number of times.
        """
        summary = ReplaySummary()
        async for message in messages:
            if not looks_like_result(message.text):
                continue
            summary.read += 1
            try:
                outcome = await self.record_result(message)
            except MessageParseError as e:
                logger.debug(f"Skipping message {message.message_id}: {e}")
                summary.rejected += 1
                continue
            if outcome.inserted:
                summary.recorded += 1
            else:
                summary.duplicates += 1

        logger.info(
            f"Replay finished: {summary.read} results read, {summary.recorded} recorded, "
            f"{summary.duplicates} duplicates, {summary.rejected} rejected"
        )
        return summary
