"""
Score Store - persisted players, score sheets and daily high scores.

All methods take an optional session. When given, the call joins the
caller's transaction (this is how the scoring pipeline makes a whole message
one atomic unit); otherwise a short-lived session is opened for the call.

Write methods are expected to run inside Database.write_transaction().
"""

from contextlib import asynccontextmanager
from typing import Dict, List, Optional, Set, Tuple

from sqlalchemy import select, func, case, literal
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wordle_cup.constants import Placement
from wordle_cup.database.models import Player, Daily, ScoreSheet, CupResult, BotState
from wordle_cup.utils.cup import utc_now
from wordle_cup.utils.exceptions import StorageError, PrecursorMissingError
from wordle_cup.utils.high_scores import HighScoreTriple
from wordle_cup.utils.logger import setup_logger

logger = setup_logger(__name__)

_PLACEMENT_COLUMNS = {
    Placement.GOLD: Daily.gold,
    Placement.SILVER: Daily.silver,
    Placement.BRONZE: Daily.bronze,
}


class ScoreStore:
    """Query and mutation surface over the score tables."""

    def __init__(self, database):
        """Initialize with database instance"""
        self.db = database
        self.logger = logger

    @asynccontextmanager
    async def _get_session_context(self, session: Optional[AsyncSession] = None):
        """
        Provides a session context. Uses the provided session if available,
        otherwise creates and manages a new session.
        """
        if session:
            # If a session is provided, we do not manage its lifecycle
            yield session
        else:
            async with self.db.get_session() as new_session:
                yield new_session

    @asynccontextmanager
    async def _write_context(self, operation: str, session: Optional[AsyncSession] = None):
        """Session for a mutation; database failures surface as StorageError."""
        try:
            if session:
                yield session
            else:
                async with self.db.write_transaction() as new_session:
                    yield new_session
        except SQLAlchemyError as e:
            self.logger.error(f"Storage failure during {operation}: {e}")
            raise StorageError(operation, str(e)) from e

    # Mutations

    async def ensure_player(self, player_id: int, session: Optional[AsyncSession] = None) -> None:
        """Create the player row if it does not exist yet (idempotent)."""
        async with self._write_context("ensure_player", session) as s:
            if await s.get(Player, player_id) is None:
                s.add(Player(id=player_id))
                await s.flush()
                self.logger.info(f"Registered new player {player_id}")

    async def ensure_period(self, period_id: int, session: Optional[AsyncSession] = None) -> None:
        """Create an empty Daily row for the day if it does not exist yet (idempotent)."""
        async with self._write_context("ensure_period", session) as s:
            if await s.get(Daily, period_id) is None:
                s.add(Daily(id=period_id))
                await s.flush()
                self.logger.debug(f"Created daily row for day {period_id}")

    async def record_score(
        self,
        period_id: int,
        player_id: int,
        guess_count: int,
        cup_key: str,
        source_message_id: int,
        session: Optional[AsyncSession] = None
    ) -> bool:
        """
        Insert a score sheet.

        Returns False, without touching anything, when the player already has
        a score for that day: the first submission is the one that counts.

        Raises:
            PrecursorMissingError: ensure_period/ensure_player were not called first
            StorageError: the insert failed
        """
        async with self._write_context("record_score", session) as s:
            if await s.get(Daily, period_id) is None or await s.get(Player, player_id) is None:
                raise PrecursorMissingError(period_id, player_id)

            existing = await s.execute(
                select(ScoreSheet.id).where(
                    ScoreSheet.day == period_id,
                    ScoreSheet.player_id == player_id
                )
            )
            if existing.scalar_one_or_none() is not None:
                self.logger.info(f"Ignoring repeat submission for day {period_id} by player {player_id}")
                return False

            s.add(ScoreSheet(
                msg_id=source_message_id,
                day=period_id,
                player_id=player_id,
                score=guess_count,
                cup_key=cup_key
            ))
            await s.flush()
            return True

    async def update_daily_high_scores(
        self,
        period_id: int,
        triple: HighScoreTriple,
        session: Optional[AsyncSession] = None
    ) -> None:
        async with self._write_context("update_daily_high_scores", session) as s:
            daily = await s.get(Daily, period_id)
            if daily is None:
                raise PrecursorMissingError(period_id, 0)
            daily.gold, daily.silver, daily.bronze = triple.as_tuple()
            await s.flush()

    # Queries

    async def get_daily_high_scores(
        self, period_id: int, session: Optional[AsyncSession] = None
    ) -> Optional[HighScoreTriple]:
        """High scores of a day, None if the day has never been seen."""
        async with self._get_session_context(session) as s:
            daily = await s.get(Daily, period_id)
            if daily is None:
                return None
            return HighScoreTriple(daily.gold, daily.silver, daily.bronze)

    async def get_latest_period(self, session: Optional[AsyncSession] = None) -> Optional[int]:
        async with self._get_session_context(session) as s:
            result = await s.execute(select(func.max(Daily.id)))
            return result.scalar()

    async def get_scores_for_period(
        self,
        period_id: int,
        score: Optional[int] = None,
        session: Optional[AsyncSession] = None
    ) -> List[ScoreSheet]:
        """Score sheets of a day, optionally only those with a given guess count."""
        async with self._get_session_context(session) as s:
            query = select(ScoreSheet).where(ScoreSheet.day == period_id)
            if score is not None:
                query = query.where(ScoreSheet.score == score)
            query = query.order_by(ScoreSheet.msg_id)
            result = await s.execute(query)
            return list(result.scalars().all())

    async def get_player_scores(
        self, player_id: int, session: Optional[AsyncSession] = None
    ) -> List[int]:
        async with self._get_session_context(session) as s:
            result = await s.execute(
                select(ScoreSheet.score).where(ScoreSheet.player_id == player_id)
            )
            return list(result.scalars().all())

    async def get_player_scores_from_period(
        self,
        player_id: int,
        from_period: int,
        session: Optional[AsyncSession] = None
    ) -> List[int]:
        """Guess counts of a player for every day >= from_period."""
        async with self._get_session_context(session) as s:
            result = await s.execute(
                select(ScoreSheet.score).where(
                    ScoreSheet.player_id == player_id,
                    ScoreSheet.day >= from_period
                )
            )
            return list(result.scalars().all())

    async def get_player_scores_in_cup(
        self,
        player_id: int,
        cup_key: str,
        session: Optional[AsyncSession] = None
    ) -> List[int]:
        async with self._get_session_context(session) as s:
            result = await s.execute(
                select(ScoreSheet.score).where(
                    ScoreSheet.player_id == player_id,
                    ScoreSheet.cup_key == cup_key
                )
            )
            return list(result.scalars().all())

    async def get_weighted_totals(
        self,
        weights: Dict[int, int],
        cup_key: Optional[str] = None,
        from_period: Optional[int] = None,
        session: Optional[AsyncSession] = None
    ) -> List[Tuple[int, int, int]]:
        """
        (player_id, weighted total, games played) for every player with a
        positive total, best first and ties by player id.

        One grouped SELECT, so the whole ranking comes from a single snapshot.
        Guess counts missing from ``weights`` are worth nothing.
        """
        points = case(weights, value=ScoreSheet.score, else_=0) if weights else literal(0)
        total = func.sum(points).label('total')
        games = func.count(ScoreSheet.id).label('games')

        query = select(ScoreSheet.player_id, total, games)
        if cup_key is not None:
            query = query.where(ScoreSheet.cup_key == cup_key)
        if from_period is not None:
            query = query.where(ScoreSheet.day >= from_period)
        query = (
            query.group_by(ScoreSheet.player_id)
            .having(total > 0)
            .order_by(total.desc(), ScoreSheet.player_id)
        )

        async with self._get_session_context(session) as s:
            result = await s.execute(query)
            return [(row.player_id, int(row.total), int(row.games)) for row in result.all()]

    async def get_players(self, session: Optional[AsyncSession] = None) -> Set[int]:
        async with self._get_session_context(session) as s:
            result = await s.execute(select(Player.id))
            return set(result.scalars().all())

    async def count_games(self, player_id: int, session: Optional[AsyncSession] = None) -> int:
        async with self._get_session_context(session) as s:
            result = await s.execute(
                select(func.count(ScoreSheet.id)).where(ScoreSheet.player_id == player_id)
            )
            return result.scalar() or 0

    async def get_medal_counts(
        self,
        player_id: Optional[int] = None,
        session: Optional[AsyncSession] = None
    ) -> Dict[int, Dict[Placement, int]]:
        """
        Lifetime medal tally: for each player, the number of days on which
        their score equalled that day's gold / silver / bronze value.
        """
        tallies = [
            func.sum(case((ScoreSheet.score == column, 1), else_=0)).label(placement.value)
            for placement, column in _PLACEMENT_COLUMNS.items()
        ]
        query = (
            select(ScoreSheet.player_id, *tallies)
            .join(Daily, ScoreSheet.day == Daily.id)
            .group_by(ScoreSheet.player_id)
        )
        if player_id is not None:
            query = query.where(ScoreSheet.player_id == player_id)

        async with self._get_session_context(session) as s:
            result = await s.execute(query)
            counts = {}
            for row in result.all():
                counts[row.player_id] = {
                    placement: int(getattr(row, placement.value) or 0)
                    for placement in Placement
                }
            return counts

    # Cup bookkeeping

    async def get_cup_result(self, cup_key: str, session: Optional[AsyncSession] = None) -> Optional[CupResult]:
        async with self._get_session_context(session) as s:
            result = await s.execute(select(CupResult).where(CupResult.cup_key == cup_key))
            return result.scalar_one_or_none()

    async def get_cup_results(self, session: Optional[AsyncSession] = None) -> List[CupResult]:
        async with self._get_session_context(session) as s:
            result = await s.execute(select(CupResult).order_by(CupResult.id))
            return list(result.scalars().all())

    async def add_cup_result(
        self,
        cup_key: str,
        winner_id: Optional[int],
        winner_score: Optional[int],
        session: Optional[AsyncSession] = None
    ) -> bool:
        """Store a finished cup. Returns False if it was already stored."""
        async with self._write_context("add_cup_result", session) as s:
            if await self.get_cup_result(cup_key, session=s) is not None:
                return False
            if winner_id is not None and await s.get(Player, winner_id) is None:
                raise PrecursorMissingError(0, winner_id)
            s.add(CupResult(cup_key=cup_key, winner_id=winner_id, winner_score=winner_score))
            await s.flush()
            return True

    async def get_unannounced_cup_results(self, session: Optional[AsyncSession] = None) -> List[CupResult]:
        """Finished cups whose announcement has not reached the channel yet, oldest first."""
        async with self._get_session_context(session) as s:
            result = await s.execute(
                select(CupResult).where(CupResult.announced.is_(False)).order_by(CupResult.id)
            )
            return list(result.scalars().all())

    async def mark_cup_announced(self, cup_key: str, session: Optional[AsyncSession] = None) -> bool:
        """Flag a finished cup as announced. Returns False if the cup is unknown."""
        async with self._write_context("mark_cup_announced", session) as s:
            cup_result = await self.get_cup_result(cup_key, session=s)
            if cup_result is None:
                return False
            cup_result.announced = True
            cup_result.announced_at = utc_now()
            await s.flush()
            return True

    async def get_state(self, key: str, session: Optional[AsyncSession] = None) -> Optional[str]:
        async with self._get_session_context(session) as s:
            state = await s.get(BotState, key)
            return state.value if state else None

    async def set_state(self, key: str, value: str, session: Optional[AsyncSession] = None) -> None:
        async with self._write_context("set_state", session) as s:
            state = await s.get(BotState, key)
            if state is None:
                s.add(BotState(key=key, value=value))
            else:
                state.value = value
            await s.flush()
