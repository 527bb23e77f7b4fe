from datetime import datetime, timezone

import pytest
import pytest_asyncio

from wordle_cup.config import ScoringConfig
from wordle_cup.database.database import Database
from wordle_cup.database.score_store import ScoreStore


class FixedClock:
    """Stand-in for wall-clock time; move it by assigning .now"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def at(year: int, month: int, day: int = 15, hour: int = 12) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test_wordle_cup.db'}")
    await db.initialize()
    yield db
    await db.close()


@pytest.fixture
def store(database):
    return ScoreStore(database)


@pytest.fixture
def scoring_config():
    return ScoringConfig()


@pytest.fixture
def clock():
    return FixedClock(at(2024, 1))
