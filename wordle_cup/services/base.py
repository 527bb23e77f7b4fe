"""
Base service class for the Wordle Cup bot.

Gives every service the shared database handle, the score store and the
read / write session scopes.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from wordle_cup.database.score_store import ScoreStore

logger = logging.getLogger(__name__)

class BaseService:
    """Base class for all services with async database session management."""

    def __init__(self, database, store: Optional[ScoreStore] = None):
        """
        Initialize base service.

        Args:
            database: Initialized Database instance
            store: Score store to share between services (created if omitted)
        """
        self.db = database
        self.store = store or ScoreStore(database)

    @asynccontextmanager
    async def read_session(self, session: Optional[AsyncSession] = None) -> AsyncGenerator[AsyncSession, None]:
        """One session for a group of reads, so they see a single snapshot."""
        if session:
            yield session
        else:
            async with self.db.get_session() as new_session:
                yield new_session

    @asynccontextmanager
    async def write_transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Exclusive transactional scope for mutations."""
        async with self.db.write_transaction() as session:
            yield session
