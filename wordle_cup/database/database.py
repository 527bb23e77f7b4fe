import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from wordle_cup.config import Config
from wordle_cup.database.models import Base
from wordle_cup.utils.exceptions import StorageError
from wordle_cup.utils.logger import setup_logger

class Database:
    def __init__(self, database_url: Optional[str] = None):
        self.logger = setup_logger(__name__)
        self.database_url = database_url or Config.DATABASE_URL
        self.engine = None
        self.async_session = None
        # Score recording must happen one message at a time
        self._write_lock = asyncio.Lock()

    @property
    def session_factory(self):
        return self.async_session

    async def initialize(self):
        """Initialize the database connection and create tables"""
        self.logger.info("Initializing database...")

        # Convert sqlite URL to async if needed
        database_url = self.database_url
        if database_url.startswith('sqlite:///'):
            database_url = database_url.replace('sqlite:///', 'sqlite+aiosqlite:///')

        self.engine = create_async_engine(
            database_url,
            echo=Config.DEBUG,
            future=True
        )

        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False
        )

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        self.logger.info("Database initialized successfully")

    @asynccontextmanager
    async def get_session(self):
        """Get a database session for reads"""
        async with self.async_session() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    @asynccontextmanager
    async def write_transaction(self):
        """
        Create an exclusive transaction boundary for mutations.

        Writers are serialized through a single lock so the sequence
        "record score -> recompute podium -> persist podium" is never
        interleaved with another message. Everything done with the yielded
        session commits together on success or rolls back together on failure.
        Database failures, including a failed commit, are raised as
        StorageError with the SQLAlchemy error chained.

        Usage:
            async with db.write_transaction() as session:
                await store.ensure_player(player_id, session=session)
                await store.ensure_period(day, session=session)
                await store.record_score(..., session=session)
        """
        async with self._write_lock:
            async with self.async_session() as session:
                try:
                    yield session
                    await session.commit()
                except SQLAlchemyError as e:
                    await session.rollback()
                    self.logger.error(f"Write transaction failed, rolled back: {e}")
                    raise StorageError("write_transaction", str(e)) from e
                except Exception:
                    await session.rollback()
                    raise
                finally:
                    await session.close()

    async def close(self):
        """Close the database connection"""
        if self.engine:
            await self.engine.dispose()
            self.logger.info("Database connection closed")
