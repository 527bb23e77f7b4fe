from sqlalchemy import (
    Column, Integer, String, DateTime, Text,
    ForeignKey, BigInteger, Boolean, UniqueConstraint, CheckConstraint, Index
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

class Player(Base):
    __tablename__ = 'players'

    # Discord user id, display names are resolved at render time
    id = Column(BigInteger, primary_key=True, autoincrement=False)

    registered_at = Column(DateTime, default=func.now())

    score_sheets = relationship("ScoreSheet", back_populates="player")

    def __repr__(self):
        return f"<Player(id={self.id})>"

class Daily(Base):
    """High scores of one Wordle day, gold < silver < bronze when set."""
    __tablename__ = 'daily'

    id = Column(Integer, primary_key=True, autoincrement=False)  # Wordle day number
    gold = Column(Integer, nullable=True)
    silver = Column(Integer, nullable=True)
    bronze = Column(Integer, nullable=True)

    score_sheets = relationship("ScoreSheet", back_populates="daily")

    __table_args__ = (
        CheckConstraint('gold IS NULL OR silver IS NULL OR gold < silver', name='ck_daily_gold_silver'),
        CheckConstraint('silver IS NULL OR bronze IS NULL OR silver < bronze', name='ck_daily_silver_bronze'),
    )

    def __repr__(self):
        return f"<Daily(id={self.id}, gold={self.gold}, silver={self.silver}, bronze={self.bronze})>"

class ScoreSheet(Base):
    """One posted result. First submission per (day, player) wins."""
    __tablename__ = 'score_sheets'

    id = Column(Integer, primary_key=True)
    msg_id = Column(BigInteger, nullable=False)
    day = Column(Integer, ForeignKey('daily.id'), nullable=False)
    player_id = Column(BigInteger, ForeignKey('players.id'), nullable=False, index=True)
    score = Column(Integer, nullable=False)  # 0 = failed
    cup_key = Column(String(16), nullable=False, index=True)

    created_at = Column(DateTime, default=func.now())

    player = relationship("Player", back_populates="score_sheets")
    daily = relationship("Daily", back_populates="score_sheets")

    __table_args__ = (
        UniqueConstraint('day', 'player_id', name='uq_score_sheet_day_player'),
        CheckConstraint('score >= 0 AND score <= 6', name='ck_score_sheet_score'),
        Index('ix_score_sheets_day_score', 'day', 'score'),
    )

    def __repr__(self):
        return f"<ScoreSheet(day={self.day}, player_id={self.player_id}, score={self.score}, cup='{self.cup_key}')>"

class CupResult(Base):
    """Outcome of a finished cup and whether it has been announced."""
    __tablename__ = 'cup_results'

    id = Column(Integer, primary_key=True)
    cup_key = Column(String(16), nullable=False, unique=True)
    winner_id = Column(BigInteger, ForeignKey('players.id'), nullable=True)  # None = nobody scored
    winner_score = Column(Integer, nullable=True)
    finished_at = Column(DateTime, default=func.now())
    # Set once the announcement reached the channel; unannounced rows are retried
    announced = Column(Boolean, nullable=False, default=False)
    announced_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<CupResult(cup='{self.cup_key}', winner_id={self.winner_id}, score={self.winner_score}, announced={self.announced})>"

class BotState(Base):
    """Small key/value store for state that has to survive restarts."""
    __tablename__ = 'bot_state'

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<BotState(key='{self.key}', value='{self.value}')>"
