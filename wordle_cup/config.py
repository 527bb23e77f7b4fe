import logging
import os
from dataclasses import dataclass, field
from typing import Dict

from dotenv import load_dotenv

from wordle_cup.constants import DEFAULT_SCORE_WEIGHTS

load_dotenv()


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring parameters shared by the leaderboard and the cup monitor"""
    weights: Dict[int, int] = field(default_factory=lambda: dict(DEFAULT_SCORE_WEIGHTS))
    timezone: str = 'UTC'

    def weight_for(self, guess_count: int) -> int:
        return self.weights.get(guess_count, 0)


class Config:
    """Bot configuration settings"""

    # Discord settings
    DISCORD_TOKEN = os.getenv('DISCORD_TOKEN')
    DISCORD_GUILD_ID = int(os.getenv('DISCORD_GUILD_ID', 0))
    WORDLE_CHANNEL_ID = int(os.getenv('WORDLE_CHANNEL_ID', 0))

    # Database settings
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///wordle_cup.db')

    # Bot settings
    COMMAND_PREFIX = os.getenv('COMMAND_PREFIX', '!')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Logging settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')  # Empty disables the day file

    # Cup settings
    CUP_TIMEZONE = os.getenv('CUP_TIMEZONE', 'UTC')
    CUP_CHECK_INTERVAL_HOURS = float(os.getenv('CUP_CHECK_INTERVAL_HOURS', 2))
    SCORE_WEIGHTS = os.getenv('SCORE_WEIGHTS', '')  # Seven comma-separated points for 0..6 guesses

    @classmethod
    def get_score_weights(cls) -> Dict[int, int]:
        """Get the guess count -> points table"""
        if not cls.SCORE_WEIGHTS:
            return dict(DEFAULT_SCORE_WEIGHTS)
        try:
            points = [int(p.strip()) for p in cls.SCORE_WEIGHTS.split(',')]
        except ValueError:
            raise ValueError("SCORE_WEIGHTS must be comma-separated integers")
        if len(points) != 7:
            raise ValueError("SCORE_WEIGHTS must list points for 0 through 6 guesses")
        return dict(enumerate(points))

    @classmethod
    def scoring(cls) -> ScoringConfig:
        return ScoringConfig(weights=cls.get_score_weights(), timezone=cls.CUP_TIMEZONE)

    @classmethod
    def validate(cls):
        """Validate that required configuration is present"""
        if not cls.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")
        if not cls.DISCORD_GUILD_ID:
            raise ValueError("DISCORD_GUILD_ID is required")
        if not cls.WORDLE_CHANNEL_ID:
            raise ValueError("WORDLE_CHANNEL_ID is required")
        if not 0 < cls.CUP_CHECK_INTERVAL_HOURS <= 24:
            raise ValueError("CUP_CHECK_INTERVAL_HOURS must be between 0 and 24")
        if not isinstance(logging.getLevelName(cls.LOG_LEVEL.upper()), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {cls.LOG_LEVEL}")
        cls.get_score_weights()
