"""
Services package for the Wordle Cup bot.
"""

from .base import BaseService
from .leaderboard import LeaderboardAggregator, ScoreWindow
from .medals import MedalResolver
from .rollover import CupRolloverMonitor
from .scoring import ScoringService
from .stats import StatsService

__all__ = [
    'BaseService',
    'CupRolloverMonitor',
    'LeaderboardAggregator',
    'MedalResolver',
    'ScoreWindow',
    'ScoringService',
    'StatsService',
]
