"""
Leaderboard and medal data models.

Immutable data transfer objects handed from the services to the cogs.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from wordle_cup.constants import Placement


@dataclass(frozen=True)
class LeaderboardEntry:
    """Single leaderboard row."""
    rank: int
    player_id: int
    weighted_score: int
    games_played: int


@dataclass(frozen=True)
class MedalHolder:
    """A score sheet holding a medal: who, which message, how many guesses."""
    player_id: int
    message_id: int
    score: int


@dataclass(frozen=True)
class DailyStandings:
    """Medal holders of one day per placement; None = placement not decided."""
    period_id: Optional[int]
    holders: Dict[Placement, Optional[List[MedalHolder]]]

    def for_placement(self, placement: Placement) -> Optional[List[MedalHolder]]:
        return self.holders.get(placement)

    def markers(self) -> List[Tuple[int, Placement]]:
        """(message id, placement) pairs that should carry a reaction."""
        pairs = []
        for placement in Placement:
            for holder in self.holders.get(placement) or []:
                pairs.append((holder.message_id, placement))
        return pairs


@dataclass(frozen=True)
class CupRolloverEvent:
    """Emitted once when a cup has ended."""
    cup_key: str
    new_cup_key: str
    winner_id: Optional[int]
    winner_score: Optional[int]

    @property
    def has_winner(self) -> bool:
        return self.winner_id is not None
