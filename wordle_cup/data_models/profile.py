"""
Player statistics data model.
"""

from dataclasses import dataclass
from typing import Dict

from wordle_cup.constants import Placement


@dataclass(frozen=True)
class PlayerStats:
    """Lifetime statistics of one player."""
    player_id: int
    games_played: int
    medals: Dict[Placement, int]
    distribution: Dict[int, int]  # guess count -> number of games

    def ratio(self, guess_count: int) -> float:
        if self.games_played == 0:
            return 0.0
        return self.distribution.get(guess_count, 0) / self.games_played
