"""
Daily high-score tracking.

A day keeps the three lowest distinct non-zero guess counts seen so far as
(gold, silver, bronze). Everything here is pure so the tables can be unit
tested without a database.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from wordle_cup.constants import Placement

PODIUM_SIZE = 3


@dataclass(frozen=True)
class HighScoreTriple:
    """Strictly increasing (gold, silver, bronze) guess counts; None = slot unset."""
    gold: Optional[int] = None
    silver: Optional[int] = None
    bronze: Optional[int] = None

    @classmethod
    def from_values(cls, values) -> "HighScoreTriple":
        values = list(values)[:PODIUM_SIZE]
        padded = values + [None] * (PODIUM_SIZE - len(values))
        return cls(*padded)

    def as_tuple(self) -> Tuple[Optional[int], Optional[int], Optional[int]]:
        return (self.gold, self.silver, self.bronze)

    def value_for(self, placement: Placement) -> Optional[int]:
        return {
            Placement.GOLD: self.gold,
            Placement.SILVER: self.silver,
            Placement.BRONZE: self.bronze,
        }[placement]


def upsert_high_score(triple: HighScoreTriple, new_score: int) -> HighScoreTriple:
    """
    Insert a new score into a day's podium.

    Failed attempts (0) never medal, a score already on the podium shares its
    slot, and anything worse than a full podium's bronze is dropped.
    """
    if new_score == 0:
        return triple

    current = [value for value in triple.as_tuple() if value is not None]
    if new_score in current:
        return triple

    updated = sorted(current + [new_score])[:PODIUM_SIZE]
    return HighScoreTriple.from_values(updated)
