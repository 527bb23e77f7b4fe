"""
Data models for incoming results and what recording them changed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Tuple

from wordle_cup.constants import Placement


@dataclass(frozen=True)
class ResultMessage:
    """The parts of a chat message the scoring engine reads."""
    text: str
    author_id: int
    message_id: int
    timestamp: datetime


@dataclass(frozen=True)
class MedalChanges:
    """Reaction changes the caller has to apply after a new result."""
    period_id: int
    to_remove: List[Tuple[int, Placement]] = field(default_factory=list)
    to_add: List[Tuple[int, Placement]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_remove and not self.to_add


@dataclass(frozen=True)
class RecordOutcome:
    """Result of handling one posted Wordle result."""
    period_id: int
    player_id: int
    guess_count: int
    cup_key: str
    inserted: bool
    medal_changes: MedalChanges


@dataclass
class ReplaySummary:
    """Counters for a history replay."""
    read: int = 0
    recorded: int = 0
    duplicates: int = 0
    rejected: int = 0
