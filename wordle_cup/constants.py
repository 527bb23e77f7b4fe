"""
Bot-wide constants for the Wordle Cup Discord Bot.

Scoring tables, placement symbols and announcement texts used throughout
the codebase.
"""

from enum import Enum


# Points per guess count, failure (X) gives zero
DEFAULT_SCORE_WEIGHTS = {0: 0, 1: 13, 2: 8, 3: 5, 4: 3, 5: 2, 6: 1}

MAX_GUESSES = 6


class Placement(Enum):
    """Daily medal placements, in slot order."""
    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"

    @property
    def emoji(self) -> str:
        return PLACEMENT_EMOJIS[self]


PLACEMENT_EMOJIS = {
    Placement.GOLD: "🥇",
    Placement.SILVER: "🥈",
    Placement.BRONZE: "🥉",
}


class UIConstants:
    """Constants for Discord output."""

    # Embed colors
    DEFAULT_EMBED_COLOR = 0x3498db  # Blue
    GOLD_RANK_COLOR = 0xffd700     # Gold for the cup leader

    # Shown when nobody holds a title yet
    FALLBACK_LEADER_NAME = "Tomten"

    # Width of the guess distribution bars in /stats
    DISTRIBUTION_BAR_WIDTH = 50

    TROPHY_EMOJI = "🏆"


NO_WINNER_MESSAGE = "Ingen vinnare i denna cup."

CONGRATULATIONS = [
    "@here Grattis {nick} till segern i wordlecupen, du är verkligen bäst!",
    "@here Stort grattis till {nick} som vann wordlecupen, du är en riktig mästare!",
    "@here Wow! Grattis {nick} till att ha erövrat wordlecupen, du är grym!",
    "@here Fantastiskt jobbat, {nick}! Du är en vinnare och tar hem wordlecupen med bravur!",
    "@here Grattis, {nick}! Du har lyckats bli mästaren i wordlecupen, en värdig vinnare!",
    "@here Stort grattis till {nick} för att ha vunnit wordlecupen, du är en riktig mästare!",
    "@here Fantastiskt jobbat, {nick}! Du har tagit hem segern i wordlecupen, du är grymt bra!",
    "@here Grattis, {nick}! Ditt framstående spel har belönats med vinsten i wordlecupen, du är verkligen bäst!",
    "@here Wow! {nick}, du är en riktig vinnare som har erövrat wordlecupen. Stort grattis!",
    "@here Enorma gratulationer till {nick} för att ha segrat i wordlecupen. Du är en otroligt skicklig spelare!",
]
