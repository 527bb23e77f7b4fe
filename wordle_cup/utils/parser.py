"""
Parser for shared Wordle results.

A result message reads "Wordle <day> <score>/6" followed by the emoji grid,
e.g. "Wordle 547 3/6". Only the prefix, day number and score token matter.
"""

import re
from dataclasses import dataclass

from wordle_cup.utils.exceptions import IllegalGuessCountError, MalformedMessageError

RESULT_PREFIX = "Wordle "

# Prefix, ASCII day number, exactly one space, then a single score character
RESULT_PATTERN = re.compile(r"Wordle (?P<day>[0-9]+) (?P<token>\S)")

SCORE_TOKENS = {
    'X': 0,  # failed, there is no zero-guess solve
    '0': 0,
    '1': 1,
    '2': 2,
    '3': 3,
    '4': 4,
    '5': 5,
    '6': 6,
}


@dataclass(frozen=True)
class ParsedResult:
    period_id: int
    guess_count: int


def looks_like_result(text: str) -> bool:
    """Cheap check used to decide whether a message should be parsed at all."""
    return text.startswith(RESULT_PREFIX.strip())


def parse_result_message(text: str) -> ParsedResult:
    """
    Parse a Wordle message into (day, guess count).

    Raises:
        MalformedMessageError: prefix, day number or score token missing
        IllegalGuessCountError: score token is not X or 0-6
    """
    match = RESULT_PATTERN.match(text)
    if not match:
        raise MalformedMessageError(text)

    token = match.group('token')
    if token not in SCORE_TOKENS:
        raise IllegalGuessCountError(token)

    return ParsedResult(period_id=int(match.group('day')), guess_count=SCORE_TOKENS[token])
