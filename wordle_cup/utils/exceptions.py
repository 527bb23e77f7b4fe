"""
Custom exceptions for the cup scoring engine with user-friendly error messages.
"""

class WordleCupException(Exception):
    """Base exception for cup-related errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class MessageParseError(WordleCupException):
    """Raised when a result message cannot be turned into (day, score)."""

class MalformedMessageError(MessageParseError):
    """Raised when the prefix, day number or score token is missing."""
    def __init__(self, text: str):
        super().__init__(
            f"Malformed result message: {text!r}",
            "❌ That doesn't look like a Wordle result."
        )
        self.text = text

class IllegalGuessCountError(MessageParseError):
    """Raised when the score token is not X or 0-6."""
    def __init__(self, token: str):
        super().__init__(
            f"Illegal number of guesses: {token}",
            f"❌ {token} is not a valid number of guesses."
        )
        self.token = token

class StorageError(WordleCupException):
    """Raised when database operations fail."""
    def __init__(self, operation: str, details: str = None):
        super().__init__(
            f"Database error during {operation}: {details}",
            "❌ Database error occurred. Please try again later."
        )
        self.operation = operation

class PrecursorMissingError(WordleCupException):
    """Raised when a score is recorded before its day or player row exists."""
    def __init__(self, day: int, player_id: int):
        super().__init__(
            f"Score for day {day} / player {player_id} recorded before ensure_period/ensure_player"
        )
        self.day = day
        self.player_id = player_id
