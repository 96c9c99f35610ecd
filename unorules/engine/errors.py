"""Exceptions raised by the rules engine.

Illegal player moves are not errors: ``execute_move`` rejects them by
returning the input state. These exceptions cover caller misuse only.
"""

from typing import Optional


class UnoError(Exception):
    """Base class for all unorules errors."""


class InvalidPlayerCount(UnoError, ValueError):
    """A game was requested with too few (or too many) players."""

    def __init__(self, count: int, minimum: int = 2, maximum: Optional[int] = None):
        if maximum is None:
            expected = f"at least {minimum}"
        else:
            expected = f"{minimum} to {maximum}"
        super().__init__(f"UNO requires {expected} players, got {count}")
        self.count = count
