from __future__ import annotations

from typing import Optional


class HangmanError(Exception):
    """Base class for every error raised by the game core."""


class InvalidWordError(HangmanError, ValueError):
    """A word (target, candidate or configured pair) is empty or not letters-only."""


class InvalidGuessError(InvalidWordError):
    """A guess is not exactly one alphabetic character."""


class RoundAlreadyOverError(HangmanError, RuntimeError):
    """A guess was submitted to an engine that already reached WON or LOST."""


class UnknownCategoryError(HangmanError, KeyError):
    """The requested category is not part of the dictionary."""

    def __init__(self, category: str) -> None:
        super().__init__(category)
        self.category = category

    def __str__(self) -> str:
        return f"Unknown category: {self.category!r}"


class DictionaryUnavailableError(HangmanError, RuntimeError):
    """
    Every load attempt failed.

    The last underlying failure is kept as `last_error` (and as `__cause__`
    when raised with `raise ... from`).
    """

    def __init__(self, attempts: int, last_error: Optional[BaseException] = None) -> None:
        message = f"Dictionary could not be loaded after {attempts} attempt(s)"
        if last_error is not None:
            message += f": {last_error}"
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class ConfigError(HangmanError, ValueError):
    """The configuration file or arguments cannot be turned into an AppConfig."""


__all__ = [
    "HangmanError",
    "InvalidWordError",
    "InvalidGuessError",
    "RoundAlreadyOverError",
    "UnknownCategoryError",
    "DictionaryUnavailableError",
    "ConfigError",
]
