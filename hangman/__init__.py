"""Hangman: round engine, resilient dictionary loading and console/Streamlit front ends."""

from .core.dictionary import Dictionary
from .core.engine import GameEngine
from .core.loader import DictionaryLoader, create_from_config
from .core.simulator import GameSimulator
from .core.state import GameDifficulty, GameStatus, GuessOutcome
from .core.word import Category, Word
from .errors import (
    DictionaryUnavailableError,
    HangmanError,
    InvalidGuessError,
    InvalidWordError,
    RoundAlreadyOverError,
    UnknownCategoryError,
)

__version__ = "0.1.0"

__all__ = [
    "Category",
    "Dictionary",
    "DictionaryLoader",
    "DictionaryUnavailableError",
    "GameDifficulty",
    "GameEngine",
    "GameSimulator",
    "GameStatus",
    "GuessOutcome",
    "HangmanError",
    "InvalidGuessError",
    "InvalidWordError",
    "RoundAlreadyOverError",
    "UnknownCategoryError",
    "Word",
    "create_from_config",
]
