from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class GameStatus(str, Enum):
    """Round status; IN_PROGRESS is initial, WON and LOST are terminal."""

    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.IN_PROGRESS


class GameDifficulty(Enum):
    """
    Difficulty levels, each carrying the number of wrong guesses that ends a round.

    Notes
    -----
    - The value is the `max_wrong` budget; members are looked up by name from
      the UI layers (`GameDifficulty.from_name("hard")`).
    """

    NOOB = 10
    EASY = 8
    MEDIUM = 6
    HARD = 4
    EXPERT = 3

    @property
    def max_wrong(self) -> int:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "GameDifficulty":
        key = (name or "").strip().upper()
        try:
            return cls[key]
        except KeyError:
            choices = ", ".join(m.name.lower() for m in cls)
            raise ValueError(f"Unknown difficulty {name!r}; expected one of: {choices}.") from None


@dataclass(frozen=True)
class GuessOutcome:
    """
    Immutable snapshot of a round after a guess.

    Fields
    ------
    letter             : the normalized letter that was submitted ("" for a plain snapshot)
    hit                : whether the letter occurs in the target
    repeated           : True when the letter had already been guessed (no state change)
    status             : round status after the guess
    pattern            : revealed pattern, e.g. "ca_"
    remaining_attempts : wrong guesses still allowed
    wrong_count        : wrong guesses used so far
    """

    letter: str
    hit: bool
    repeated: bool
    status: GameStatus
    pattern: str
    remaining_attempts: int
    wrong_count: int

    @property
    def is_over(self) -> bool:
        return self.status.is_terminal
