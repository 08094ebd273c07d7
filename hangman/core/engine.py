from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, Optional, Set, Union

from hangman.errors import InvalidGuessError, RoundAlreadyOverError
from .state import GameDifficulty, GameStatus, GuessOutcome
from .word import Word

PLACEHOLDER = "_"

_log = logging.getLogger(__name__)


def mask_word(secret: str, guessed: Iterable[str], sep: str = " ") -> str:
    """
    Return a masked representation of the secret word, e.g., '_ p p l e'.

    Notes
    -----
    - Reveals letters that have been guessed; hides the others as underscores.
    - `sep` goes between characters; the UI uses a space for readability,
      `GameEngine.revealed_pattern` uses no separator.
    """
    seen = set(guessed)
    return sep.join(c if c in seen else PLACEHOLDER for c in secret)


def normalize_guess(ch: str) -> str:
    """Lowercase a single-letter guess or raise `InvalidGuessError`."""
    if not isinstance(ch, str) or len(ch.strip()) != 1 or not ch.strip().isalpha():
        raise InvalidGuessError(f"Guess must be a single letter, got {ch!r}.")
    return ch.strip().lower()


class GameEngine:
    """
    State machine for one round against one target word.

    The engine is created per round, mutated only through `submit_guess` and
    discarded afterwards. It is not thread-safe; the round's driver owns it.
    """

    def __init__(
        self,
        target: Union[Word, str],
        difficulty: GameDifficulty = GameDifficulty.MEDIUM,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        # Word() raises InvalidWordError on an empty or malformed target.
        self._target = target if isinstance(target, Word) else Word(target)
        self._difficulty = difficulty
        self._guessed: Set[str] = set()
        self._wrong_count = 0
        self._status = GameStatus.IN_PROGRESS
        self._log = logger or _log
        self._log.debug(
            "Round created: length=%d, difficulty=%s", self._target.length, difficulty.name
        )

    # ---- read-only view ----

    @property
    def target(self) -> Word:
        return self._target

    @property
    def difficulty(self) -> GameDifficulty:
        return self._difficulty

    @property
    def guessed(self) -> FrozenSet[str]:
        return frozenset(self._guessed)

    @property
    def wrong_count(self) -> int:
        return self._wrong_count

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status.is_terminal

    def revealed_pattern(self) -> str:
        """Target with un-guessed letters replaced by the placeholder, e.g. 'ca_'."""
        return mask_word(self._target.text, self._guessed, sep="")

    def remaining_attempts(self) -> int:
        return max(0, self._difficulty.max_wrong - self._wrong_count)

    def snapshot(self, letter: str = "", repeated: bool = False) -> GuessOutcome:
        return GuessOutcome(
            letter=letter,
            hit=bool(letter) and letter in self._target.letters,
            repeated=repeated,
            status=self._status,
            pattern=self.revealed_pattern(),
            remaining_attempts=self.remaining_attempts(),
            wrong_count=self._wrong_count,
        )

    # ---- transitions ----

    def submit_guess(self, letter: str) -> GuessOutcome:
        """
        Apply a single-letter guess and return the resulting outcome.

        Behavior
        --------
        - Raises `InvalidGuessError` for anything but one alphabetic character.
        - Raises `RoundAlreadyOverError` once the round is WON or LOST.
        - Repeated guesses are no-ops (idempotent) and report `repeated=True`.
        - Increments the wrong count by 1 if the letter is not in the target.
        - Re-evaluates WON/LOST after every newly accepted letter.
        """
        ch = normalize_guess(letter)
        if self.is_over:
            raise RoundAlreadyOverError(
                f"Round is already {self._status.name}; no more guesses are accepted."
            )

        if ch in self._guessed:
            self._log.debug("Repeated guess %r ignored", ch)
            return self.snapshot(ch, repeated=True)

        self._guessed.add(ch)
        if ch not in self._target.letters:
            self._wrong_count += 1
        self._status = self._check_outcome()

        if self.is_over:
            self._log.info(
                "Round finished: %s after %d guess(es), %d wrong",
                self._status.name, len(self._guessed), self._wrong_count,
            )
        return self.snapshot(ch)

    def _check_outcome(self) -> GameStatus:
        """
        Compute the status from the current fields.

        Rules
        -----
        - Won  : all distinct letters of the target have been guessed.
        - Lost : wrong count reached the difficulty's maximum.
        - Else : in progress.
        """
        if self._target.letters <= self._guessed:
            return GameStatus.WON
        if self._wrong_count >= self._difficulty.max_wrong:
            return GameStatus.LOST
        return GameStatus.IN_PROGRESS

    def __repr__(self) -> str:
        return (
            f"GameEngine(pattern={self.revealed_pattern()!r}, status={self._status.name}, "
            f"wrong={self._wrong_count}/{self._difficulty.max_wrong})"
        )
