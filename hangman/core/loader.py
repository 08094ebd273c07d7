from __future__ import annotations

import logging
import random
import time
from typing import Callable, Iterable, Mapping, Optional, Sequence

from hangman.errors import DictionaryUnavailableError, InvalidWordError
from .dictionary import Dictionary
from .word import Category, Word

# A source returns raw `category -> words` data; any exception counts as a failed attempt.
Source = Callable[[], Mapping[str, Iterable[str]]]
# A backoff policy maps (attempt index starting at 1, base in ms) to a wait in ms.
BackoffPolicy = Callable[[int, int], float]

CONFIG_CATEGORY = "config"

_log = logging.getLogger(__name__)


def linear_backoff(attempt: int, base_ms: int) -> float:
    """Wait `base_ms * attempt` milliseconds: 200, 400, 600, ..."""
    return float(base_ms * attempt)


def exponential_backoff(attempt: int, base_ms: int) -> float:
    """Wait `base_ms * 2**(attempt - 1)` milliseconds: 200, 400, 800, ..."""
    return float(base_ms * (2 ** (attempt - 1)))


def no_backoff(attempt: int, base_ms: int) -> float:
    return 0.0


def chain_sources(*sources: Source, logger: Optional[logging.Logger] = None) -> Source:
    """
    Combine sources into one that tries each in order and returns the first success.

    If all of them fail, the last error is re-raised so the loader can count
    the whole chain as one failed attempt.
    """
    if not sources:
        raise ValueError("chain_sources() needs at least one source.")
    log = logger or _log

    def _chained() -> Mapping[str, Iterable[str]]:
        last_error: Optional[Exception] = None
        for source in sources:
            try:
                return source()
            except Exception as exc:
                log.warning("Word source %s failed: %s", getattr(source, "__name__", source), exc)
                last_error = exc
        assert last_error is not None
        raise last_error

    return _chained


class DictionaryLoader:
    """
    Resolve a Dictionary from an external source with bounded retry-with-backoff.

    Parameters
    ----------
    source : Source
        Zero-argument callable returning raw `category -> words` data.
    backoff : BackoffPolicy
        Pure function giving the wait before the next attempt (default: linear).
    sleep : Callable[[float], None]
        Blocking wait in seconds; tests pass a recorder instead of `time.sleep`.
    logger : logging.Logger, optional
        Where attempts are reported; defaults to this module's logger.
    rng : random.Random, optional
        Handed to the built Dictionary for word selection.
    """

    def __init__(
        self,
        source: Source,
        backoff: BackoffPolicy = linear_backoff,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[logging.Logger] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._source = source
        self._backoff = backoff
        self._sleep = sleep
        self._log = logger or _log
        self._rng = rng

    def load(self) -> Dictionary:
        """Single attempt: call the source and validate its data."""
        return Dictionary.from_mapping(self._source(), rng=self._rng)

    def load_with_retry(self, max_attempts: int = 3, backoff_base_ms: int = 200) -> Dictionary:
        """
        Attempt `load()` up to `max_attempts` times, strictly one after another.

        Raises
        ------
        ValueError
            If `max_attempts < 1` or `backoff_base_ms < 0`.
        DictionaryUnavailableError
            After the last failed attempt; chained to the last underlying error.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1.")
        if backoff_base_ms < 0:
            raise ValueError("backoff_base_ms must be >= 0.")

        last_error: Optional[Exception] = None
        for attempt in range(1, max_attempts + 1):
            try:
                dictionary = self.load()
            except Exception as exc:
                last_error = exc
                if attempt == max_attempts:
                    break
                wait_ms = self._backoff(attempt, backoff_base_ms)
                self._log.warning(
                    "Dictionary load failed (attempt %d/%d): %s. Retrying in %.0f ms...",
                    attempt, max_attempts, exc, wait_ms,
                )
                self._sleep(wait_ms / 1000.0)
                continue

            self._log.info(
                "Dictionary loaded on attempt %d/%d with %d categories",
                attempt, max_attempts, len(dictionary),
            )
            return dictionary

        self._log.error("Dictionary unavailable after %d attempt(s): %s", max_attempts, last_error)
        raise DictionaryUnavailableError(max_attempts, last_error) from last_error


def create_from_config(words: Sequence[str], rng: Optional[random.Random] = None) -> Dictionary:
    """
    Build a single-category dictionary from an explicitly configured word pair.

    No retrying is involved: the words are already at hand. Raises
    `InvalidWordError` unless exactly two valid words are given.
    """
    if words is None or len(words) != 2:
        raise InvalidWordError("Exactly two words are required, got "
                               f"{0 if words is None else len(words)}.")
    category = Category(name=CONFIG_CATEGORY, words=frozenset(Word(w) for w in words))
    return Dictionary([category], rng=rng)
