from __future__ import annotations

from typing import Iterable

from .engine import GameEngine


class GameSimulator:
    """Feed a scripted guess sequence to an engine and report the result."""

    def __init__(self, engine: GameEngine, guesses: Iterable[str]) -> None:
        self._engine = engine
        # A guess word such as "XCYAZT" is consumed one character at a time.
        self._guesses = tuple(guesses)

    @property
    def engine(self) -> GameEngine:
        return self._engine

    def run_simulation(self) -> str:
        """
        Submit guesses in order until the round ends or the guesses run out.

        Returns a single-line report `<STATUS>;<pattern>;<wrong>/<max>`,
        e.g. `LOST;ca_;3/3`. Characters after the terminal guess are never
        applied.
        """
        for ch in self._guesses:
            if self._engine.is_over:
                break
            self._engine.submit_guess(ch)
        return self.report()

    def report(self) -> str:
        engine = self._engine
        return (
            f"{engine.status.name};{engine.revealed_pattern()};"
            f"{engine.wrong_count}/{engine.difficulty.max_wrong}"
        )
