"""
Console entry point.

    hangman                      # interactive rounds in the terminal
    hangman cat xcyazt           # simulate: target word + guessed letters
    hangman -c config.yaml -d hard --category animals
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Callable, List, Optional, TextIO

from dotenv import load_dotenv

from hangman import __version__
from hangman.config import AppConfig, GameMode, load_config, resolve_mode
from hangman.core.dictionary import Dictionary
from hangman.core.engine import GameEngine, mask_word
from hangman.core.simulator import GameSimulator
from hangman.core.state import GameDifficulty, GameStatus
from hangman.core.word import Word
from hangman.errors import (
    ConfigError,
    DictionaryUnavailableError,
    HangmanError,
    InvalidGuessError,
    UnknownCategoryError,
)
from hangman.services.sources import load_dictionary

log = logging.getLogger("hangman")

EXIT_OK = 0
EXIT_UNAVAILABLE = 1
EXIT_USAGE = 2


class ConsoleUI:
    """Prompts and board rendering for the terminal session loop."""

    def __init__(
        self, input_fn: Optional[Callable[[str], str]] = None, out: Optional[TextIO] = None
    ) -> None:
        self._input = input_fn or input
        self._out = out or sys.stdout

    def say(self, text: str = "") -> None:
        print(text, file=self._out)

    def ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def welcome(self) -> None:
        self.say("Welcome to Hangman! Guess the word one letter at a time.")

    def choose_difficulty(self) -> GameDifficulty:
        names = ", ".join(f"{d.name.lower()} ({d.max_wrong})" for d in GameDifficulty)
        while True:
            answer = self.ask(f"Difficulty [{names}] (default medium): ")
            if not answer:
                return GameDifficulty.MEDIUM
            try:
                return GameDifficulty.from_name(answer)
            except ValueError as exc:
                self.say(str(exc))

    def choose_category(self, dictionary: Dictionary) -> str:
        """Ask by number or name; unknown names re-prompt."""
        names = dictionary.category_names()
        for i, name in enumerate(names, start=1):
            self.say(f"  {i}) {name}")
        while True:
            answer = self.ask("Category: ")
            if answer.isdigit() and 1 <= int(answer) <= len(names):
                return names[int(answer) - 1]
            try:
                return dictionary.category(answer.lower()).name
            except UnknownCategoryError as exc:
                self.say(f"{exc}. Pick one of the listed categories.")

    def render(self, engine: GameEngine) -> None:
        guessed = ", ".join(sorted(engine.guessed)) or "(none)"
        self.say(f"Word: {mask_word(engine.target.text, engine.guessed)}")
        self.say(f"Attempts left: {engine.remaining_attempts()}  |  Guessed: {guessed}")

    def play_round(self, engine: GameEngine) -> GameStatus:
        while not engine.is_over:
            self.render(engine)
            try:
                outcome = engine.submit_guess(self.ask("Your letter: "))
            except InvalidGuessError as exc:
                self.say(str(exc))
                continue
            if outcome.repeated:
                self.say(f"You already tried '{outcome.letter}'.")
            elif outcome.hit:
                self.say(f"Yes! '{outcome.letter}' is in the word.")
            else:
                self.say(f"No '{outcome.letter}' in the word.")

        if engine.status is GameStatus.WON:
            self.say(f"You won! The word was '{engine.target}'.")
        else:
            self.say(f"You lost. The word was '{engine.target}'.")
        return engine.status

    def continue_game(self) -> bool:
        return self.ask("Play again? [y/N]: ").lower() in ("y", "yes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hangman",
        description="Console Hangman. Pass a target word and a guess word to run a simulation.",
    )
    parser.add_argument("words", nargs="*", metavar="<word>",
                        help="word pair for simulation mode: target and guessed letters")
    parser.add_argument("-c", "--config", help="path to a YAML config file")
    parser.add_argument("-s", "--font-size", type=int, dest="font_size", help="font size hint")
    parser.add_argument("-d", "--difficulty", choices=[d.name.lower() for d in GameDifficulty])
    parser.add_argument("--category", help="word category (skips the prompt)")
    parser.add_argument("--seed", type=int, help="seed for word selection")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_config(args: argparse.Namespace) -> AppConfig:
    """Environment defaults, then the YAML file, then explicit command-line values."""
    config = load_config(args.config) if args.config else AppConfig.from_env()
    overrides = {
        "words": args.words or None,
        "font_size": args.font_size,
        "difficulty": GameDifficulty.from_name(args.difficulty) if args.difficulty else None,
        "category": args.category,
        "seed": args.seed,
    }
    return replace(config, **{k: v for k, v in overrides.items() if v is not None})


def run_simulation(config: AppConfig, out: Optional[TextIO] = None) -> int:
    """Play the configured word pair without a dictionary and print the report."""
    out = out or sys.stdout
    # Both words are validated up front; the guess word must be letters-only too.
    target, guesses = (Word(w) for w in config.words)
    difficulty = config.difficulty or GameDifficulty.NOOB

    engine = GameEngine(target, difficulty, logger=log)
    log.info("Simulation launched: target=%s, guesses=%s, difficulty=%s",
             target, guesses, difficulty.name)
    print(GameSimulator(engine, guesses.text).run_simulation(), file=out)
    return EXIT_OK


def run_interactive(config: AppConfig, ui: ConsoleUI, dictionary: Optional[Dictionary] = None) -> int:
    """Session loop: pick difficulty and category, play a round, repeat on request."""
    ui.welcome()
    if dictionary is None:
        dictionary = load_dictionary(config, logger=log)

    while True:
        ui.say("=== A NEW ROUND HAS STARTED ===")
        difficulty = config.difficulty or ui.choose_difficulty()
        category = config.category if config.category in dictionary else ui.choose_category(dictionary)
        engine = GameEngine(dictionary.random_word_from_category(category), difficulty, logger=log)
        log.info("Round started: category=%s, difficulty=%s", category, difficulty.name)
        ui.play_round(engine)

        if not ui.continue_game():
            log.info("Session finished")
            return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(override=False)  # Load .env into process env
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    log.info("The application is running")

    try:
        config = resolve_config(args)
        mode = resolve_mode(config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_USAGE
    log.info("Config content: %s", config)
    log.info("Mode: %s", mode.value)

    if mode is GameMode.SIMULATION:
        try:
            return run_simulation(config)
        except HangmanError as exc:
            print(f"Simulation failed: {exc}", file=sys.stderr)
            return EXIT_USAGE

    try:
        return run_interactive(config, ConsoleUI())
    except DictionaryUnavailableError as exc:
        print(f"Cannot start the game: {exc}", file=sys.stderr)
        return EXIT_UNAVAILABLE
    except EOFError:
        log.info("Input closed; leaving the game")
        return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
