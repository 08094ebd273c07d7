from hangman.core.engine import GameEngine
from hangman.core.simulator import GameSimulator
from hangman.core.state import GameDifficulty, GameStatus
from hangman.core.word import Word


def test_loss_stops_before_trailing_guess():
    engine = GameEngine(Word("CAT"), GameDifficulty.EXPERT)

    report = GameSimulator(engine, "XCYAZT").run_simulation()

    assert engine.status is GameStatus.LOST
    assert "t" not in engine.guessed
    assert engine.revealed_pattern() == "ca_"
    assert report == "LOST;ca_;3/3"


def test_win_without_misses():
    engine = GameEngine(Word("DOG"), GameDifficulty.MEDIUM)

    report = GameSimulator(engine, "DOG").run_simulation()

    assert engine.status is GameStatus.WON
    assert engine.wrong_count == 0
    assert report == "WON;dog;0/6"


def test_guesses_run_out_in_progress():
    engine = GameEngine("python", GameDifficulty.NOOB)

    report = GameSimulator(engine, "pyq").run_simulation()

    assert report == "IN_PROGRESS;py____;1/10"


def test_deterministic_and_rerunnable():
    first = GameSimulator(GameEngine("cat", GameDifficulty.EXPERT), "xcyazt")
    second = GameSimulator(GameEngine("cat", GameDifficulty.EXPERT), "xcyazt")

    assert first.run_simulation() == second.run_simulation()
    assert first.run_simulation() == "LOST;ca_;3/3"
