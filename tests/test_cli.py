import io

import pytest

from hangman import __version__
from hangman.cli import ConsoleUI, main, run_interactive
from hangman.config import AppConfig
from hangman.core.dictionary import Dictionary
from hangman.core.state import GameDifficulty


@pytest.fixture(autouse=True)
def offline_env(monkeypatch):
    monkeypatch.setenv("OFFLINE_MODE", "true")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("HANGMAN_WORDLIST_DIR", raising=False)


def scripted(*answers):
    replies = iter(answers)
    return lambda prompt: next(replies)


def test_simulation_win_with_default_noob(capsys):
    assert main(["cat", "xcyazt"]) == 0
    assert capsys.readouterr().out.strip() == "WON;cat;3/10"


def test_simulation_loss_on_expert(capsys):
    assert main(["-d", "expert", "CAT", "XCYAZT"]) == 0
    assert capsys.readouterr().out.strip() == "LOST;ca_;3/3"


def test_simulation_from_yaml(tmp_path, capsys):
    path = tmp_path / "config.yaml"
    path.write_text("words: [dog, dog]\ndifficulty: medium\n", encoding="utf-8")

    assert main(["-c", str(path)]) == 0
    assert capsys.readouterr().out.strip() == "WON;dog;0/6"


def test_single_word_is_a_usage_error(capsys):
    assert main(["cat"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_invalid_guess_word_is_reported(capsys):
    assert main(["cat", "x1"]) == 2
    assert "Simulation failed" in capsys.readouterr().err


def test_unavailable_dictionary_exits_with_message(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("HANGMAN_WORDLIST_DIR", str(tmp_path))
    monkeypatch.setenv("HANGMAN_RETRY_BACKOFF_MS", "0")

    assert main([]) == 1
    assert "Cannot start the game" in capsys.readouterr().err


def test_closed_input_ends_session(monkeypatch):
    def closed(prompt):
        raise EOFError

    monkeypatch.setattr("builtins.input", closed)
    assert main([]) == 0


def test_interactive_round():
    out = io.StringIO()
    ui = ConsoleUI(scripted("", "zoo", "1", "d", "7", "o", "o", "g", "n"), out=out)
    dictionary = Dictionary.from_mapping({"animals": ["dog"]})

    assert run_interactive(AppConfig(), ui, dictionary=dictionary) == 0

    text = out.getvalue()
    assert "Unknown category: 'zoo'" in text
    assert "Guess must be a single letter" in text
    assert "You already tried 'o'." in text
    assert "You won! The word was 'dog'." in text


def test_preset_difficulty_and_category_skip_prompts():
    out = io.StringIO()
    ui = ConsoleUI(scripted("x", "y", "z", "no"), out=out)
    dictionary = Dictionary.from_mapping({"animals": ["dog"]})
    config = AppConfig(difficulty=GameDifficulty.EXPERT, category="animals")

    assert run_interactive(config, ui, dictionary=dictionary) == 0
    assert "You lost. The word was 'dog'." in out.getvalue()


def test_play_again_starts_second_round():
    out = io.StringIO()
    ui = ConsoleUI(scripted("d", "o", "g", "y", "g", "o", "d", "n"), out=out)
    config = AppConfig(difficulty=GameDifficulty.MEDIUM, category="animals")

    run_interactive(config, ui, dictionary=Dictionary.from_mapping({"animals": ["dog"]}))

    assert out.getvalue().count("You won!") == 2


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--version"])

    assert info.value.code == 0
    assert capsys.readouterr().out.strip() == f"hangman {__version__}"


@pytest.mark.parametrize("words", ["[one, null]", "[yes, no]"])
def test_yaml_non_string_words_are_a_usage_error(tmp_path, capsys, words):
    path = tmp_path / "config.yaml"
    path.write_text(f"words: {words}\n", encoding="utf-8")

    assert main(["-c", str(path)]) == 2
    captured = capsys.readouterr()
    assert "Configuration error" in captured.err
    assert captured.out == ""


def test_empty_guess_word_is_reported(capsys):
    assert main(["cat", ""]) == 2
    assert "Simulation failed" in capsys.readouterr().err
