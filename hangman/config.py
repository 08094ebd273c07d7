"""Runtime configuration: environment defaults, YAML config files and mode selection."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from hangman.core.state import GameDifficulty
from hangman.errors import ConfigError


class GameMode(str, Enum):
    INTERACTIVE = "interactive"
    SIMULATION = "simulation"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"Environment variable {name} must be an integer, got {raw!r}.") from None


@dataclass
class AppConfig:
    """
    Settings shared by the console and Streamlit front ends.

    `words` holds the optional target/guess pair; `difficulty` and `category`
    stay None when the player should be asked for them.
    """

    font_size: int = 0
    words: Optional[List[str]] = None
    difficulty: Optional[GameDifficulty] = None
    category: Optional[str] = None
    seed: Optional[int] = None
    retry_attempts: int = 3
    retry_backoff_ms: int = 200
    wordlist_dir: Optional[Path] = None
    offline: bool = True

    def __post_init__(self) -> None:
        if self.retry_attempts < 1:
            raise ConfigError("retry_attempts must be >= 1.")
        if self.retry_backoff_ms < 0:
            raise ConfigError("retry_backoff_ms must be >= 0.")
        if self.font_size < 0:
            raise ConfigError("font_size must be >= 0.")

    @classmethod
    def from_env(cls, **overrides: Any) -> "AppConfig":
        """Construct settings from environment variables (after `load_dotenv`)."""
        wordlist_dir = os.getenv("HANGMAN_WORDLIST_DIR")
        base = cls(
            retry_attempts=_env_int("HANGMAN_RETRY_ATTEMPTS", cls.retry_attempts),
            retry_backoff_ms=_env_int("HANGMAN_RETRY_BACKOFF_MS", cls.retry_backoff_ms),
            wordlist_dir=Path(wordlist_dir) if wordlist_dir else None,
            offline=os.getenv("OFFLINE_MODE", "true").lower() == "true"
            or not os.getenv("OPENAI_API_KEY"),
        )
        return replace(base, **{k: v for k, v in overrides.items() if v is not None})


_FILE_KEYS = {f.name for f in fields(AppConfig)} - {"offline"}


def _coerce(data: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(data)
    if out.get("words") is not None:
        # YAML turns null/yes/no/1 into non-strings; reject rather than stringify them.
        if not isinstance(out["words"], list) or not all(isinstance(w, str) for w in out["words"]):
            raise ConfigError("`words` must be a list of strings.")
    if out.get("difficulty") is not None:
        try:
            out["difficulty"] = GameDifficulty.from_name(str(out["difficulty"]))
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
    if out.get("wordlist_dir") is not None:
        out["wordlist_dir"] = Path(out["wordlist_dir"])
    for key in ("font_size", "seed", "retry_attempts", "retry_backoff_ms"):
        if out.get(key) is not None and not isinstance(out[key], int):
            raise ConfigError(f"`{key}` must be an integer.")
    return out


def load_config(path: Union[str, Path], base: Optional[AppConfig] = None) -> AppConfig:
    """
    Read a YAML config file on top of `base` (environment defaults when omitted).

    Example
    -------
        font_size: 14
        difficulty: hard
        category: animals
        retry_attempts: 5
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping.")
    unknown = sorted(set(data) - _FILE_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config key(s) in {path}: {', '.join(unknown)}")

    return replace(base or AppConfig.from_env(), **_coerce(data))


def resolve_mode(config: AppConfig) -> GameMode:
    """SIMULATION exactly when a target/guess word pair is configured."""
    if not config.words:
        return GameMode.INTERACTIVE
    if len(config.words) == 2:
        return GameMode.SIMULATION
    raise ConfigError(f"Expected a pair of words (target and guesses), got {len(config.words)}.")
