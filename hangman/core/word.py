from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

from hangman.errors import InvalidWordError


def normalize_word(raw: str) -> str:
    """
    Return `raw` stripped and lowercased, or raise `InvalidWordError`.

    Only alphabetic text is accepted; this is the single place where the
    canonical (lowercase) case of the game is decided.
    """
    if not isinstance(raw, str):
        raise InvalidWordError(f"Word must be a string, got {type(raw).__name__}.")
    word = raw.strip().lower()
    if not word:
        raise InvalidWordError("Word must not be empty.")
    if not word.isalpha():
        raise InvalidWordError(f"Word must contain letters only: {raw!r}.")
    return word


@dataclass(frozen=True)
class Word:
    """
    Immutable target word.

    Notes
    -----
    - `text` is normalized to lowercase in `__post_init__`.
    - `letters` (distinct letters) and `length` are derived once, so the
      engine can check the win condition without re-scanning the text.
    """

    text: str
    letters: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Because dataclass is frozen, use object.__setattr__ for normalization.
        object.__setattr__(self, "text", normalize_word(self.text))
        object.__setattr__(self, "letters", frozenset(self.text))

    @property
    def length(self) -> int:
        return len(self.text)

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Category:
    """A named, non-empty group of candidate words."""

    name: str
    words: FrozenSet[Word]

    def __post_init__(self) -> None:
        name = (self.name or "").strip()
        if not name:
            raise InvalidWordError("Category name must not be empty.")
        if not self.words:
            raise InvalidWordError(f"Category {name!r} has no words.")
        object.__setattr__(self, "name", name)

    @classmethod
    def from_strings(cls, name: str, words: Iterable[str]) -> "Category":
        """Build a category from raw strings; case-insensitive duplicates collapse."""
        return cls(name=name, words=frozenset(Word(w) for w in words))

    def sorted_words(self) -> list[Word]:
        return sorted(self.words, key=lambda w: w.text)

    def __len__(self) -> int:
        return len(self.words)
