from __future__ import annotations

import random
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from hangman.errors import InvalidWordError, UnknownCategoryError
from .word import Category, Word


class Dictionary:
    """
    Read-only collection of word categories.

    Built once per run (from a loader or from configured words) and shared
    by every round afterwards. Only `rng` changes state, when a word is drawn.
    """

    def __init__(self, categories: Iterable[Category], rng: Optional[random.Random] = None) -> None:
        self._categories: Dict[str, Category] = {}
        for category in categories:
            if category.name in self._categories:
                raise InvalidWordError(f"Duplicate category: {category.name!r}.")
            self._categories[category.name] = category
        if not self._categories:
            raise InvalidWordError("Dictionary needs at least one category.")
        self._rng = rng or random.Random()

    @classmethod
    def from_mapping(
        cls, raw: Mapping[str, Iterable[str]], rng: Optional[random.Random] = None
    ) -> "Dictionary":
        """Build a dictionary from raw `category -> words` data (e.g., a source's output)."""
        return cls((Category.from_strings(name, words) for name, words in raw.items()), rng=rng)

    def category_names(self) -> List[str]:
        return sorted(self._categories)

    def category(self, name: str) -> Category:
        try:
            return self._categories[name]
        except KeyError:
            raise UnknownCategoryError(name) from None

    def random_word_from_category(self, name: str) -> Word:
        """
        Pick a uniformly random word from category `name`.

        Words are drawn from the sorted candidate list, so a seeded `rng`
        always produces the same sequence of picks.
        """
        return self._rng.choice(self.category(name).sorted_words())

    def __contains__(self, name: object) -> bool:
        return name in self._categories

    def __iter__(self) -> Iterator[str]:
        return iter(self.category_names())

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        sizes = ", ".join(f"{n}={len(c)}" for n, c in sorted(self._categories.items()))
        return f"Dictionary({sizes})"
