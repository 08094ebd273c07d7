from __future__ import annotations

import logging
import random
from typing import Dict, Iterable, List, Mapping, Optional

from hangman.config import AppConfig
from hangman.core.dictionary import Dictionary
from hangman.core.loader import DictionaryLoader, Source, chain_sources
from hangman.core.wordlist import load_wordlists
from .llm_source import fetch_categories_with_llm


def build_source(config: AppConfig, logger: Optional[logging.Logger] = None) -> Source:
    """
    Pick where words come from.

    Online (OPENAI_API_KEY set and OFFLINE_MODE=false) the LLM is asked first
    and the bundled word lists are the fallback; offline only the lists are used.
    """

    def bundled_wordlists() -> Dict[str, List[str]]:
        return load_wordlists(config.wordlist_dir)

    if config.offline:
        return bundled_wordlists

    def llm_categories() -> Mapping[str, Iterable[str]]:
        return fetch_categories_with_llm()

    return chain_sources(llm_categories, bundled_wordlists, logger=logger)


def load_dictionary(config: AppConfig, logger: Optional[logging.Logger] = None) -> Dictionary:
    """Resolve the dictionary for interactive play, retrying as configured."""
    rng = random.Random(config.seed)
    loader = DictionaryLoader(build_source(config, logger=logger), logger=logger, rng=rng)
    return loader.load_with_retry(config.retry_attempts, config.retry_backoff_ms)


__all__ = ["build_source", "load_dictionary"]
