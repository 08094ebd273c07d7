from __future__ import annotations

import json
import os
import re
from typing import Dict, List, Optional

from openai import OpenAI

# Strict validator: only lowercase a–z
_LOWER_AZ = re.compile(r"^[a-z]+$")
# Models sometimes wrap JSON in a ```json fence; keep only the object.
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class LLMUnavailableError(RuntimeError):
    """OFFLINE_MODE is on or no API key is configured."""


def _parse_categories(text: str, min_words: int) -> Dict[str, List[str]]:
    """
    Turn a model reply into a `category -> words` mapping.

    Non a–z entries are dropped; a category that keeps fewer than
    `min_words` words is dropped too. Raises ValueError when nothing usable
    remains, so the caller's retry logic can try again.
    """
    match = _JSON_OBJECT.search(text or "")
    if not match:
        raise ValueError("LLM reply does not contain a JSON object.")
    data = json.loads(match.group(0))
    if not isinstance(data, dict):
        raise ValueError("LLM reply must be a JSON object of category -> words.")

    categories: Dict[str, List[str]] = {}
    for name, words in data.items():
        if not isinstance(name, str) or not isinstance(words, list):
            continue
        cleaned = sorted({str(w).strip().lower() for w in words if _LOWER_AZ.match(str(w).strip().lower())})
        if len(cleaned) >= min_words:
            categories[name.strip().lower()] = cleaned
    if not categories:
        raise ValueError("LLM reply contained no usable categories.")
    return categories


def fetch_categories_with_llm(
    categories: int = 4,
    words_per_category: int = 12,
    model: Optional[str] = None,
    client: Optional[OpenAI] = None,
) -> Dict[str, List[str]]:
    """
    Ask a chat model for a fresh set of word categories.

    Safety
    ------
    - OFFLINE_MODE=true or missing OPENAI_API_KEY -> raises LLMUnavailableError.
    - Prompts for a JSON object only; validates every word against a–z.
    - Makes exactly ONE request; retrying is the DictionaryLoader's job.
    """
    if client is None:
        api_key = os.getenv("OPENAI_API_KEY", "")
        offline = os.getenv("OFFLINE_MODE", "true").lower() == "true"
        if offline or not api_key:
            raise LLMUnavailableError("LLM word source disabled (OFFLINE_MODE or missing OPENAI_API_KEY).")
        client = OpenAI(api_key=api_key)

    mdl = model or os.getenv("MODEL_NAME", "gpt-4o-mini")
    prompt = (
        f"Invent {categories} everyday word categories for a Hangman game "
        f"(for example animals or fruits) with {words_per_category} common English words each. "
        "Single words only, lowercase letters a-z, no spaces or hyphens. "
        'Reply with ONLY a JSON object like {"animals": ["otter", "zebra"]}.'
    )

    resp = client.chat.completions.create(
        model=mdl,
        messages=[{"role": "user", "content": prompt}],
        temperature=0.7,
        max_tokens=600,
    )
    text = (resp.choices[0].message.content or "").strip()
    return _parse_categories(text, min_words=max(1, words_per_category // 2))


__all__ = ["fetch_categories_with_llm", "LLMUnavailableError"]
