from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

# Word lists shipped with the package live here, one file per category.
_DATA_DIR = Path(__file__).resolve().parent.parent / "data" / "wordlists"

_log = logging.getLogger(__name__)


def default_wordlist_dir() -> Path:
    """Return `HANGMAN_WORDLIST_DIR` when set, else the bundled lists."""
    override = os.getenv("HANGMAN_WORDLIST_DIR")
    return Path(override) if override else _DATA_DIR


def _read_lines(path: Path) -> List[str]:
    """
    Read a text file (UTF-8) and return non-empty, stripped, lowercase lines.

    Notes
    -----
    - Lines starting with '#' are comments.
    - Each valid line should contain exactly one word; validation of the word
      itself happens when the Dictionary is built.
    """
    raw = path.read_text(encoding="utf-8").splitlines()
    return [ln.strip().lower() for ln in raw if ln.strip() and not ln.lstrip().startswith("#")]


def load_wordlists(directory: Optional[Union[str, Path]] = None) -> Dict[str, List[str]]:
    """
    Load every `<category>.txt` under `directory` into a `category -> words` mapping.

    Raises
    ------
    FileNotFoundError
        If the directory is missing or holds no non-empty word list. The
        loader treats this like any other failed attempt.
    """
    root = Path(directory) if directory is not None else default_wordlist_dir()
    if not root.is_dir():
        raise FileNotFoundError(f"Word list directory not found: {root}")

    categories: Dict[str, List[str]] = {}
    for path in sorted(root.glob("*.txt")):
        words = _read_lines(path)
        if not words:
            _log.debug("Skipping empty word list %s", path)
            continue
        categories[path.stem.lower()] = words

    if not categories:
        raise FileNotFoundError(f"No word lists found in {root}")
    _log.info("Loaded %d categories from %s", len(categories), root)
    return categories
