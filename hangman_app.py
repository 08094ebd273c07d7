from __future__ import annotations

import logging
import os

import streamlit as st

from dotenv import load_dotenv
load_dotenv(override=False)  # Load .env into process env

# --- Core game imports ---
from hangman.config import AppConfig, load_config
from hangman.core.dictionary import Dictionary
from hangman.core.engine import GameEngine, mask_word
from hangman.core.state import GameDifficulty, GameStatus
from hangman.errors import HangmanError, InvalidGuessError, RoundAlreadyOverError

# --- Word sources (bundled lists, optional LLM) ---
from hangman.services.sources import load_dictionary

log = logging.getLogger("hangman.app")


# =======================================
# Configuration & dictionary (once per run)
# =======================================

def _load_app_config() -> AppConfig:
    """Environment defaults, optionally overridden by the YAML file in HANGMAN_CONFIG."""
    path = os.getenv("HANGMAN_CONFIG")
    return load_config(path) if path else AppConfig.from_env()


@st.cache_resource(show_spinner="Loading words...")
def _get_dictionary() -> Dictionary:
    """
    Resolve the dictionary once per server process; it is read-only and
    shared by every round and browser session.
    """
    return load_dictionary(_load_app_config(), logger=log)


# =======================================
# Session-state helpers & game management
# =======================================

def _init_stats() -> None:
    """Ensure a stats dict exists in session state."""
    st.session_state.setdefault("stats", {"games": 0, "wins": 0, "losses": 0, "mistakes": 0})


def _start_new_round(dictionary: Dictionary, category: str, difficulty: GameDifficulty) -> None:
    """Start a new round with a fresh engine and reset per-round flags."""
    word = dictionary.random_word_from_category(category)
    st.session_state["engine"] = GameEngine(word, difficulty, logger=log)
    st.session_state["round_counted"] = False
    st.session_state["last_message"] = None
    log.info("Round started: category=%s, difficulty=%s", category, difficulty.name)


def _ensure_engine(dictionary: Dictionary, category: str, difficulty: GameDifficulty) -> GameEngine:
    """Ensure there is an engine in session state; create one if missing."""
    if not isinstance(st.session_state.get("engine"), GameEngine):
        _start_new_round(dictionary, category, difficulty)
    _init_stats()
    return st.session_state["engine"]


def _record_result(engine: GameEngine) -> None:
    """Count a finished round in the stats exactly once."""
    if not engine.is_over or st.session_state.get("round_counted", False):
        return
    stats = st.session_state["stats"]
    stats["games"] += 1
    stats["mistakes"] += engine.wrong_count
    if engine.status is GameStatus.WON:
        stats["wins"] += 1
    else:
        stats["losses"] += 1
    st.session_state["round_counted"] = True


# =========
# The App
# =========

def main() -> None:
    st.set_page_config(page_title="Hangman", page_icon="🪢", layout="centered")
    st.title("🪢 Hangman")

    # A bad HANGMAN_CONFIG file (ConfigError) or an unloadable dictionary both end here.
    try:
        config = _load_app_config()
        dictionary = _get_dictionary()
    except HangmanError as exc:
        st.error(f"Cannot start the game: {exc}")
        st.stop()

    # ---- Sidebar ----
    with st.sidebar:
        st.header("Settings")
        levels = [d.name.lower() for d in GameDifficulty]
        default_level = (config.difficulty or GameDifficulty.MEDIUM).name.lower()
        difficulty = GameDifficulty.from_name(
            st.selectbox("Difficulty", levels, index=levels.index(default_level))
        )
        names = dictionary.category_names()
        default_cat = names.index(config.category) if config.category in names else 0
        category = st.selectbox("Category", names, index=default_cat)
        if st.button("🔁 New Round", use_container_width=True):
            _start_new_round(dictionary, category, difficulty)
            st.rerun()

        _init_stats()
        with st.expander("📊 Stats", expanded=True):
            s = st.session_state["stats"]
            games = s["games"]
            winrate = (s["wins"] / games * 100.0) if games else 0.0
            st.metric("Games", games)
            c1, c2 = st.columns(2); c1.metric("Wins", s["wins"]); c2.metric("Losses", s["losses"])
            avg_mistakes = (s["mistakes"] / games) if games else 0.0
            c3, c4 = st.columns(2); c3.metric("Win rate", f"{winrate:.1f}%"); c4.metric("Avg mistakes", f"{avg_mistakes:.2f}")

    engine = _ensure_engine(dictionary, category, difficulty)

    # ---- Board ----
    st.subheader("Board")
    font_size = config.font_size or 28
    st.markdown(
        f"<p style='font-size:{font_size}px; font-family:monospace'>"
        f"{mask_word(engine.target.text, engine.guessed)}</p>",
        unsafe_allow_html=True,
    )
    st.caption(f"Mistakes: {engine.wrong_count} / {engine.difficulty.max_wrong}")
    st.progress(engine.wrong_count / engine.difficulty.max_wrong)
    st.caption(f"Guessed letters: {', '.join(sorted(engine.guessed)) or '(none)'}")

    # ---- Move input ----
    st.subheader("Your move")
    with st.form("guess_form", clear_on_submit=True):
        guess_inp = st.text_input("Enter a single letter (A–Z):", max_chars=1)
        submitted = st.form_submit_button("Submit", disabled=engine.is_over)
        if submitted:
            try:
                outcome = engine.submit_guess(guess_inp or "")
            except (InvalidGuessError, RoundAlreadyOverError) as exc:
                st.session_state["last_message"] = str(exc)
            else:
                if outcome.repeated:
                    st.session_state["last_message"] = f"You already tried '{outcome.letter}'."
                else:
                    st.session_state["last_message"] = None
            st.rerun()

    if st.session_state.get("last_message"):
        st.warning(st.session_state["last_message"])

    # ---- Outcome banner + stats update ----
    _record_result(engine)
    if engine.status is GameStatus.WON:
        st.success("🎉 You won! Great job.")
    elif engine.status is GameStatus.LOST:
        st.error(f"💀 You lost. The word was: **{engine.target}**")

    if engine.is_over:
        st.button("Play again", on_click=_start_new_round, args=(dictionary, category, difficulty))


if __name__ == "__main__":
    main()
