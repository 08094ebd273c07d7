import logging

import pytest

from hangman.core.loader import (
    CONFIG_CATEGORY,
    DictionaryLoader,
    chain_sources,
    create_from_config,
    exponential_backoff,
    linear_backoff,
    no_backoff,
)
from hangman.errors import DictionaryUnavailableError, InvalidWordError


class FlakySource:
    """Fails `failures` times, then returns a small mapping."""

    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError(f"boom #{self.calls}")
        return {"animals": ["cat", "dog"]}


class RecordingSleep:
    def __init__(self):
        self.waits = []

    def __call__(self, seconds):
        self.waits.append(seconds)


def test_succeeds_on_third_attempt():
    source, sleep = FlakySource(failures=2), RecordingSleep()
    loader = DictionaryLoader(source, sleep=sleep)

    dictionary = loader.load_with_retry(3, 200)

    assert source.calls == 3
    assert dictionary.category_names() == ["animals"]
    assert sleep.waits == [0.2, 0.4]


def test_always_failing_source_exhausts_attempts():
    source, sleep = FlakySource(failures=99), RecordingSleep()
    loader = DictionaryLoader(source, sleep=sleep)

    with pytest.raises(DictionaryUnavailableError) as info:
        loader.load_with_retry(3, 200)

    assert source.calls == 3
    assert info.value.attempts == 3
    assert isinstance(info.value.__cause__, ConnectionError)
    assert str(info.value.last_error) == "boom #3"
    # no wait after the final attempt
    assert len(sleep.waits) == 2


def test_first_success_does_not_sleep():
    source, sleep = FlakySource(failures=0), RecordingSleep()

    DictionaryLoader(source, sleep=sleep).load_with_retry(5, 1000)

    assert source.calls == 1
    assert sleep.waits == []


def test_invalid_data_counts_as_failed_attempt():
    calls = []

    def bad_source():
        calls.append(1)
        return {"animals": ["c4t"]}

    loader = DictionaryLoader(bad_source, backoff=no_backoff, sleep=RecordingSleep())
    with pytest.raises(DictionaryUnavailableError) as info:
        loader.load_with_retry(2, 0)

    assert len(calls) == 2
    assert isinstance(info.value.last_error, InvalidWordError)


def test_injected_policy_and_logger(caplog):
    sleep = RecordingSleep()
    loader = DictionaryLoader(
        FlakySource(failures=3), backoff=exponential_backoff, sleep=sleep,
        logger=logging.getLogger("test.loader"),
    )

    with caplog.at_level(logging.WARNING, logger="test.loader"):
        loader.load_with_retry(4, 100)

    assert sleep.waits == [0.1, 0.2, 0.4]
    assert sum("attempt" in r.getMessage() for r in caplog.records) == 3


@pytest.mark.parametrize("attempts, base", [(0, 200), (3, -1)])
def test_bad_arguments(attempts, base):
    loader = DictionaryLoader(FlakySource(failures=0), sleep=RecordingSleep())
    with pytest.raises(ValueError):
        loader.load_with_retry(attempts, base)


@pytest.mark.parametrize("policy", [linear_backoff, exponential_backoff, no_backoff])
def test_policies_non_decreasing(policy):
    waits = [policy(n, 200) for n in range(1, 8)]
    assert waits == sorted(waits)
    assert all(w >= 0 for w in waits)


def test_chain_sources_falls_back():
    def broken():
        raise TimeoutError("slow")

    chained = chain_sources(broken, lambda: {"fruits": ["kiwi"]})
    assert chained() == {"fruits": ["kiwi"]}


def test_chain_sources_reraises_last_error():
    def first():
        raise TimeoutError("first")

    def second():
        raise OSError("second")

    with pytest.raises(OSError, match="second"):
        chain_sources(first, second)()


def test_create_from_config():
    dictionary = create_from_config(["Cat", "xcyazt"])

    assert dictionary.category_names() == [CONFIG_CATEGORY]
    words = {w.text for w in dictionary.category(CONFIG_CATEGORY).words}
    assert words == {"cat", "xcyazt"}


@pytest.mark.parametrize("words", [["cat", ""], ["", "dog"], ["cat"], ["a", "b", "c"], None])
def test_create_from_config_rejects_bad_pairs(words):
    with pytest.raises(InvalidWordError):
        create_from_config(words)
