import time

from glm_assistant.core.history import GenerationHistory


def test_newest_first_with_clock():
    ticks = iter([1_000, 2_000])
    history = GenerationHistory(clock=lambda: next(ticks))

    first = history.record("one", "1")
    second = history.record("two", "2")

    assert [r.prompt for r in history] == ["two", "one"]
    assert history.latest is second
    assert (first.timestamp, second.timestamp) == (1_000, 2_000)
    assert len(history) == 2


def test_default_clock_uses_epoch_millis():
    before = int(time.time() * 1000)
    result = GenerationHistory().record("p", "r")
    after = int(time.time() * 1000)

    assert before <= result.timestamp <= after


def test_clear():
    history = GenerationHistory()
    history.record("p", "r")

    history.clear()

    assert len(history) == 0
    assert history.latest is None
