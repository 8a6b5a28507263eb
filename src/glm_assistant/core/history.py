"""In-memory history of successful generations, newest first."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterator


def _now_millis() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class GenerationResult:
    prompt: str
    response: str
    timestamp: int

    def local_time(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp / 1000)


class GenerationHistory:
    """Ordered sequence of results; only the submitting caller appends."""

    def __init__(self, clock: Callable[[], int] = _now_millis) -> None:
        self._clock = clock
        self._results: list[GenerationResult] = []

    def record(self, prompt: str, response: str) -> GenerationResult:
        result = GenerationResult(prompt=prompt, response=response, timestamp=self._clock())
        self._results.insert(0, result)
        return result

    def clear(self) -> None:
        self._results.clear()

    @property
    def latest(self) -> GenerationResult | None:
        return self._results[0] if self._results else None

    def __iter__(self) -> Iterator[GenerationResult]:
        return iter(list(self._results))

    def __len__(self) -> int:
        return len(self._results)
