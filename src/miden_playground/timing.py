"""Wall-clock timing of pipeline stages."""
from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Optional


@dataclass(frozen=True)
class StageTiming:
    """Durations in fractional milliseconds; ``None`` for stages not reached."""

    compilation_ms: Optional[float] = None
    run_ms: Optional[float] = None
    total_ms: Optional[float] = None


class StageTimer:
    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._started = clock()
        self._durations: dict[str, float] = {}

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        """Time the body; the duration is recorded even if it raises."""
        start = self._clock()
        try:
            yield
        finally:
            self._durations[name] = (self._clock() - start) * 1000.0

    def elapsed_ms(self, name: str) -> Optional[float]:
        return self._durations.get(name)

    def total_ms(self) -> float:
        return (self._clock() - self._started) * 1000.0

    def durations(self) -> dict[str, float]:
        return dict(self._durations)


__all__ = ["StageTimer", "StageTiming"]
