"""Wall-clock driven simulated time for the orbit animation."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class FrameTimer:
    """High resolution timer based on :func:`time.perf_counter`."""

    source: Callable[[], float] = time.perf_counter
    last_time: float | None = None

    def tick(self) -> float:
        now = self.source()
        if self.last_time is None:
            self.last_time = now
            return 0.0
        dt = now - self.last_time
        self.last_time = now
        return dt

    def restart(self) -> None:
        self.last_time = None


@dataclass
class SimulationClock:
    """Accumulates simulated seconds; ``seek`` allows scrubbing."""

    timer: FrameTimer = field(default_factory=FrameTimer)
    elapsed: float = 0.0

    def advance(self) -> float:
        delta = self.timer.tick()
        if delta > 0.0:
            self.elapsed += delta
        return self.elapsed

    def seek(self, elapsed: float) -> None:
        self.elapsed = elapsed
        self.timer.restart()

    def reset(self) -> None:
        self.seek(0.0)


__all__ = ["FrameTimer", "SimulationClock"]
