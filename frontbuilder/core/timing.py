"""Wall-clock timing for the build phases reported by ``--verbose``."""

import time
from typing import Optional


class TimingContext:
    """Record how long a ``with`` block took, in seconds, under ``key``.

    The duration is stored even when the block raises, so a failed build
    still reports how far it got.
    """

    def __init__(self, timings: dict[str, float], key: str) -> None:
        self.timings = timings
        self.key = key
        self._start: Optional[float] = None

    def __enter__(self) -> "TimingContext":
        self._start = time.monotonic()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._start is not None:
            self.timings[self.key] = round(time.monotonic() - self._start, 3)
        return None


def format_duration(seconds: float) -> str:
    """0.5 -> "0.5s", 65.3 -> "1m 5.3s"."""
    if seconds < 60:
        return f"{seconds:.1f}s"

    minutes, remaining = divmod(seconds, 60)
    return f"{int(minutes)}m {remaining:.1f}s"


def format_phase_timings(timings: dict[str, float]) -> list[str]:
    """One aligned ``phase: duration`` line per recorded phase, in run order."""
    if not timings:
        return []
    width = max(len(phase) for phase in timings)
    return [
        f"{phase.ljust(width)}  {format_duration(duration)}"
        for phase, duration in timings.items()
    ]
