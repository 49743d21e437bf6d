"""Refresh cycle timing and process resource sampling."""

from __future__ import annotations

from dataclasses import dataclass

import psutil


@dataclass
class CycleStats:
    cycles: int = 0
    errors: int = 0
    overruns: int = 0
    last_s: float = 0.0
    avg_s: float = 0.0

    def record(self, elapsed_s: float, interval_s: float) -> bool:
        """Fold one cycle duration into the stats; returns True on overrun."""
        self.cycles += 1
        self.last_s = elapsed_s
        self.avg_s = elapsed_s if self.cycles == 1 else (0.9 * self.avg_s + 0.1 * elapsed_s)
        overrun = elapsed_s > interval_s
        if overrun:
            self.overruns += 1
        return overrun


@dataclass(frozen=True)
class ResourceSample:
    cpu_percent: float
    rss_mb: float


class ResourceMonitor:
    def __init__(self) -> None:
        self._process = psutil.Process()
        # Prime non-blocking CPU measurement.
        self._process.cpu_percent(interval=None)

    def sample(self) -> ResourceSample:
        return ResourceSample(
            cpu_percent=float(self._process.cpu_percent(interval=None)),
            rss_mb=float(self._process.memory_info().rss) / (1024 * 1024),
        )
