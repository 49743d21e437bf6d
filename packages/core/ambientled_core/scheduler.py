"""Fixed-interval refresh loop with an explicit pause flag."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from .performance import CycleStats


logger = logging.getLogger("ambientled.scheduler")


class PauseFlag:
    """Thread-safe pause switch read once at the start of every cycle."""

    def __init__(self, paused: bool = False) -> None:
        self._event = threading.Event()
        if paused:
            self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()

    def set(self, paused: bool = True) -> None:
        if paused:
            self._event.set()
        else:
            self._event.clear()

    def toggle(self) -> bool:
        self.set(not self.is_set())
        return self.is_set()


class RefreshScheduler:
    """Runs ``cycle`` every ``interval_s`` on one worker thread.

    Cycles never overlap. A failing cycle is logged and skipped; the next one
    runs on schedule with no carried-over state.
    """

    def __init__(
        self,
        cycle: Callable[[], object],
        interval_s: float,
        name: str = "refresh",
        on_error: Callable[[BaseException], None] | None = None,
    ) -> None:
        if interval_s <= 0:
            raise ValueError("Refresh interval must be positive")
        self.cycle = cycle
        self.interval_s = interval_s
        self.name = name
        self.on_error = on_error
        self.stats = CycleStats()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._overrunning = False

    @property
    def is_running(self) -> bool:
        return bool(self._thread and self._thread.is_alive())

    def start(self) -> None:
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=f"ambientled-{self.name}", daemon=True)
        self._thread.start()
        logger.info("scheduler %s started every %.0f ms", self.name, self.interval_s * 1000, extra={"event": "scheduler_start"})

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("scheduler %s did not stop within %.1fs", self.name, timeout or 0.0)
            else:
                self._thread = None
        logger.info("scheduler %s stopped", self.name, extra={"event": "scheduler_stop"})

    def run_once(self) -> bool:
        start = time.perf_counter()
        ok = True
        try:
            self.cycle()
        except Exception as exc:
            ok = False
            self.stats.errors += 1
            logger.error("refresh cycle %s failed: %s", self.name, exc, exc_info=True, extra={"event": "cycle_error"})
            if self.on_error is not None:
                self.on_error(exc)
        elapsed = time.perf_counter() - start
        overrun = self.stats.record(elapsed, self.interval_s)
        if overrun and not self._overrunning:
            logger.warning(
                "refresh cycle %s took %.1f ms, interval is %.1f ms",
                self.name,
                elapsed * 1000,
                self.interval_s * 1000,
                extra={"event": "cycle_overrun"},
            )
        self._overrunning = overrun
        return ok

    def _run(self) -> None:
        next_at = time.perf_counter()
        while not self._stop.is_set():
            self.run_once()
            next_at += self.interval_s
            now = time.perf_counter()
            if next_at < now:
                next_at = now
            self._stop.wait(next_at - now)
