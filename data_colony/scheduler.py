"""TickScheduler - fixed-interval tick delivery with pause and resume."""
from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable

from data_colony.types import TickContext

logger = logging.getLogger(__name__)

TickCallback = Callable[[TickContext], None]
ErrorHook = Callable[[TickCallback, Exception], None]

DEFAULT_INTERVAL = 1000.0


class SchedulerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


class TickScheduler:
    """Fires registered callbacks once per ``interval`` time-units.

    The scheduler does not own a timer. Whatever drives it calls
    :meth:`advance` with elapsed time, :meth:`step` for a single tick, or
    :meth:`run_forever` to pace ticks against the wall clock (seconds are
    converted to milliseconds).
    """

    def __init__(
        self,
        interval: float = DEFAULT_INTERVAL,
        on_error: ErrorHook | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._interval = interval
        self._on_error = on_error
        self._callbacks: list[TickCallback] = []
        self._state = SchedulerState.IDLE
        self._tick_count = 0
        self._accumulator = 0.0
        self._error_count = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def is_running(self) -> bool:
        return self._state is SchedulerState.RUNNING

    def on_tick(self, callback: TickCallback) -> None:
        self._callbacks.append(callback)

    def clear_callbacks(self) -> None:
        self._callbacks.clear()

    def start(self) -> None:
        if self._state is SchedulerState.RUNNING:
            logger.warning("TickScheduler already running")
            return
        self._state = SchedulerState.RUNNING
        self._tick_count = 0
        self._accumulator = 0.0
        logger.info("TickScheduler started (interval=%s)", self._interval)

    def stop(self) -> None:
        if self._state not in (SchedulerState.RUNNING, SchedulerState.PAUSED):
            return
        self._state = SchedulerState.STOPPED
        self._accumulator = 0.0
        logger.info("TickScheduler stopped after %d ticks", self._tick_count)

    def reset(self) -> None:
        """Return to IDLE with a zero tick count. Callbacks stay registered."""
        self._state = SchedulerState.IDLE
        self._tick_count = 0
        self._accumulator = 0.0

    def pause(self) -> None:
        if self._state is SchedulerState.RUNNING:
            self._state = SchedulerState.PAUSED

    def resume(self) -> None:
        if self._state is SchedulerState.PAUSED:
            self._state = SchedulerState.RUNNING

    def advance(self, elapsed: float) -> int:
        """Feed elapsed time-units. Fires one tick per full interval; returns ticks fired."""
        if elapsed < 0:
            raise ValueError(f"elapsed must be >= 0, got {elapsed}")
        if self._state is not SchedulerState.RUNNING:
            return 0
        self._accumulator += elapsed
        fired = 0
        while self._accumulator >= self._interval and self._state is SchedulerState.RUNNING:
            self._accumulator -= self._interval
            self._tick()
            fired += 1
        return fired

    def step(self) -> bool:
        """Fire exactly one tick if running."""
        if self._state is not SchedulerState.RUNNING:
            return False
        self._tick()
        return True

    def run_forever(self) -> None:
        """Block, firing ticks at the configured interval until stopped."""
        if self._state is not SchedulerState.RUNNING:
            self.start()
        period = self._interval / 1000.0
        while self._state in (SchedulerState.RUNNING, SchedulerState.PAUSED):
            start = time.monotonic()
            if self._state is SchedulerState.RUNNING:
                self._tick()
            if self._state is SchedulerState.STOPPED:
                break
            elapsed = time.monotonic() - start
            sleep_time = period - elapsed
            if sleep_time > 0:
                time.sleep(sleep_time)

    def _context(self) -> TickContext:
        return TickContext(
            tick_number=self._tick_count,
            interval=self._interval,
            elapsed=self._tick_count * self._interval,
            request_stop=self.stop,
        )

    def _tick(self) -> None:
        self._tick_count += 1
        ctx = self._context()
        for callback in list(self._callbacks):
            try:
                callback(ctx)
            except Exception as exc:
                self._error_count += 1
                logger.exception("Error in tick callback %r", callback)
                if self._on_error is not None:
                    self._on_error(callback, exc)
