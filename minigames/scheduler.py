"""
scheduler.py - Cooperative tick scheduler.

Each game engine owns exactly one Scheduler. The controller never keeps
timers of its own: it only pumps the active engine with elapsed wall time,
and the engine's scheduler decides which callbacks are due.

Two kinds of work are tracked:
  - one periodic callback (the game tick), either every `period_ms` or,
    with period None, once per advance() call (one animation frame)
  - any number of one-shot delayed calls (e.g. a ball respawn)

cancel() drops both, so an engine that is closed can never be mutated by a
callback scheduled before it was closed.
"""

import itertools
from typing import Callable


class Scheduler:
    """Fixed-period or per-frame callback driver, pumped by advance()."""

    def __init__(self):
        self._callback: Callable[[], None] | None = None
        self._period: float | None = None
        self._accum: float = 0.0
        self._running: bool = False
        self._timers: dict[int, list] = {}
        self._ids = itertools.count(1)
        self._generation: int = 0

    # ── Accessors ────────────────────────────────────────────────
    @property
    def running(self) -> bool:
        return self._running

    @property
    def period(self) -> float | None:
        return self._period

    @property
    def pending(self) -> int:
        """Number of delayed calls still waiting to fire."""
        return len(self._timers)

    # ── Commands ─────────────────────────────────────────────────
    def start(self, period_ms: float | None, callback: Callable[[], None]) -> None:
        """Arm the periodic callback. period_ms=None fires once per frame."""
        if period_ms is not None and period_ms <= 0:
            raise ValueError(f"period must be positive, got {period_ms!r}")
        self._callback = callback
        self._period = period_ms
        self._accum = 0.0
        self._running = True
        self._generation += 1

    def stop(self) -> None:
        """Disarm the periodic callback. Delayed calls stay pending."""
        self._running = False
        self._accum = 0.0
        self._generation += 1

    def reschedule(self, period_ms: float | None) -> None:
        """Change the period; the next tick is a full new period away."""
        if period_ms is not None and period_ms <= 0:
            raise ValueError(f"period must be positive, got {period_ms!r}")
        self._period = period_ms
        self._accum = 0.0

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> int:
        """Run callback once after delay_ms of pumped time. Returns a handle."""
        handle = next(self._ids)
        self._timers[handle] = [max(0.0, delay_ms), callback]
        return handle

    def cancel_call(self, handle: int) -> None:
        self._timers.pop(handle, None)

    def cancel(self) -> None:
        """Stop ticking and forget every pending delayed call."""
        self.stop()
        self._callback = None
        self._timers.clear()

    # ── Pump ─────────────────────────────────────────────────────
    def advance(self, elapsed_ms: float) -> int:
        """
        Advance the clock by elapsed_ms and fire whatever became due.
        Returns the number of periodic ticks fired.

        A callback that stops or cancels the scheduler ends the pump
        immediately: no further tick of the old schedule fires.
        """
        self._fire_timers(elapsed_ms)

        if not self._running or self._callback is None:
            return 0

        if self._period is None:
            self._callback()
            return 1

        fired = 0
        generation = self._generation
        self._accum += elapsed_ms
        while self._running and generation == self._generation and self._accum >= self._period:
            self._accum -= self._period
            period = self._period
            self._callback()
            fired += 1
            if self._period != period:
                # Re-armed from inside the tick; leftover time is discarded.
                break
        return fired

    def _fire_timers(self, elapsed_ms: float) -> None:
        due = []
        for handle, timer in list(self._timers.items()):
            timer[0] -= elapsed_ms
            if timer[0] <= 0:
                due.append((timer[0], handle))
        for _, handle in sorted(due):
            timer = self._timers.pop(handle, None)
            if timer is not None:
                timer[1]()
