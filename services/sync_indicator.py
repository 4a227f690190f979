"""
Cosmetic "syncing" indicator.

Every `interval` seconds the flag turns on for `pulse` seconds. It never
reads or writes the store and has no effect on correctness.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

logger = logging.getLogger(__name__)


class SyncIndicator:
    def __init__(self, interval: float = 30.0, pulse: float = 2.0) -> None:
        if interval <= 0 or pulse < 0:
            raise ValueError("interval must be > 0 and pulse >= 0")
        self.interval = interval
        self.pulse = pulse
        self._lock = threading.Lock()
        self._syncing = False
        self._timer: Optional[threading.Timer] = None
        self._running = False
        # Timers from an earlier start() carry a stale generation and stop themselves.
        self._generation = 0

    @property
    def is_syncing(self) -> bool:
        return self._syncing

    @property
    def is_running(self) -> bool:
        return self._running

    def _schedule(self, delay: float, callback, generation: int) -> None:
        # Caller holds self._lock.
        timer = threading.Timer(delay, callback, args=(generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _pulse_on(self, generation: int) -> None:
        with self._lock:
            if not self._running or generation != self._generation:
                return
            self._syncing = True
            self._schedule(self.pulse, self._pulse_off, generation)

    def _pulse_off(self, generation: int) -> None:
        with self._lock:
            if not self._running or generation != self._generation:
                return
            self._syncing = False
            self._schedule(max(self.interval - self.pulse, 0.0), self._pulse_on, generation)

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._generation += 1
            self._schedule(self.interval, self._pulse_on, self._generation)
        logger.debug("Sync indicator started (interval=%ss, pulse=%ss)", self.interval, self.pulse)

    def stop(self) -> None:
        with self._lock:
            self._running = False
            self._generation += 1
            timer, self._timer = self._timer, None
            self._syncing = False
        if timer is not None:
            timer.cancel()
