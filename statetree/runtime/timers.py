# statetree/runtime/timers.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from typing import Any, Callable, Optional, Sequence


class ScheduledTask:
    """
    A callback with a timer attached. ``delay()`` runs it once after a number
    of seconds, ``repeat()`` runs it every interval until stopped, ``now()``
    runs it immediately on the calling thread.

    Timed runs happen on daemon timer threads. Only one timer is armed at a
    time; arming a new one cancels the previous.
    """

    def __init__(self, callback: Callable[..., Any], args: Sequence[Any] = (), receiver: Any = None) -> None:
        """
        :param callback: The task to run.
        :param args: Positional arguments passed on every run.
        :param receiver: Optional object passed as the callback's first argument.
        """
        self.callback = callback
        self.args = tuple(args)
        self.receiver = receiver
        self.timeout: Optional[float] = None
        self.interval: Optional[float] = None
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        """True while a timer is armed."""
        with self._lock:
            return self._timer is not None

    def now(self) -> "ScheduledTask":
        """Run the task immediately."""
        if self.receiver is not None:
            self.callback(self.receiver, *self.args)
        else:
            self.callback(*self.args)
        return self

    def delay(self, seconds: float) -> "ScheduledTask":
        """Run the task once, ``seconds`` from now."""
        self.stop()
        with self._lock:
            self.timeout = seconds
            self.interval = None
            self._arm(seconds, repeat=False)
        return self

    def repeat(self, seconds: float) -> "ScheduledTask":
        """Run the task every ``seconds`` until stopped."""
        self.stop()
        with self._lock:
            self.interval = seconds
            self.timeout = None
            self._arm(seconds, repeat=True)
        return self

    def stop(self) -> "ScheduledTask":
        """Cancel the armed timer. reset() resumes with the same schedule."""
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        return self

    def reset(self) -> "ScheduledTask":
        """Re-arm the timer with the last delay or interval, postponing the next run."""
        self.stop()
        if self.timeout is not None:
            self.delay(self.timeout)
        elif self.interval is not None:
            self.repeat(self.interval)
        return self

    def destroy(self) -> None:
        """Stop the task and forget its schedule."""
        self.stop()
        self.timeout = None
        self.interval = None

    def _arm(self, seconds: float, repeat: bool) -> None:
        # Caller holds the lock.
        self._generation += 1
        generation = self._generation
        timer = threading.Timer(seconds, self._fire, args=(generation, seconds, repeat))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _fire(self, generation: int, seconds: float, repeat: bool) -> None:
        with self._lock:
            if generation != self._generation:
                return
            if repeat:
                self._arm(seconds, repeat=True)
            else:
                self._timer = None
        self.now()
