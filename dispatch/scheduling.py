# dispatch/scheduling.py
"""
Clocks and deferred callbacks for the dispatch engine.

The engine only needs ``now()`` and ``call_later(delay_s, fn, *args)``.
Two implementations:

  SimulatedScheduler  virtual time, advanced explicitly (tests, experiments)
  ThreadingScheduler  wall clock, one threading.Timer per task (live runs)

A callback that raises is logged and the scheduler keeps going.
"""
from __future__ import annotations
import heapq
import itertools
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, List, Optional, Set, Tuple

from config import DT_S

logger = logging.getLogger(__name__)

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class ScheduledTask:
    def __init__(self, due: Any, callback: Callable[..., Any], args: Tuple[Any, ...]):
        self.due = due
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False
        self._timer: Optional[threading.Timer] = None
        self._on_cancel: Optional[Callable[["ScheduledTask"], None]] = None

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()
        if self._on_cancel is not None:
            self._on_cancel(self)

    def __repr__(self) -> str:
        name = getattr(self.callback, "__name__", repr(self.callback))
        return f"ScheduledTask({name}{self.args!r}, due={self.due})"


def _run(task: ScheduledTask) -> None:
    try:
        task.callback(*task.args)
    except Exception:
        logger.exception("Scheduled callback %r failed", task)


class SimulatedScheduler:
    def __init__(self, start: datetime = EPOCH):
        self.start = start
        self.t = 0.0  # seconds since start
        self._queue: List[Tuple[float, int, ScheduledTask]] = []
        self._seq = itertools.count()

    def now(self) -> datetime:
        return self.start + timedelta(seconds=self.t)

    def call_later(self, delay_s: float, callback: Callable[..., Any], *args: Any) -> ScheduledTask:
        if delay_s < 0:
            raise ValueError(f"delay must be >= 0, got {delay_s}")
        task = ScheduledTask(self.t + delay_s, callback, args)
        heapq.heappush(self._queue, (task.due, next(self._seq), task))
        return task

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due tasks in (due, insertion) order.

        Tasks scheduled by a callback for a time inside the window fire in
        the same call. Returns the number of callbacks run.
        """
        if seconds < 0:
            raise ValueError(f"cannot move the clock backwards ({seconds})")
        end = self.t + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= end:
            due, _, task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            self.t = max(self.t, due)
            task.fired = True
            _run(task)
            fired += 1
        self.t = end
        return fired

    def step(self) -> int:
        return self.advance(DT_S)

    def run(self, duration_s: float) -> None:
        while self.t < duration_s:
            self.step()

    def pending(self) -> int:
        return sum(1 for _, _, task in self._queue if task.pending)

    def cancel_all(self) -> None:
        for _, _, task in self._queue:
            task.cancel()
        self._queue.clear()


class ThreadingScheduler:
    def __init__(self):
        self._tasks: Set[ScheduledTask] = set()
        self._lock = threading.Lock()

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def call_later(self, delay_s: float, callback: Callable[..., Any], *args: Any) -> ScheduledTask:
        if delay_s < 0:
            raise ValueError(f"delay must be >= 0, got {delay_s}")
        task = ScheduledTask(self.now() + timedelta(seconds=delay_s), callback, args)
        timer = threading.Timer(delay_s, self._fire, args=(task,))
        timer.daemon = True
        task._timer = timer
        task._on_cancel = self._forget
        with self._lock:
            self._tasks.add(task)
        timer.start()
        return task

    def _forget(self, task: ScheduledTask) -> None:
        with self._lock:
            self._tasks.discard(task)

    def tracked(self) -> int:
        with self._lock:
            return len(self._tasks)

    def _fire(self, task: ScheduledTask) -> None:
        with self._lock:
            self._tasks.discard(task)
            if task.cancelled:
                return
            task.fired = True
        _run(task)

    def pending(self) -> int:
        with self._lock:
            return sum(1 for task in self._tasks if task.pending)

    def cancel_all(self) -> None:
        with self._lock:
            tasks = list(self._tasks)
            self._tasks.clear()
        for task in tasks:
            task.cancel()
