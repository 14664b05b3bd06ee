from __future__ import annotations

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


@dataclass(eq=False)
class ScheduledTask:
    due_ms: int
    callback: Callback
    label: str = ""
    cancelled: bool = False
    fired: bool = False
    handle: Any = None

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class Scheduler(Protocol):
    def now_ms(self) -> int: ...

    def call_later(self, delay_ms: int, callback: Callback, label: str = "") -> ScheduledTask: ...

    def cancel(self, task: ScheduledTask) -> None: ...


class ManualScheduler:
    """Virtual-clock scheduler. Time only moves when ``advance`` is called."""

    def __init__(self, start_ms: int = 0) -> None:
        self._now = start_ms
        self._seq = itertools.count()
        self._queue: list[tuple[int, int, ScheduledTask]] = []

    def now_ms(self) -> int:
        return self._now

    def call_later(self, delay_ms: int, callback: Callback, label: str = "") -> ScheduledTask:
        task = ScheduledTask(due_ms=self._now + max(0, int(delay_ms)), callback=callback, label=label)
        heapq.heappush(self._queue, (task.due_ms, next(self._seq), task))
        return task

    def cancel(self, task: ScheduledTask) -> None:
        task.cancelled = True

    def advance(self, delay_ms: int) -> None:
        target = self._now + max(0, int(delay_ms))
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            if not task.active:
                continue
            self._now = due
            task.fired = True
            task.callback()
        self._now = target

    @property
    def pending(self) -> list[ScheduledTask]:
        return [task for _, _, task in sorted(self._queue) if task.active]


class TkScheduler:
    """Schedules callbacks on a Tk root through ``after``/``after_cancel``."""

    def __init__(self, root: Any) -> None:
        self.root = root

    def now_ms(self) -> int:
        return int(time.monotonic() * 1000)

    def call_later(self, delay_ms: int, callback: Callback, label: str = "") -> ScheduledTask:
        delay = max(0, int(delay_ms))
        task = ScheduledTask(due_ms=self.now_ms() + delay, callback=callback, label=label)

        def fire() -> None:
            if not task.active:
                return
            task.fired = True
            callback()

        task.handle = self.root.after(delay, fire)
        return task

    def cancel(self, task: ScheduledTask) -> None:
        if not task.active:
            return
        task.cancelled = True
        if task.handle is not None:
            self.root.after_cancel(task.handle)


@dataclass
class TaskGroup:
    """Tasks owned by one controller, cancelled together on reset or teardown."""

    scheduler: Scheduler
    _tasks: list[ScheduledTask] = field(default_factory=list)

    def schedule(self, delay_ms: int, callback: Callback, label: str = "") -> ScheduledTask:
        self._tasks = [task for task in self._tasks if task.active]
        task = self.scheduler.call_later(delay_ms, callback, label)
        self._tasks.append(task)
        return task

    def cancel(self, label: str) -> None:
        for task in self._tasks:
            if task.label == label and task.active:
                self.scheduler.cancel(task)

    def cancel_all(self) -> None:
        cancelled = 0
        for task in self._tasks:
            if task.active:
                self.scheduler.cancel(task)
                cancelled += 1
        self._tasks.clear()
        if cancelled:
            logger.debug("scheduled_tasks_cancelled", extra={"count": cancelled})

    @property
    def active(self) -> list[ScheduledTask]:
        return [task for task in self._tasks if task.active]
