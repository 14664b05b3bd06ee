from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from scanstock_app.app.scheduler import ManualScheduler, TaskGroup, TkScheduler


def test_manual_scheduler_runs_due_tasks_in_order() -> None:
    scheduler = ManualScheduler()
    fired: list[tuple[str, int]] = []
    scheduler.call_later(300, lambda: fired.append(("b", scheduler.now_ms())))
    scheduler.call_later(100, lambda: fired.append(("a", scheduler.now_ms())))
    scheduler.call_later(900, lambda: fired.append(("c", scheduler.now_ms())))

    scheduler.advance(500)

    assert fired == [("a", 100), ("b", 300)]
    assert scheduler.now_ms() == 500
    assert len(scheduler.pending) == 1


def test_tasks_scheduled_by_callbacks_run_within_the_same_advance() -> None:
    scheduler = ManualScheduler()
    fired: list[int] = []
    scheduler.call_later(100, lambda: scheduler.call_later(100, lambda: fired.append(scheduler.now_ms())))

    scheduler.advance(250)

    assert fired == [200]


def test_cancelled_task_never_fires() -> None:
    scheduler = ManualScheduler()
    fired: list[str] = []
    task = scheduler.call_later(10, lambda: fired.append("x"))

    scheduler.cancel(task)
    scheduler.advance(100)

    assert fired == []
    assert task.cancelled and not task.fired


def test_task_group_cancel_all_and_by_label() -> None:
    scheduler = ManualScheduler()
    group = TaskGroup(scheduler)
    fired: list[str] = []
    group.schedule(10, lambda: fired.append("toast"), label="toast")
    group.schedule(10, lambda: fired.append("resolve"), label="resolve")

    group.cancel("toast")
    scheduler.advance(20)
    assert fired == ["resolve"]

    group.schedule(10, lambda: fired.append("late"))
    group.cancel_all()
    scheduler.advance(20)
    assert fired == ["resolve"]
    assert group.active == []


@dataclass
class FakeTkRoot:
    scheduled: dict[str, tuple[int, Callable[[], Any]]] = field(default_factory=dict)
    cancelled: list[str] = field(default_factory=list)

    def after(self, delay_ms: int, callback: Callable[[], Any]) -> str:
        handle = f"after#{len(self.scheduled)}"
        self.scheduled[handle] = (delay_ms, callback)
        return handle

    def after_cancel(self, handle: str) -> None:
        self.cancelled.append(handle)


def test_tk_scheduler_uses_after_and_after_cancel() -> None:
    root = FakeTkRoot()
    scheduler = TkScheduler(root)
    fired: list[str] = []

    first = scheduler.call_later(1000, lambda: fired.append("first"))
    second = scheduler.call_later(3000, lambda: fired.append("second"))
    scheduler.cancel(second)
    root.scheduled[first.handle][1]()
    root.scheduled[second.handle][1]()

    assert root.scheduled[first.handle][0] == 1000
    assert root.cancelled == [second.handle]
    assert fired == ["first"]
    assert first.fired
