from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from scanstock_app.app.scheduler import Scheduler, TaskGroup

from .outcomes import Toast


@dataclass
class NotificationCenter:
    """Transient toasts, each dismissed by a scheduled task."""

    scheduler: Scheduler
    toasts: list[Toast] = field(default_factory=list)
    _tasks: TaskGroup | None = None

    def __post_init__(self) -> None:
        self._tasks = TaskGroup(self.scheduler)

    def push(self, toast: Toast) -> Toast:
        self.toasts.append(toast)
        self._tasks.schedule(toast.duration_ms, lambda: self.dismiss(toast), label="toast")
        return toast

    def dismiss(self, toast: Toast) -> None:
        if toast in self.toasts:
            self.toasts.remove(toast)

    def clear(self) -> None:
        self._tasks.cancel_all()
        self.toasts.clear()

    def render(self) -> dict[str, Any]:
        return {
            "count": len(self.toasts),
            "messages": [{"level": toast.level, "message": toast.message} for toast in self.toasts],
        }
