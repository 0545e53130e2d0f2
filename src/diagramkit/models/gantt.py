"""Gantt chart element models."""

from __future__ import annotations

import enum
from typing import Optional

from diagramkit.models.base import Element, NonEmptyStr


class TaskStatus(str, enum.Enum):
    DONE = "done"
    ACTIVE = "active"
    CRIT = "crit"


class Task(Element):
    """A scheduled task.

    ``start`` is a date, a task id, or an ``after <id>`` dependency string;
    ``duration`` is a span such as ``7d`` or ``2w``. No status means the
    task is in the future.
    """

    id: NonEmptyStr
    label: NonEmptyStr
    start: NonEmptyStr
    duration: NonEmptyStr
    status: Optional[TaskStatus] = None


class GanttSection(Element):
    """A titled group of tasks."""

    title: NonEmptyStr
    tasks: tuple[Task, ...] = ()

    def with_task(self, task: Task) -> GanttSection:
        return self.model_copy(update={"tasks": self.tasks + (task,)})
