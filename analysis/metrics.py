"""
Metrics for the Resource Manager Simulator.

Turns the final task states of a run into per-task and aggregate
timing figures.
"""

import math
from dataclasses import dataclass, field
from typing import List

from models.task import Task


def percent(part: int, whole: int) -> int:
    """
    Integer percentage of part over whole, rounded half up.

    Returns 0 when whole is 0.
    """
    if whole <= 0:
        return 0
    return int(math.floor(100.0 * part / whole + 0.5))


@dataclass(frozen=True)
class TaskStats:
    """
    Final statistics for one task in one run.

    Attributes:
        task_id: Task identifier
        aborted: Whether the task was aborted
        active_time: Cycles spent ACTIVE
        blocked_time: Cycles spent BLOCKED
    """
    task_id: int
    aborted: bool
    active_time: int
    blocked_time: int

    @classmethod
    def from_task(cls, task: Task) -> "TaskStats":
        return cls(
            task_id=task.task_id,
            aborted=task.aborted,
            active_time=task.active_time,
            blocked_time=task.blocked_time,
        )

    @property
    def total_time(self) -> int:
        """Finishing time: active plus blocked cycles."""
        return self.active_time + self.blocked_time

    @property
    def waiting_time(self) -> int:
        return self.blocked_time

    @property
    def waiting_percent(self) -> int:
        return percent(self.blocked_time, self.total_time)


@dataclass
class RunMetrics:
    """
    Aggregate results of a single policy run.

    Aborted tasks are excluded from every time total.

    Attributes:
        policy: Policy name ('optimistic' or 'banker')
        cycles: Number of cycles the run took
        tasks: Per-task statistics in task-id order
    """
    policy: str
    cycles: int
    tasks: List[TaskStats] = field(default_factory=list)

    @classmethod
    def from_tasks(cls, policy: str, cycles: int, tasks: List[Task]) -> "RunMetrics":
        return cls(policy=policy, cycles=cycles, tasks=[TaskStats.from_task(t) for t in tasks])

    @property
    def completed_tasks(self) -> int:
        return sum(1 for t in self.tasks if not t.aborted)

    @property
    def aborted_tasks(self) -> int:
        return sum(1 for t in self.tasks if t.aborted)

    @property
    def total_time(self) -> int:
        return sum(t.total_time for t in self.tasks if not t.aborted)

    @property
    def total_waiting_time(self) -> int:
        return sum(t.waiting_time for t in self.tasks if not t.aborted)

    @property
    def waiting_percent(self) -> int:
        return percent(self.total_waiting_time, self.total_time)

    @property
    def throughput(self) -> float:
        """Completed tasks per simulated cycle."""
        if self.cycles == 0:
            return 0.0
        return self.completed_tasks / self.cycles

    def task(self, task_id: int) -> TaskStats:
        return self.tasks[task_id - 1]
