"""
Task model for the Resource Manager Simulator.

Represents a scripted task with its resource holdings, declared claims
and accumulated timing history.
"""

import numpy as np
from enum import Enum

from models.activity import Activity, ActivityKind, ActivitySequence


class TaskStatus(Enum):
    """Task states in the simulation."""
    ACTIVE = "ACTIVE"
    BLOCKED = "BLOCKED"
    TERMINATED = "TERMINATED"


class Task:
    """
    A task served by the resource manager.

    Resource types are 1-based in every public method, matching the
    input script. Holdings and claims are stored as numpy vectors.

    Attributes:
        task_id: 1-based task identifier
        status: Current task status
        allocation: Resources currently held [R]
        initial_claims: Claims declared by initiate activities [R]
        active_time: Cycles spent ACTIVE
        blocked_time: Cycles spent BLOCKED
        aborted: Set once the task has been aborted
        activities: The task's script
    """

    def __init__(self, task_id: int, num_resource_types: int):
        self.task_id = task_id
        self.status = TaskStatus.ACTIVE
        self.allocation = np.zeros(num_resource_types, dtype=int)
        self.initial_claims = np.zeros(num_resource_types, dtype=int)
        self.active_time = 0
        self.blocked_time = 0
        self.aborted = False
        self.activities = ActivitySequence()

    @property
    def current_activity(self) -> Activity:
        return self.activities.current

    @property
    def need(self) -> np.ndarray:
        """Remaining need vector: initial claims minus current allocation."""
        return self.initial_claims - self.allocation

    def add_activity(self, activity: Activity) -> None:
        """
        Append an activity to the task's script.

        Initiate activities record their claim immediately, so claims are
        known before the run begins.

        Args:
            activity: Activity to append
        """
        if activity.kind == ActivityKind.INITIATE:
            self.initial_claims[activity.resource_type - 1] = activity.quantity
        self.activities.append(activity)

    def add_resources(self, resource_type: int, quantity: int) -> None:
        self.allocation[resource_type - 1] += quantity

    def remove_resources(self, resource_type: int, quantity: int) -> None:
        self.allocation[resource_type - 1] -= quantity

    def block(self) -> None:
        self.status = TaskStatus.BLOCKED

    def activate(self) -> None:
        self.status = TaskStatus.ACTIVE

    def terminate(self) -> None:
        self.status = TaskStatus.TERMINATED

    def abort(self) -> None:
        """Terminate the task and mark it aborted for reporting."""
        self.terminate()
        self.aborted = True

    def is_active(self) -> bool:
        return self.status == TaskStatus.ACTIVE

    def is_terminated(self) -> bool:
        return self.status == TaskStatus.TERMINATED

    def cycle(self) -> None:
        """
        Advance the task's clock by one cycle.

        Called for every task on every cycle. An ACTIVE task ticks its
        current compute activity or moves past the current activity; a
        BLOCKED task only accrues blocked time.
        """
        if self.status == TaskStatus.ACTIVE:
            activity = self.activities.current
            if activity is not None and activity.needs_to_compute():
                activity.compute()
                if not activity.needs_to_compute():
                    self.activities.advance()
            else:
                self.activities.advance()
            self.active_time += 1
        elif self.status == TaskStatus.BLOCKED:
            self.blocked_time += 1

    def __repr__(self) -> str:
        return (
            f"Task(id={self.task_id}, status={self.status.value}, "
            f"alloc={self.allocation.tolist()}, claims={self.initial_claims.tolist()})"
        )
