"""
System State model for the Resource Manager Simulator.

Holds everything one resource manager owns during a single run: the free
resource pool, the released-resources staging vector, the blocked-task
FIFO and the task set itself.
"""

import numpy as np
from collections import deque
from typing import Deque, List

from models.task import Task, TaskStatus


class SystemState:
    """
    State owned by a single resource manager run.

    Attributes:
        tasks: All tasks in the run, in task-id order
        total_units: [R] Units of each resource type present in the system
        available: [R] Free units not held by any task
        released: [R] Units released this cycle, reclaimed at cycle end
        blocked_queue: FIFO of tasks waiting on a request
        num_blocked: Number of tasks currently BLOCKED
        num_terminated: Number of tasks TERMINATED (normally or aborted)
        cycle_num: Number of cycles completed so far
    """

    def __init__(self, total_units: List[int], tasks: List[Task]):
        self.tasks = tasks
        self.total_units = np.array(total_units, dtype=int)
        self.available = self.total_units.copy()
        self.released = np.zeros(len(total_units), dtype=int)
        self.blocked_queue: Deque[Task] = deque()
        self.num_blocked = 0
        self.num_terminated = 0
        self.cycle_num = 0

    @property
    def num_tasks(self) -> int:
        return len(self.tasks)

    @property
    def num_resources(self) -> int:
        return len(self.total_units)

    @property
    def allocation_matrix(self) -> np.ndarray:
        """Get allocation matrix [T][R]."""
        if not self.tasks:
            return np.zeros((0, self.num_resources), dtype=int)
        return np.array([task.allocation for task in self.tasks], dtype=int)

    def take_resources(self, resource_type: int, quantity: int) -> None:
        self.available[resource_type - 1] -= quantity

    def return_resources(self, resource_type: int, quantity: int) -> None:
        self.available[resource_type - 1] += quantity

    def stage_release(self, resource_type: int, quantity: int) -> None:
        """Hold released units until the end of the cycle."""
        self.released[resource_type - 1] += quantity

    def reclaim_released_resources(self) -> None:
        """Move all staged releases into the free pool."""
        self.available += self.released
        self.released[:] = 0

    def block_task(self, task: Task) -> None:
        """Block a task and append it to the back of the blocked FIFO."""
        task.block()
        self.blocked_queue.append(task)
        self.num_blocked += 1

    def activate_task(self, task: Task) -> None:
        if task.status == TaskStatus.BLOCKED:
            self.num_blocked -= 1
        task.activate()

    def terminate_task(self, task: Task) -> None:
        task.terminate()
        self.num_terminated += 1

    def active_tasks(self) -> List[Task]:
        """ACTIVE tasks in task-array order."""
        return [task for task in self.tasks if task.status == TaskStatus.ACTIVE]

    def blocked_tasks(self) -> List[Task]:
        """BLOCKED tasks in task-array order."""
        return [task for task in self.tasks if task.status == TaskStatus.BLOCKED]

    def all_terminated(self) -> bool:
        return self.num_terminated >= self.num_tasks

    def display(self) -> str:
        """
        Generate readable string representation of system state.

        Returns:
            Formatted string showing free pool, staged releases and task vectors
        """
        output = []
        output.append("\n" + "=" * 60)
        output.append(f"SYSTEM STATE (cycle {self.cycle_num})")
        output.append("=" * 60)

        output.append(f"\nAvailable: {self.available.tolist()}")
        output.append(f"Staged releases: {self.released.tolist()}")
        output.append(f"Blocked queue: {[task.task_id for task in self.blocked_queue]}")

        output.append("\nTasks:")
        for task in self.tasks:
            output.append(
                f"  T{task.task_id}: {task.status.value:10} "
                f"alloc={task.allocation.tolist()} "
                f"claims={task.initial_claims.tolist()} "
                f"need={task.need.tolist()}"
            )

        output.append("=" * 60)
        return "\n".join(output)

    def assert_resource_conservation(self, context: str = "") -> None:
        """Verify resource conservation: held + available + staged = total for all resources.

        Args:
            context: Description of when this check is being run (for error messages)

        Raises:
            AssertionError: If resource conservation is violated
        """
        allocation_matrix = self.allocation_matrix

        for r_idx in range(self.num_resources):
            allocated = allocation_matrix[:, r_idx].sum()
            available = self.available[r_idx]
            staged = self.released[r_idx]
            total = self.total_units[r_idx]

            assert allocated + available + staged == total, (
                f"Resource conservation violated for R{r_idx + 1} {context}\n"
                f"  Held: {allocated}, Available: {available}, Staged: {staged}, Total: {total}\n"
                f"  Held + Available + Staged = {allocated + available + staged} != {total}"
            )

            assert available >= 0, (
                f"Negative available resources for R{r_idx + 1} {context}\n"
                f"  Available: {available}"
            )
