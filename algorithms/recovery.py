"""
Deadlock Recovery Algorithm for the Resource Manager Simulator.

Implements task termination (abort) and the optimistic policy's
deadlock recovery.
"""

from typing import List

from models.system_state import SystemState
from models.task import Task, TaskStatus


def abort_task(system_state: SystemState, task: Task) -> List[int]:
    """
    Abort a task and release all its resources.

    Task abort:
    - Set state to TERMINATED and mark it aborted
    - Keep the blocked/terminated counters consistent
    - Return held units straight to the free pool (not the staging vector)

    Args:
        system_state: Current system state
        task: Task to abort

    Returns:
        Units the task held, by resource type
    """
    if task.status == TaskStatus.BLOCKED:
        system_state.num_blocked -= 1

    task.abort()
    system_state.num_terminated += 1

    resources_held = task.allocation.tolist()
    for r_idx, amount in enumerate(resources_held):
        if amount:
            task.remove_resources(r_idx + 1, amount)
            system_state.return_resources(r_idx + 1, amount)

    return resources_held


def recover_from_deadlock(system_state: SystemState) -> List[int]:
    """
    Recover from deadlock by aborting blocked tasks.

    Victims are taken in task-array order, one at a time, until some
    remaining blocked request fits the free pool or no blocked task is
    left.

    Args:
        system_state: Current system state

    Returns:
        IDs of the aborted tasks, in abort order
    """
    from algorithms.detection import pending_request_can_be_satisfied

    aborted = []

    for task in system_state.tasks:
        if task.status != TaskStatus.BLOCKED:
            continue

        abort_task(system_state, task)
        aborted.append(task.task_id)

        if pending_request_can_be_satisfied(system_state):
            break

    return aborted
