"""
Deadlock Avoidance Algorithm (Banker's Algorithm) for the Simulator.

Implements the safety check and request admission used by the banker
policy. The optimistic policy shares request admission with avoidance
switched off.
"""

import numpy as np
from collections import deque
from typing import Tuple

from models.system_state import SystemState
from models.task import Task, TaskStatus
from algorithms.recovery import abort_task


def is_safe_state(system_state: SystemState) -> bool:
    """
    Check if system is in a safe state using Banker's Algorithm.

    Algorithm:
    1. Work = Available, queue = all non-terminated tasks in array order
    2. Pop the front task; if Need <= Work, pretend it finishes:
       Work += Allocation, reset the starvation counter
    3. Otherwise push it to the back and bump the counter
    4. UNSAFE once the counter reaches the queue length, SAFE once the queue empties

    The order is fixed by the task array, so the result is deterministic.
    The system state is only read.

    Args:
        system_state: Current system state

    Returns:
        True if some ordering lets every remaining task reach its claim

    References:
        Silberschatz, A., Galvin, P. B., & Gagne, G. (2018).
        Operating System Concepts (10th ed.). Chapter 7.5: Deadlock Avoidance.
    """
    work = system_state.available.copy()
    queue = deque(
        task for task in system_state.tasks
        if task.status != TaskStatus.TERMINATED
    )

    tries = 0
    while queue:
        task = queue.popleft()

        if np.all(task.need <= work):
            work += task.allocation
            tries = 0
        else:
            queue.append(task)
            tries += 1
            if tries >= len(queue):
                return False

    return True


def handle_request(
    system_state: SystemState,
    task: Task,
    resource_type: int,
    quantity: int,
    avoidance: bool
) -> Tuple[bool, str]:
    """
    Try to satisfy a task's request.

    Steps:
    1. Avoidance only: request must not exceed Claim - Allocation, else abort
    2. Check: request <= available (if not, task is blocked)
    3. Tentatively allocate resources
    4. Avoidance only: run the safety check; if unsafe, roll back and block
    5. Grant stands; a BLOCKED task is reactivated

    Args:
        system_state: Current system state
        task: Task making the request
        resource_type: 1-based resource type
        quantity: Number of units requested
        avoidance: Run claim validation and the safety check

    Returns:
        Tuple of (granted, reason_string)
    """
    if avoidance:
        max_request = task.initial_claims[resource_type - 1] - task.allocation[resource_type - 1]
        if quantity > max_request:
            abort_task(system_state, task)
            cycle = f"{system_state.cycle_num}-{system_state.cycle_num + 1}"
            return False, (
                f"During cycle {cycle} of Banker's algorithm Task {task.task_id}'s "
                f"request exceeds its claim; aborted;"
            )

    available = system_state.available[resource_type - 1]
    if available < quantity:
        if task.status == TaskStatus.ACTIVE:
            system_state.block_task(task)
        return False, f"insufficient resources (requested: {quantity}, available: {available})"

    # Tentative grant; rolled back through the same accessors if unsafe
    system_state.take_resources(resource_type, quantity)
    task.add_resources(resource_type, quantity)

    if avoidance and not is_safe_state(system_state):
        system_state.return_resources(resource_type, quantity)
        task.remove_resources(resource_type, quantity)

        if task.status == TaskStatus.ACTIVE:
            system_state.block_task(task)
        return False, "unsafe"

    if task.status == TaskStatus.BLOCKED:
        system_state.activate_task(task)

    return True, "safe" if avoidance else "available"


def handle_initiate(
    system_state: SystemState,
    task: Task,
    resource_type: int,
    claim: int
) -> Tuple[bool, str]:
    """
    Validate an initiate claim against the units present in the system.

    A claim larger than the total units of its type can never be met, so
    the task is aborted before it runs.

    Returns:
        Tuple of (accepted, reason_string)
    """
    units = system_state.total_units[resource_type - 1]
    if claim > units:
        abort_task(system_state, task)
        return False, (
            f"Banker aborts task {task.task_id} before run begins; claim for "
            f"resource {resource_type} ({claim}) exceeds number of units present ({units})"
        )
    return True, "claim accepted"
