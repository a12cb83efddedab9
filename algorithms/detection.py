"""
Deadlock Detection Algorithm for the Resource Manager Simulator.

Used by the optimistic policy, which never refuses a request that fits
the free pool and only notices deadlock once it has happened.
"""

from models.system_state import SystemState
from models.activity import ActivityKind


def detect_deadlock(system_state: SystemState) -> bool:
    """
    Detect deadlock by counting blocked tasks.

    An ACTIVE task is always served in the cycle it is dispatched and so
    always makes progress. The system is therefore deadlocked exactly
    when every task that has not terminated is BLOCKED.

    Args:
        system_state: Current system state

    Returns:
        True if every remaining task is blocked
    """
    remaining = system_state.num_tasks - system_state.num_terminated
    return system_state.num_blocked > 0 and system_state.num_blocked == remaining


def pending_request_can_be_satisfied(system_state: SystemState) -> bool:
    """
    Check whether any blocked task's pending request fits the free pool.

    Args:
        system_state: Current system state

    Returns:
        True if at least one pending request could be granted now
    """
    for task in system_state.blocked_tasks():
        activity = task.current_activity
        if activity is None or activity.kind != ActivityKind.REQUEST:
            continue
        if system_state.available[activity.resource_type - 1] >= activity.quantity:
            return True
    return False
