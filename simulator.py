#!/usr/bin/env python3
"""
Resource Manager Simulator
Main entry point for the simulation system.

Runs the same task script under an optimistic (detect and recover)
resource manager and a banker (avoidance) resource manager, then
reports per-task and overall timing side by side.
"""

import argparse
import sys
from typing import List, Optional, Tuple

from models.activity import ActivityKind
from models.system_state import SystemState
from models.task import Task, TaskStatus
from models.workload import Workload
from utils.scenario_loader import load_scenario, ScenarioLoadError
from utils.logger import SimulatorLogger
from algorithms.avoidance import handle_request, handle_initiate
from algorithms.detection import detect_deadlock
from algorithms.recovery import recover_from_deadlock
from analysis.events import EventLog, SimulationEvent, EventType
from analysis.metrics import RunMetrics
from analysis.report import format_report, format_metrics

OPTIMISTIC = "optimistic"
BANKER = "banker"
POLICIES = (OPTIMISTIC, BANKER)


class ResourceManager:
    """
    Drives one simulation run to completion under a single policy.

    Cycle ordering (deterministic):
    1. Snapshot the ACTIVE tasks
    2. Retry blocked requests, FIFO order, one pass over the current queue
    3. Serve the snapshot in task-array order
    4. Optimistic only: detect deadlock and abort blocked tasks to recover
    5. Reclaim resources released during this cycle
    6. Clock every task
    7. Advance the cycle counter
    """

    def __init__(
        self,
        system_state: SystemState,
        policy: str,
        logger: Optional[SimulatorLogger] = None,
        event_log: Optional[EventLog] = None,
        check_invariants: bool = False
    ):
        if policy not in POLICIES:
            raise ValueError(f"Unknown policy '{policy}', expected one of {POLICIES}")
        self.state = system_state
        self.policy = policy
        self.logger = logger or SimulatorLogger()
        self.event_log = event_log if event_log is not None else EventLog()
        self.check_invariants = check_invariants

    @property
    def avoidance(self) -> bool:
        return self.policy == BANKER

    def run(self) -> RunMetrics:
        """
        Cycle until every task has terminated.

        Returns:
            Final metrics of the run
        """
        while not self.state.all_terminated():
            self.cycle()
        self.logger.log(f"{self.policy.upper()} event log:\n{self.event_log.display()}", "debug")
        return RunMetrics.from_tasks(self.policy, self.state.cycle_num, self.state.tasks)

    def cycle(self) -> None:
        """Simulate one cycle of the tasks being served."""
        active_tasks = self.state.active_tasks()

        self._serve_blocked_tasks()
        self._serve_active_tasks(active_tasks)

        if not self.avoidance:
            self._handle_deadlock()

        self.state.reclaim_released_resources()

        for task in self.state.tasks:
            task.cycle()

        if self.check_invariants:
            self.state.assert_resource_conservation(f"after cycle {self.state.cycle_num}")
            self.logger.log_system_state(self.state.cycle_num, self.state.display())

        self.state.cycle_num += 1

    def _serve_blocked_tasks(self) -> None:
        """Retry the pending request of every task in the blocked FIFO once."""
        queue = self.state.blocked_queue
        pass_length = len(queue)

        for _ in range(pass_length):
            task = queue.popleft()

            # Aborted tasks drop out of the queue here
            if task.status != TaskStatus.BLOCKED:
                continue

            if not self._request(task) and task.status == TaskStatus.BLOCKED:
                queue.append(task)

    def _serve_active_tasks(self, active_tasks: List[Task]) -> None:
        for task in active_tasks:
            activity = task.current_activity
            if activity is None:
                continue

            if activity.kind == ActivityKind.REQUEST:
                self._request(task)
            elif activity.kind == ActivityKind.RELEASE:
                self._release(task, activity.resource_type, activity.quantity)
            elif activity.kind == ActivityKind.TERMINATE:
                self.state.terminate_task(task)
                self._record(EventType.FINISH, task.task_id)
            elif activity.kind == ActivityKind.INITIATE:
                if self.avoidance:
                    accepted, reason = handle_initiate(
                        self.state, task, activity.resource_type, activity.quantity
                    )
                    if not accepted:
                        self._report_abort(task, reason)

    def _request(self, task: Task) -> bool:
        """Run request admission for the task's current activity."""
        activity = task.current_activity
        resource_type = activity.resource_type
        quantity = activity.quantity

        granted, reason = handle_request(
            self.state, task, resource_type, quantity, self.avoidance
        )

        if task.aborted:
            self._report_abort(task, reason)
            return False

        self.logger.log_request(
            self.state.cycle_num, self.policy, task.task_id,
            resource_type, quantity, granted, reason
        )
        self._record(
            EventType.ALLOCATION if granted else EventType.DENIAL,
            task.task_id, resource_type, quantity, reason=reason
        )
        return granted

    def _release(self, task: Task, resource_type: int, quantity: int) -> None:
        """Take units back from the task; they reach the free pool at cycle end."""
        task.remove_resources(resource_type, quantity)
        self.state.stage_release(resource_type, quantity)

        self.logger.log_release(self.state.cycle_num, self.policy, task.task_id, resource_type, quantity)
        self._record(EventType.RELEASE, task.task_id, resource_type, quantity)

    def _handle_deadlock(self) -> None:
        """Break a deadlock by aborting blocked tasks."""
        if not detect_deadlock(self.state):
            return

        blocked_ids = [task.task_id for task in self.state.blocked_tasks()]
        self.logger.log_deadlock(self.state.cycle_num, blocked_ids)
        self._record(
            EventType.DEADLOCK, -1,
            message=f"blocked tasks: {blocked_ids}"
        )

        cycle = f"{self.state.cycle_num}-{self.state.cycle_num + 1}"
        for task_id in recover_from_deadlock(self.state):
            reason = f"During cycle {cycle} of FIFO algorithm Task {task_id} is aborted to resolve deadlock"
            self._report_abort(self.state.tasks[task_id - 1], reason)

    def _report_abort(self, task: Task, reason: str) -> None:
        self.logger.log_abort(reason)
        self._record(EventType.ABORT, task.task_id, reason=reason)

    def _record(
        self,
        event_type: EventType,
        task_id: int,
        resource_type: Optional[int] = None,
        amount: Optional[int] = None,
        message: str = "",
        reason: str = ""
    ) -> None:
        self.event_log.add(SimulationEvent(
            cycle=self.state.cycle_num,
            event_type=event_type,
            task_id=task_id,
            resource_type=resource_type,
            amount=amount,
            message=message,
            reason=reason
        ))


def run_simulation(
    workload: Workload,
    policy: str,
    logger: Optional[SimulatorLogger] = None,
    check_invariants: bool = False
) -> Tuple[RunMetrics, EventLog]:
    """
    Run the workload to completion under one policy.

    The run gets its own freshly built task set and system state.

    Args:
        workload: Parsed scenario
        policy: 'optimistic' or 'banker'
        logger: Logger instance (a console logger if omitted)
        check_invariants: Verify resource conservation after every cycle

    Returns:
        Tuple of (RunMetrics, EventLog)
    """
    system_state = SystemState(workload.total_units, workload.build_tasks())
    event_log = EventLog()
    manager = ResourceManager(system_state, policy, logger, event_log, check_invariants)
    metrics = manager.run()
    return metrics, event_log


def compare_policies(
    workload: Workload,
    logger: Optional[SimulatorLogger] = None,
    check_invariants: bool = False
) -> Tuple[RunMetrics, RunMetrics]:
    """
    Run the optimistic policy and then the banker policy on independent clones.

    Returns:
        Tuple of (optimistic metrics, banker metrics)
    """
    optimistic, _ = run_simulation(workload, OPTIMISTIC, logger, check_invariants)
    banker, _ = run_simulation(workload, BANKER, logger, check_invariants)
    return optimistic, banker


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the simulator."""
    parser = argparse.ArgumentParser(
        description='Resource Manager Simulator (optimistic vs. banker)'
    )
    parser.add_argument(
        'scenario',
        type=str,
        help='Path to the task script'
    )
    parser.add_argument(
        '--policy',
        choices=[OPTIMISTIC, BANKER, 'both'],
        default='both',
        help='Policy to simulate (default: both, side by side)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log every cycle and verify resource conservation'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write log output to this file'
    )

    args = parser.parse_args(argv)

    logger = SimulatorLogger(verbose=args.verbose, log_file=args.log_file)

    try:
        workload = load_scenario(args.scenario)
    except ScenarioLoadError as e:
        logger.log(f"Failed to load scenario: {e}", "error")
        logger.close()
        return 1

    if args.policy == 'both':
        optimistic, banker = compare_policies(workload, logger, check_invariants=args.verbose)
        logger.log(format_report(optimistic, banker))
    else:
        metrics, _ = run_simulation(workload, args.policy, logger, check_invariants=args.verbose)
        logger.log(format_metrics(metrics))

    logger.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
