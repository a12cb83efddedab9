"""
Report formatting for the Resource Manager Simulator.

Renders run metrics as text. The two-column comparison puts the
optimistic (FIFO) run on the left and the banker run on the right.
"""

from typing import List

from analysis.metrics import RunMetrics, TaskStats

COLUMN_WIDTH = 32
HEADER = "                      FIFO                    BANKER'S"


def _task_history(stats: TaskStats) -> str:
    if stats.aborted:
        return "aborted"
    return f"{stats.total_time}   {stats.waiting_time}   {stats.waiting_percent}%"


def _task_cell(stats: TaskStats) -> str:
    return f"       Task {stats.task_id}      {_task_history(stats)}"


def _total_cell(metrics: RunMetrics) -> str:
    total_time = metrics.total_time
    space = "" if total_time > 9 else " "
    return (
        f"       total      {space}{total_time}   "
        f"{metrics.total_waiting_time}   {metrics.waiting_percent}%"
    )


def _two_columns(left: str, right: str) -> str:
    return left.ljust(COLUMN_WIDTH) + right


def format_report(optimistic: RunMetrics, banker: RunMetrics) -> str:
    """
    Format the side-by-side comparison of both runs.

    Each task line shows finishing time, waiting time and waiting
    percentage, or 'aborted'. The closing total line sums only the
    tasks that were not aborted.

    Args:
        optimistic: Metrics of the optimistic run
        banker: Metrics of the banker run

    Returns:
        Report text, framed by blank lines
    """
    lines: List[str] = ["", HEADER]

    for opt_task, bank_task in zip(optimistic.tasks, banker.tasks):
        lines.append(_two_columns(_task_cell(opt_task), _task_cell(bank_task)))

    lines.append(_two_columns(_total_cell(optimistic), _total_cell(banker)))
    lines.append("")
    return "\n".join(lines)


def format_metrics(metrics: RunMetrics) -> str:
    """Format a single run as one column, with cycle count and throughput."""
    lines = ["", f"                      {metrics.policy.upper()}"]
    for stats in metrics.tasks:
        lines.append(_task_cell(stats))
    lines.append(_total_cell(metrics))
    lines.append(f"       cycles     {metrics.cycles}")
    lines.append(f"       throughput {metrics.throughput:.4f} tasks/cycle")
    lines.append("")
    return "\n".join(lines)
