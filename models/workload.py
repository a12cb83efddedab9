"""
Workload model for the Resource Manager Simulator.

A workload is the parsed input script. It can build any number of
independent task sets, one per policy run.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from models.activity import Activity, ActivityKind
from models.task import Task


# (kind, 1-based task index, operand1, operand2)
ActivityRecord = Tuple[ActivityKind, int, int, int]


@dataclass
class Workload:
    """
    Parsed simulation input.

    Attributes:
        num_tasks: Number of tasks in the script
        total_units: Units present for each resource type (type 1 first)
        records: Activity records in script order
    """
    num_tasks: int
    total_units: List[int]
    records: List[ActivityRecord] = field(default_factory=list)

    @property
    def num_resources(self) -> int:
        return len(self.total_units)

    def add_record(self, kind: ActivityKind, task_index: int, operand1: int, operand2: int) -> None:
        self.records.append((kind, task_index, operand1, operand2))

    def build_tasks(self) -> List[Task]:
        """
        Build a fresh task set from the script.

        Every call creates new Task and Activity objects, so task sets
        from separate calls never share mutable state.

        Returns:
            List of tasks ordered by task id
        """
        tasks = [Task(i + 1, self.num_resources) for i in range(self.num_tasks)]
        for kind, task_index, operand1, operand2 in self.records:
            tasks[task_index - 1].add_activity(Activity(kind, operand1, operand2))
        return tasks
