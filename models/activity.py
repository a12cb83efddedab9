"""
Activity model for the Resource Manager Simulator.

An activity is one instruction of a task's script. Each task owns an
ActivitySequence: an ordered instruction tape with a forward-only cursor.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class ActivityKind(Enum):
    """Instruction kinds accepted in a task script."""
    INITIATE = "initiate"
    REQUEST = "request"
    RELEASE = "release"
    COMPUTE = "compute"
    TERMINATE = "terminate"


@dataclass
class Activity:
    """
    A single scripted instruction.

    Operand meaning depends on the kind:
        initiate:  operand1 = resource type, operand2 = claim
        request:   operand1 = resource type, operand2 = quantity
        release:   operand1 = resource type, operand2 = quantity
        compute:   operand1 = remaining cycles (counts down), operand2 unused
        terminate: both unused
    """
    kind: ActivityKind
    operand1: int = 0
    operand2: int = 0

    @property
    def resource_type(self) -> int:
        return self.operand1

    @property
    def quantity(self) -> int:
        return self.operand2

    def needs_to_compute(self) -> bool:
        """True while a compute activity still has cycles left."""
        return self.kind == ActivityKind.COMPUTE and self.operand1 > 0

    def compute(self) -> None:
        """Tick a compute activity down by one cycle."""
        self.operand1 -= 1

    def __str__(self) -> str:
        return f"{self.kind.value} {self.operand1} {self.operand2}"


class ActivitySequence:
    """
    Append-only list of activities with an explicit cursor.

    The cursor only moves forward; once past the last activity,
    ``current`` is None.
    """

    def __init__(self, activities: Optional[List[Activity]] = None):
        self._activities: List[Activity] = list(activities or [])
        self._cursor = 0

    def append(self, activity: Activity) -> None:
        self._activities.append(activity)

    @property
    def current(self) -> Optional[Activity]:
        """Activity under the cursor, or None when the script is exhausted."""
        if self._cursor < len(self._activities):
            return self._activities[self._cursor]
        return None

    @property
    def position(self) -> int:
        return self._cursor

    def advance(self) -> None:
        """Move the cursor to the next activity."""
        if self._cursor < len(self._activities):
            self._cursor += 1

    def is_exhausted(self) -> bool:
        return self._cursor >= len(self._activities)

    def __len__(self) -> int:
        return len(self._activities)

    def __getitem__(self, index: int) -> Activity:
        return self._activities[index]
