"""
Event Model for the Resource Manager Simulator.

Defines event types for tracking simulation actions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EventType(Enum):
    """Types of events in the simulation."""
    ALLOCATION = "allocation"
    DENIAL = "denial"
    RELEASE = "release"
    ABORT = "abort"
    DEADLOCK = "deadlock"
    FINISH = "finish"


@dataclass
class SimulationEvent:
    """
    Represents a single event in the simulation.

    Attributes:
        cycle: Simulation cycle when event occurred
        event_type: Type of event
        task_id: Task involved in event (-1 for system-wide events)
        resource_type: Resource type involved (if applicable)
        amount: Resource amount involved (if applicable)
        message: Human-readable description
        reason: Reason for denial/abort (if applicable)
    """
    cycle: int
    event_type: EventType
    task_id: int
    resource_type: Optional[int] = None
    amount: Optional[int] = None
    message: str = ""
    reason: str = ""

    def __str__(self) -> str:
        """Format event for logging."""
        base = f"Cycle {self.cycle}: T{self.task_id}"

        if self.event_type == EventType.ALLOCATION:
            return f"{base} requests R{self.resource_type}[{self.amount}] - GRANTED ({self.reason})"
        elif self.event_type == EventType.DENIAL:
            return f"{base} requests R{self.resource_type}[{self.amount}] - BLOCKED ({self.reason})"
        elif self.event_type == EventType.RELEASE:
            return f"{base} releases R{self.resource_type}[{self.amount}]"
        elif self.event_type == EventType.ABORT:
            return f"{base} - ABORTED ({self.reason})"
        elif self.event_type == EventType.DEADLOCK:
            return f"Cycle {self.cycle}: DEADLOCK DETECTED ({self.message})"
        elif self.event_type == EventType.FINISH:
            return f"{base} - TERMINATED"
        else:
            return f"{base} - {self.event_type.value}: {self.message}"


@dataclass
class EventLog:
    """Collection of simulation events."""
    events: list = None

    def __post_init__(self):
        if self.events is None:
            self.events = []

    def add(self, event: SimulationEvent) -> None:
        """Add an event to the log."""
        self.events.append(event)

    def get_events_by_type(self, event_type: EventType) -> list:
        """Get all events of a specific type."""
        return [e for e in self.events if e.event_type == event_type]

    def display(self) -> str:
        """Format all events for display."""
        return "\n".join(str(event) for event in self.events)
