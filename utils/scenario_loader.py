"""
Scenario Loader for the Resource Manager Simulator.

Loads and validates whitespace-separated task scripts:

    <tasks> <resource types> <units of type 1> ... <units of type R>
    <kind> <task> <operand1> <operand2>
    ...

Line breaks carry no meaning; the file is read as a token stream.
"""

from typing import Iterator, List

from models.activity import ActivityKind
from models.workload import Workload


class ScenarioLoadError(Exception):
    """Exception raised when scenario file cannot be loaded or is invalid."""
    pass


# Kinds whose first operand names a resource type
_RESOURCE_KINDS = (ActivityKind.INITIATE, ActivityKind.REQUEST, ActivityKind.RELEASE)


def load_scenario(file_path: str) -> Workload:
    """
    Load scenario from a script file.

    Args:
        file_path: Path to scenario file

    Returns:
        Parsed Workload

    Raises:
        ScenarioLoadError: If file cannot be loaded or is invalid
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            text = f.read()
    except FileNotFoundError:
        raise ScenarioLoadError(f"Scenario file not found: {file_path}")
    except OSError as e:
        raise ScenarioLoadError(f"Cannot read scenario file {file_path}: {e}")

    return parse_scenario(text)


def parse_scenario(text: str) -> Workload:
    """
    Parse scenario text into a Workload.

    Args:
        text: Full script contents

    Returns:
        Parsed Workload

    Raises:
        ScenarioLoadError: If the script is malformed
    """
    tokens = iter(text.split())

    num_tasks = _next_int(tokens, "task count")
    num_resources = _next_int(tokens, "resource type count")
    if num_tasks <= 0:
        raise ScenarioLoadError(f"Task count must be positive, got {num_tasks}")
    if num_resources <= 0:
        raise ScenarioLoadError(f"Resource type count must be positive, got {num_resources}")

    total_units = [
        _next_int(tokens, f"units of resource {r + 1}") for r in range(num_resources)
    ]
    for r_idx, units in enumerate(total_units):
        if units < 0:
            raise ScenarioLoadError(f"Resource {r_idx + 1}: unit count cannot be negative ({units})")

    workload = Workload(num_tasks=num_tasks, total_units=total_units)

    for kind_token in tokens:
        kind = _parse_kind(kind_token)
        task_index = _next_int(tokens, f"task number of '{kind_token}'")
        operand1 = _next_int(tokens, f"first operand of '{kind_token}'")
        operand2 = _next_int(tokens, f"second operand of '{kind_token}'")

        _validate_record(kind, task_index, operand1, operand2, num_tasks, num_resources)
        workload.add_record(kind, task_index, operand1, operand2)

    _validate_scripts(workload)
    return workload


def _next_int(tokens: Iterator[str], what: str) -> int:
    try:
        token = next(tokens)
    except StopIteration:
        raise ScenarioLoadError(f"Unexpected end of scenario while reading {what}")
    try:
        return int(token)
    except ValueError:
        raise ScenarioLoadError(f"Expected integer for {what}, got '{token}'")


def _parse_kind(token: str) -> ActivityKind:
    try:
        return ActivityKind(token.lower())
    except ValueError:
        raise ScenarioLoadError(f"Unknown activity type '{token}'")


def _validate_record(
    kind: ActivityKind,
    task_index: int,
    operand1: int,
    operand2: int,
    num_tasks: int,
    num_resources: int
) -> None:
    """
    Validate a single activity record.

    Raises:
        ScenarioLoadError: If the record is invalid
    """
    if task_index < 1 or task_index > num_tasks:
        raise ScenarioLoadError(
            f"{kind.value}: task {task_index} out of range (1..{num_tasks})"
        )

    if kind in _RESOURCE_KINDS:
        if operand1 < 1 or operand1 > num_resources:
            raise ScenarioLoadError(
                f"Task {task_index}: {kind.value} names invalid resource type {operand1} "
                f"(1..{num_resources})"
            )
        if operand2 < 0:
            raise ScenarioLoadError(
                f"Task {task_index}: {kind.value} amount cannot be negative ({operand2})"
            )

    elif kind == ActivityKind.COMPUTE:
        if operand1 < 0:
            raise ScenarioLoadError(
                f"Task {task_index}: compute cycles cannot be negative ({operand1})"
            )


def _validate_scripts(workload: Workload) -> None:
    """
    Every task needs a script that ends in terminate.

    Raises:
        ScenarioLoadError: If a task has no activities or never terminates
    """
    last_kind: List = [None] * workload.num_tasks
    for kind, task_index, _, _ in workload.records:
        last_kind[task_index - 1] = kind

    for t_idx, kind in enumerate(last_kind):
        if kind is None:
            raise ScenarioLoadError(f"Task {t_idx + 1} has no activities")
        if kind != ActivityKind.TERMINATE:
            raise ScenarioLoadError(
                f"Task {t_idx + 1}: script must end with terminate, ends with {kind.value}"
            )
