"""
Scenario loader tests.

Covers parsing of task scripts and rejection of malformed input.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from models.activity import ActivityKind
from utils.scenario_loader import load_scenario, parse_scenario, ScenarioLoadError


SCENARIOS_DIR = project_root / "tests" / "scenarios"


def test_load_single_task_scenario():
    workload = load_scenario(str(SCENARIOS_DIR / "single_task.txt"))

    assert workload.num_tasks == 1
    assert workload.total_units == [3]
    assert workload.records == [
        (ActivityKind.INITIATE, 1, 1, 3),
        (ActivityKind.REQUEST, 1, 1, 2),
        (ActivityKind.RELEASE, 1, 1, 2),
        (ActivityKind.TERMINATE, 1, 0, 0),
    ]


def test_parse_ignores_line_layout():
    """Tokens may be split across lines arbitrarily."""
    workload = parse_scenario("2 2\n 4 1 initiate 2 1 3\ninitiate 1\n2 1 terminate 1 0 0 terminate 2 0 0")

    assert workload.num_tasks == 2
    assert workload.total_units == [4, 1]
    tasks = workload.build_tasks()
    assert tasks[0].initial_claims.tolist() == [0, 1]
    assert tasks[1].initial_claims.tolist() == [3, 0]


def test_parse_accepts_uppercase_kinds():
    workload = parse_scenario("1 1 1 INITIATE 1 1 1 Terminate 1 0 0")
    assert workload.records[0][0] == ActivityKind.INITIATE


def test_missing_file():
    with pytest.raises(ScenarioLoadError, match="not found"):
        load_scenario(str(SCENARIOS_DIR / "does_not_exist.txt"))


@pytest.mark.parametrize("text, message", [
    ("", "end of scenario"),
    ("1 x 3", "Expected integer"),
    ("0 1 3", "Task count must be positive"),
    ("1 1 -2 terminate 1 0 0", "cannot be negative"),
    ("1 1 3 initiate 1 1", "end of scenario"),
    ("1 1 3 acquire 1 1 1 terminate 1 0 0", "Unknown activity type"),
    ("1 1 3 request 2 1 1 terminate 1 0 0", "out of range"),
    ("1 1 3 request 1 2 1 terminate 1 0 0", "invalid resource type"),
    ("1 1 3 release 1 1 -1 terminate 1 0 0", "cannot be negative"),
    ("1 1 3 compute 1 -1 0 terminate 1 0 0", "compute cycles"),
    ("2 1 3 terminate 1 0 0", "Task 2 has no activities"),
    ("1 1 3 initiate 1 1 3 request 1 1 1", "must end with terminate"),
])
def test_malformed_scripts_rejected(text, message):
    with pytest.raises(ScenarioLoadError, match=message):
        parse_scenario(text)


def test_terminate_operands_not_validated_as_resource_types():
    workload = parse_scenario("1 1 3 terminate 1 0 0")
    assert workload.records == [(ActivityKind.TERMINATE, 1, 0, 0)]
