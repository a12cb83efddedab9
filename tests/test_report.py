"""
Metrics, report layout and command line tests.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from analysis.metrics import RunMetrics, TaskStats, percent
from analysis.report import format_report, format_metrics, HEADER
from simulator import compare_policies, main
from utils.logger import SimulatorLogger
from utils.scenario_loader import load_scenario


SCENARIOS_DIR = project_root / "tests" / "scenarios"


def test_percent_rounds_half_up():
    assert percent(3, 7) == 43
    assert percent(1, 8) == 13, "12.5 rounds up"
    assert percent(3, 11) == 27
    assert percent(0, 5) == 0
    assert percent(0, 0) == 0


def test_run_metrics_excludes_aborted_tasks():
    metrics = RunMetrics(policy="optimistic", cycles=10, tasks=[
        TaskStats(1, True, 2, 5),
        TaskStats(2, False, 4, 1),
        TaskStats(3, False, 3, 0),
    ])

    assert metrics.total_time == 8
    assert metrics.total_waiting_time == 1
    assert metrics.waiting_percent == 13
    assert metrics.completed_tasks == 2
    assert metrics.aborted_tasks == 1
    assert metrics.throughput == 0.2
    assert metrics.task(2).total_time == 5
    assert metrics.task(2).waiting_percent == 20


def test_throughput_with_no_cycles():
    assert RunMetrics(policy="banker", cycles=0).throughput == 0.0


def test_deadlock_report_layout():
    workload = load_scenario(str(SCENARIOS_DIR / "deadlock.txt"))
    optimistic, banker = compare_policies(workload, SimulatorLogger(quiet=True))

    report = format_report(optimistic, banker)

    assert report.split("\n") == [
        "",
        HEADER,
        "       Task 1      aborted" + " " * 6 + "       Task 1      4   0   0%",
        "       Task 2      5   1   20%" + " " * 2 + "       Task 2      7   3   43%",
        "       total       5   1   20%" + " " * 2 + "       total      11   3   27%",
        "",
    ]


def test_report_total_with_every_task_aborted():
    workload = load_scenario(str(SCENARIOS_DIR / "claim_violation.txt"))
    optimistic, banker = compare_policies(workload, SimulatorLogger(quiet=True))

    lines = format_report(optimistic, banker).split("\n")

    assert lines[2].endswith("       Task 1      aborted")
    assert lines[2].startswith("       Task 1      3   0   0%   ")
    assert lines[4] == "       total       6   0   0%" + " " * 3 + "       total       0   0   0%"


def test_single_policy_summary():
    metrics = RunMetrics(policy="banker", cycles=8, tasks=[TaskStats(1, False, 4, 0), TaskStats(2, False, 4, 3)])

    summary = format_metrics(metrics)

    assert "BANKER" in summary
    assert "       Task 2      7   3   43%" in summary
    assert "       cycles     8" in summary
    assert "throughput 0.2500 tasks/cycle" in summary


def test_cli_prints_comparison(capsys):
    exit_code = main([str(SCENARIOS_DIR / "deadlock.txt")])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "FIFO" in output and "BANKER'S" in output
    assert "During cycle 2-3 of FIFO algorithm Task 1 is aborted to resolve deadlock" in output
    assert "       Task 2      5   1   20%" in output


def test_cli_single_policy_and_log_file(tmp_path, capsys):
    log_path = tmp_path / "run.log"

    exit_code = main([
        str(SCENARIOS_DIR / "single_task.txt"),
        "--policy", "banker",
        "--verbose",
        "--log-file", str(log_path),
    ])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "[DEBUG] Cycle 1: [BANKER] Task 1 requests R1[2] - GRANTED (safe)" in output
    assert "SYSTEM STATE" in output
    assert "[DEBUG] BANKER event log:" in output
    assert "Cycle 2: T1 releases R1[2]" in output
    assert "Cycle 3: T1 - TERMINATED" in output
    log_text = log_path.read_text(encoding="utf-8")
    assert "Simulation Log" in log_text
    assert "       Task 1      3   0   0%" in log_text


def test_event_log_hidden_without_verbose(capsys):
    main([str(SCENARIOS_DIR / "single_task.txt"), "--policy", "optimistic"])

    assert "event log" not in capsys.readouterr().out


def test_cli_reports_load_failure(capsys):
    exit_code = main([str(SCENARIOS_DIR / "missing.txt")])

    output = capsys.readouterr().out
    assert exit_code == 1
    assert "[ERROR] Failed to load scenario" in output
