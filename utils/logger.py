"""
Logger utility for the Resource Manager Simulator.

Provides cycle-by-cycle logging with verbosity levels.
"""

from typing import List, Optional
from datetime import datetime


class SimulatorLogger:
    """
    Logger for simulation events and decisions.

    Format: "Cycle X: [POLICY] Task Y requests RZ[n] - GRANTED/BLOCKED (reason)"
    """

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None, quiet: bool = False):
        """
        Initialize logger.

        Args:
            verbose: Enable debug output
            log_file: Optional file path for logging
            quiet: Suppress console output (file output is unaffected)
        """
        self.verbose = verbose
        self.quiet = quiet
        self.log_file = log_file
        self.file_handle = None

        if self.log_file:
            self.file_handle = open(self.log_file, 'w', encoding='utf-8')
            self._write_header()

    def _write_header(self) -> None:
        """Write log file header."""
        if self.file_handle:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self.file_handle.write(f"Simulation Log - {timestamp}\n")
            self.file_handle.write("=" * 60 + "\n\n")

    def log(self, message: str, level: str = "info") -> None:
        """
        Log a message.

        Args:
            message: Message to log
            level: Log level (info, debug, warning, error)
        """
        if level == "debug" and not self.verbose:
            return

        formatted = self._format_message(message, level)

        if not self.quiet:
            print(formatted)

        if self.file_handle:
            self.file_handle.write(formatted + "\n")
            self.file_handle.flush()

    def _format_message(self, message: str, level: str) -> str:
        """Format message with level prefix."""
        if level == "error":
            return f"[ERROR] {message}"
        elif level == "warning":
            return f"[WARNING] {message}"
        elif level == "debug":
            return f"[DEBUG] {message}"
        else:
            return message

    def log_cycle(self, cycle: int, message: str, level: str = "debug") -> None:
        """Log a message tagged with its simulation cycle."""
        self.log(f"Cycle {cycle}: {message}", level)

    def log_request(
        self,
        cycle: int,
        policy: str,
        task_id: int,
        resource_type: int,
        amount: int,
        granted: bool,
        reason: str
    ) -> None:
        """
        Log a resource request decision.

        Args:
            cycle: Current simulation cycle
            policy: Policy being simulated
            task_id: Task ID
            resource_type: 1-based resource type
            amount: Amount requested
            granted: Whether request was granted
            reason: Reason for decision
        """
        status = "GRANTED" if granted else "BLOCKED"
        message = f"[{policy.upper()}] Task {task_id} requests R{resource_type}[{amount}] - {status} ({reason})"
        self.log_cycle(cycle, message)

    def log_release(self, cycle: int, policy: str, task_id: int, resource_type: int, amount: int) -> None:
        self.log_cycle(cycle, f"[{policy.upper()}] Task {task_id} releases R{resource_type}[{amount}]")

    def log_abort(self, reason: str) -> None:
        """Abort reasons are always reported, framed by a blank line."""
        self.log(f"\n{reason}")

    def log_deadlock(self, cycle: int, blocked_ids: List[int]) -> None:
        """
        Log deadlock detection.

        Args:
            cycle: Current simulation cycle
            blocked_ids: IDs of the tasks blocked in the deadlock
        """
        ids_str = ", ".join(f"T{task_id}" for task_id in blocked_ids)
        self.log_cycle(cycle, f"DEADLOCK DETECTED - Blocked tasks: [{ids_str}]")

    def log_system_state(self, cycle: int, state_str: str) -> None:
        """
        Log system state snapshot.

        Args:
            cycle: Current simulation cycle
            state_str: Formatted system state
        """
        if self.verbose:
            self.log_cycle(cycle, f"System State:\n{state_str}")

    def close(self) -> None:
        """Close log file if open."""
        if self.file_handle:
            self.file_handle.close()
            self.file_handle = None

    def __del__(self):
        """Cleanup on destruction."""
        self.close()
