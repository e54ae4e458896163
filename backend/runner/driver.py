"""
PollWatch Command Driver.

Runs the target command once per accepted change notification.
Requires Python 3.11+.
"""

import subprocess
import time
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from utils.logger import LoggerMixin
from watcher.conduit import ChangeConduit


class DriverState(str, Enum):
    """Phases of the driver loop."""

    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"


@dataclass
class RunResult:
    """Outcome of one command execution."""

    returncode: int | None
    duration: float
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Check if the command ran and exited with status 0."""
        return self.returncode == 0


class CommandDriver(LoggerMixin):
    """
    Serializes command executions behind the change conduit.

    Loop: Idle (wait for a notification) -> Running (command to
    completion) -> Draining (discard notifications posted during the
    run) -> Idle. The command never runs concurrently with itself, and
    changes made while it runs do not trigger a re-run.
    """

    def __init__(self, command: Sequence[str], conduit: ChangeConduit) -> None:
        """
        Initialize the driver.

        Args:
            command: Argument vector, program first
            conduit: Channel the scanner notifies
        """
        if not command:
            raise ValueError("command must not be empty")

        self._command = list(command)
        self._conduit = conduit
        self._state = DriverState.IDLE

    def execute(self) -> RunResult:
        """
        Run the command and wait for it to exit.

        stdout and stderr are inherited from this process; stdin is the
        null device. No timeout is applied.
        """
        start = time.perf_counter()
        try:
            completed = subprocess.run(self._command, stdin=subprocess.DEVNULL)
        except OSError as e:
            result = RunResult(
                returncode=None, duration=time.perf_counter() - start, error=str(e)
            )
            self.log.error("command_failed", command=self._command, error=result.error)
            return result

        result = RunResult(
            returncode=completed.returncode, duration=time.perf_counter() - start
        )
        if not result.ok:
            result.error = f"exit status {completed.returncode}"
            self.log.error(
                "command_failed",
                command=self._command,
                returncode=completed.returncode,
            )
        return result

    def run_once(self, timeout: float | None = None) -> RunResult | None:
        """
        Wait for one change notification and handle it.

        Args:
            timeout: Seconds to wait for a notification, None for forever

        Returns:
            RunResult of the execution, or None if the wait timed out
        """
        if not self._conduit.wait(timeout):
            return None

        self.log.info("change_detected", running=self._command)

        self._state = DriverState.RUNNING
        try:
            result = self.execute()
        finally:
            self._state = DriverState.DRAINING
            dropped = self._conduit.drain()
            self._state = DriverState.IDLE

        if dropped:
            self.log.debug("notifications_drained", count=dropped)
        return result

    def run(self) -> None:
        """Handle change notifications forever."""
        while True:
            self.run_once()

    @property
    def command(self) -> list[str]:
        """The argument vector being run."""
        return list(self._command)

    @property
    def state(self) -> DriverState:
        """Current phase of the loop."""
        return self._state
