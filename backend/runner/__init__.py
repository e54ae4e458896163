"""
PollWatch Runner Package.

Command execution driven by change notifications.
Requires Python 3.11+.
"""

from runner.driver import CommandDriver, DriverState, RunResult

__all__ = ["CommandDriver", "DriverState", "RunResult"]
