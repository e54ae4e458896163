"""
PollWatch Command Line Entry Point.

Re-runs a command whenever a file under the current directory changes.
Requires Python 3.11+.

Usage:
    watch command [args...]
"""

import os
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from runner.driver import CommandDriver
from utils.config import get_settings
from utils.logger import configure_logging, get_logger
from watcher.conduit import ChangeConduit
from watcher.scanner import DirectoryScanner

USAGE = "Usage: watch command [args...]"


def _describe(error: ValidationError) -> str:
    problems = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    ]
    return f"{error.title} " + "; ".join(problems)


def main(argv: Sequence[str] | None = None) -> int:
    """
    Watch the working directory and drive the command.

    Args:
        argv: Command and its arguments, defaults to sys.argv[1:]

    Returns:
        Exit status; only returns on startup errors or Ctrl-C
    """
    command = list(sys.argv[1:] if argv is None else argv)
    if not command:
        print(USAGE, file=sys.stderr)
        return 1

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"watch: invalid settings: {_describe(e)}", file=sys.stderr)
        return 1

    configure_logging()
    logger = get_logger("watch")

    try:
        root = os.getcwd()
    except OSError as e:
        logger.error("cwd_unavailable", error=str(e))
        return 1

    conduit = ChangeConduit()
    scanner = DirectoryScanner(root, conduit)
    driver = CommandDriver(command, conduit)

    logger.info(
        "watch_started", root=root, command=command, version=settings.app_version
    )
    scanner.start()
    try:
        driver.run()
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
