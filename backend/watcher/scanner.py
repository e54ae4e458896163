"""
PollWatch Directory Scanner.

Polling-based detection of file additions, modifications and deletions.
Requires Python 3.11+.
"""

import os
import threading
import time
from pathlib import Path
from typing import Any

from utils.config import get_settings
from utils.logger import LoggerMixin
from watcher.conduit import ChangeConduit
from watcher.snapshot import ScanError, Snapshot, has_changed, take_snapshot


class DirectoryScanner(LoggerMixin):
    """
    Polls a directory tree and signals the conduit when it changes.

    The accepted snapshot starts empty and is replaced only when a poll
    finds a difference, so an unchanged tree never produces a second
    notification. Scan failures are logged and retried on the next tick.
    """

    def __init__(
        self,
        root: str | Path,
        conduit: ChangeConduit,
        interval: float | None = None,
    ) -> None:
        """
        Initialize the scanner.

        Args:
            root: Directory to watch (made absolute)
            conduit: Channel to notify on change
            interval: Seconds between polls, defaults to settings

        Raises:
            ValueError: If interval is not positive
        """
        if interval is None:
            interval = get_settings().watcher.poll_interval_seconds
        if interval <= 0:
            raise ValueError(f"poll interval must be positive, got {interval}")

        self._root = os.path.abspath(root)
        self._conduit = conduit
        self._interval = interval
        self._snapshot = Snapshot()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def poll_once(self) -> bool:
        """
        Run a single scan tick.

        Returns:
            True if a change was detected and the snapshot replaced
        """
        try:
            current = take_snapshot(self._root)
        except ScanError as e:
            self.log.warning("scan_failed", root=self._root, error=str(e))
            return False

        if not has_changed(self._snapshot, current):
            return False

        diff = self._snapshot.compare(current)
        posted = self._conduit.notify()
        self.log.debug(
            "tree_changed",
            added=len(diff.added),
            removed=len(diff.removed),
            modified=len(diff.modified),
            coalesced=not posted,
        )
        self._snapshot = current
        return True

    def run(self) -> None:
        """
        Poll forever at a fixed rate until stop() is called.

        Ticks are scheduled from a monotonic deadline so scan time does not
        stretch the cadence; ticks missed during a long scan are skipped.
        An unexpected error in one tick is logged and the loop carries on.
        """
        deadline = time.monotonic() + self._interval
        while not self._stop_event.wait(max(0.0, deadline - time.monotonic())):
            try:
                self.poll_once()
            except Exception as e:
                self.log.error("scan_tick_failed", root=self._root, error=repr(e))

            deadline += self._interval
            now = time.monotonic()
            if deadline <= now:
                missed = int((now - deadline) // self._interval) + 1
                deadline += missed * self._interval

    def start(self) -> None:
        """Start polling in a background thread."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self.run, name="directory-scanner", daemon=True
        )
        self._thread.start()

        self.log.info("scanner_started", root=self._root, interval=self._interval)

    def stop(self) -> None:
        """Stop polling after the current tick."""
        if self._thread is None:
            return

        self._stop_event.set()
        self._thread.join(timeout=5.0)
        self._thread = None
        self.log.info("scanner_stopped")

    @property
    def root(self) -> str:
        """Absolute path of the watched root."""
        return self._root

    @property
    def interval(self) -> float:
        """Seconds between polls."""
        return self._interval

    @property
    def snapshot(self) -> Snapshot:
        """The last accepted snapshot."""
        return self._snapshot

    @property
    def is_running(self) -> bool:
        """Check if the polling thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def __enter__(self) -> "DirectoryScanner":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.stop()
