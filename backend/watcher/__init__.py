"""
PollWatch Watcher Package.

Polling file system monitoring and change notification.
Requires Python 3.11+.
"""

from watcher.conduit import ChangeConduit
from watcher.scanner import DirectoryScanner
from watcher.snapshot import ScanError, Snapshot, SnapshotDiff, has_changed, take_snapshot

__all__ = [
    "ChangeConduit",
    "DirectoryScanner",
    "ScanError",
    "Snapshot",
    "SnapshotDiff",
    "has_changed",
    "take_snapshot",
]
