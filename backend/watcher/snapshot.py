"""
PollWatch Directory Snapshots.

Point-in-time view of a directory tree as path -> mtime (whole seconds).
Requires Python 3.11+.
"""

import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


class ScanError(Exception):
    """The watched root itself could not be listed."""

    def __init__(self, root: str, cause: OSError) -> None:
        super().__init__(f"cannot scan {root}: {cause.strerror or cause}")
        self.root = root
        self.cause = cause


@dataclass
class SnapshotDiff:
    """Paths that differ between two snapshots."""

    added: set[str] = field(default_factory=set)
    removed: set[str] = field(default_factory=set)
    modified: set[str] = field(default_factory=set)

    @property
    def has_changes(self) -> bool:
        """Check if there are any changes."""
        return bool(self.added or self.removed or self.modified)

    @property
    def total_changes(self) -> int:
        """Get total number of changed paths."""
        return len(self.added) + len(self.removed) + len(self.modified)


class Snapshot(Mapping[str, int]):
    """
    Immutable mapping of absolute file path to modification time.

    Timestamps are whole seconds, so two writes to one file within the
    same second look like a single change.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, int] | None = None) -> None:
        self._entries = MappingProxyType(dict(entries or {}))

    def __getitem__(self, path: str) -> int:
        return self._entries[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Snapshot({len(self._entries)} files)"

    def compare(self, newer: "Snapshot") -> SnapshotDiff:
        """
        Compare this snapshot against a newer one.

        Args:
            newer: Snapshot taken after this one

        Returns:
            SnapshotDiff with added, removed and modified paths
        """
        diff = SnapshotDiff()
        for path, mtime in newer.items():
            previous = self._entries.get(path)
            if previous is None:
                diff.added.add(path)
            elif previous != mtime:
                diff.modified.add(path)
        diff.removed = {path for path in self._entries if path not in newer}
        return diff


def has_changed(old: Mapping[str, int], new: Mapping[str, int]) -> bool:
    """
    Decide whether the tree changed between two snapshots.

    A path that is new or carries a different mtime is a change;
    failing that, a path that disappeared is a change (deletion).
    """
    for path, mtime in new.items():
        if old.get(path) != mtime:
            return True
    return any(path not in new for path in old)


def _mtime_seconds(st: os.stat_result) -> int:
    return st.st_mtime_ns // 1_000_000_000


def _list_dir(path: str, entries: dict[str, int], pending: list[str]) -> None:
    with os.scandir(path) as it:
        for entry in it:
            try:
                if entry.is_dir(follow_symlinks=False):
                    pending.append(entry.path)
                else:
                    entries[entry.path] = _mtime_seconds(entry.stat(follow_symlinks=False))
            except OSError:
                continue


def take_snapshot(root: str | os.PathLike[str]) -> Snapshot:
    """
    Walk a directory tree and record every file's modification time.

    Directories are traversed but not recorded. Symbolic links are recorded
    with their own timestamp and never followed. Entries that fail to stat
    or list are skipped. The walk keeps its own stack of directories, so
    tree depth is not bounded by the interpreter's recursion limit.

    Args:
        root: Absolute path of the directory to walk

    Returns:
        Fresh Snapshot of the tree

    Raises:
        ScanError: If the root itself cannot be listed
    """
    root = os.fspath(root)
    entries: dict[str, int] = {}
    pending: list[str] = []

    try:
        _list_dir(root, entries, pending)
    except OSError as e:
        raise ScanError(root, e) from e

    while pending:
        path = pending.pop()
        try:
            _list_dir(path, entries, pending)
        except OSError:
            # Unreadable subdirectory: leave it out of this snapshot
            continue

    return Snapshot(entries)
