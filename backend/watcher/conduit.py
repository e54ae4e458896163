"""
PollWatch Change Conduit.

Single-slot mailbox carrying "something changed" from the scanner
to the command driver.
Requires Python 3.11+.
"""

import queue


class ChangeConduit:
    """
    Capacity-1 coalescing notification channel.

    The producer never blocks: a notification sent while one is already
    pending is dropped, since the consumer only needs to know that at
    least one change happened. The consumer blocks until a notification
    exists. Safe for one producer thread and one consumer thread.
    """

    def __init__(self) -> None:
        self._slot: queue.Queue[None] = queue.Queue(maxsize=1)

    def notify(self) -> bool:
        """
        Post a change notification without blocking.

        Returns:
            True if posted, False if one was already pending (coalesced)
        """
        try:
            self._slot.put_nowait(None)
        except queue.Full:
            return False
        return True

    def wait(self, timeout: float | None = None) -> bool:
        """
        Block until a notification arrives and consume it.

        Args:
            timeout: Seconds to wait, or None to wait forever

        Returns:
            True if a notification was consumed, False on timeout
        """
        try:
            self._slot.get(timeout=timeout)
        except queue.Empty:
            return False
        return True

    def drain(self) -> int:
        """Discard all pending notifications and return how many there were."""
        drained = 0
        while True:
            try:
                self._slot.get_nowait()
            except queue.Empty:
                return drained
            drained += 1

    @property
    def pending(self) -> bool:
        """Check if a notification is waiting."""
        return not self._slot.empty()
