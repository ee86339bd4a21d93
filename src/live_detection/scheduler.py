"""
Cooperative frame scheduling.

A frame loop never blocks: each iteration asks the scheduler for the next
frame callback and returns. The handle it gets back is what teardown and
error paths cancel, so a stopped loop can never run against a released
camera or a closed window.
"""

import logging
from typing import Callable, Dict

import cv2

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameScheduler:
    """
    Frame-callback primitive, one callback batch per ``tick``.

    Callbacks requested while a tick runs are deferred to the next tick,
    so frame N always completes before frame N+1 starts.

    Example:
        >>> scheduler = FrameScheduler()
        >>> handle = scheduler.request_frame(lambda: print("frame"))
        >>> scheduler.tick()
        frame
        1
    """

    def __init__(self):
        self._next_handle = 1
        self._pending: Dict[int, FrameCallback] = {}

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule ``callback`` for the next tick and return its handle."""
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        """Release a scheduled callback. Unknown or spent handles are ignored."""
        if self._pending.pop(handle, None) is not None:
            logger.debug(f"Canceled frame callback {handle}")

    @property
    def pending(self) -> int:
        return len(self._pending)

    def tick(self) -> int:
        """
        Run every callback scheduled before this tick.

        Returns:
            Number of callbacks run.
        """
        due = list(self._pending.items())
        self._pending.clear()
        for _, callback in due:
            callback()
        return len(due)


class HighGuiFrameScheduler(FrameScheduler):
    """Frame scheduler paced by the OpenCV HighGUI event loop."""

    def __init__(self, delay_ms: int = 1):
        super().__init__()
        self.delay_ms = delay_ms

    def wait(self) -> int:
        """
        Pump window events for ``delay_ms`` then run the due frame callbacks.

        Returns:
            Key code pressed during the wait (-1 if none).
        """
        key = cv2.waitKey(self.delay_ms)
        self.tick()
        return key
