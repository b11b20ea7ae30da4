"""
Liftoff Telemetry Replay - Pass Synchronization

- CompletionSignal: one-shot latch handing the replay result to any number
  of waiting consumers
- RepaintSignal: best-effort "new data" notification for a renderer; never
  blocks the producer and only keeps the most recent value
"""

import queue
import threading
from typing import Any, Optional


class CompletionSignal:
    """
    Single-release latch.

    Starts un-released; release() opens it for good (repeated calls are
    no-ops) and wakes every waiter. There is no reset.
    """

    def __init__(self):
        self._event = threading.Event()

    def release(self) -> None:
        self._event.set()

    def wait(self) -> None:
        """Block until release() has been called."""
        self._event.wait()

    @property
    def released(self) -> bool:
        return self._event.is_set()


class RepaintSignal:
    """Fire-and-forget notification channel holding only the latest value."""

    def __init__(self):
        self._queue: "queue.Queue[Any]" = queue.Queue(maxsize=1)

    def notify(self, value: Any = None) -> None:
        """Publish a value, replacing any that has not been consumed."""
        while True:
            try:
                self._queue.put_nowait(value)
                return
            except queue.Full:
                try:
                    self._queue.get_nowait()
                except queue.Empty:
                    pass

    def poll(self) -> Optional[Any]:
        """Latest published value, or None if nothing new arrived."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None
