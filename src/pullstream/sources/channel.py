"""
Channel-backed sources fed by producers running on other threads.
"""

import logging
import queue
import threading
from typing import Any, Optional, TypeVar

from pullstream.config import config
from pullstream.sources.base import Source

T = TypeVar('T')

logger = logging.getLogger(__name__)


class _Closed:
    def __repr__(self):
        return "CLOSED"


#: Put on a queue to tell readers no more elements follow.
CLOSED = _Closed()


class Channel:
    """
    A closable FIFO between a producer thread and a consuming pipeline.

    ``close()`` never blocks, even on a full bounded channel: readers drain
    what is buffered and then see the close. The consumer has no way to
    tell the producer to stop. If the consumer stops early (``take``,
    ``find``...) on a bounded channel, the producer must not block forever
    on ``send``.
    """

    def __init__(self, maxsize: int = 0, sentinel: Any = CLOSED,
                 source_queue: Optional[queue.Queue] = None):
        self._queue = source_queue if source_queue is not None else queue.Queue(maxsize)
        self.sentinel = sentinel
        self._closed = False
        self._lock = threading.Lock()

    @classmethod
    def from_queue(cls, q: queue.Queue, sentinel: Any = CLOSED) -> 'Channel':
        """Use an existing queue; ``sentinel`` marks the end of the data."""
        return cls(sentinel=sentinel, source_queue=q)

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def send(self, item: Any, timeout: Optional[float] = None) -> None:
        if self.closed:
            raise ValueError("send on closed channel")
        self._queue.put(item, timeout=timeout)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._wake_readers()

    def _wake_readers(self) -> None:
        # A full queue already has something for readers to take; once it is
        # drained they notice the closed flag on their next poll.
        try:
            self._queue.put_nowait(self.sentinel)
        except queue.Full:
            pass

    def receive(self, poll_interval: float):
        """Block until an element arrives or the channel closes; returns ``(item, ok)``."""
        while True:
            try:
                item = self._queue.get(timeout=poll_interval)
            except queue.Empty:
                if self.closed:
                    return None, False
                continue
            if item is self.sentinel:
                # Put it back so every reader sees the close
                self._wake_readers()
                return None, False
            return item, True


class ChannelSource(Source[T]):
    """
    Pull elements from a channel.

    ``next()`` blocks the calling thread until an element is available or
    the channel is closed. ``None`` in place of a channel gives an empty
    source.
    """

    def __init__(self, channel: Optional[Channel]):
        self._channel = channel
        self._current: Optional[T] = None
        self._done = channel is None
        self.received = 0

    def next(self) -> bool:
        if self._done:
            return False
        item, ok = self._channel.receive(config.channel_poll_interval)
        if not ok:
            logger.debug("Channel closed after %d elements", self.received)
            self._done = True
            self._current = None
            return False
        self._current = item
        self.received += 1
        return True

    def get(self) -> Optional[T]:
        return self._current
