"""
Output Channel

Many-sender, single-receiver hand-off between generation workers and the
sink consumer. Backed by a bounded queue so fast workers block instead of
buffering an unbounded number of batches.
"""

import queue
import threading
from typing import Iterator

from ..exceptions import ChannelClosedError

_SEND_POLL_SECONDS = 0.1


class _EndOfStream:
    pass


class _Abort:
    pass


END_OF_STREAM = _EndOfStream()
ABORT = _Abort()


class ProducerAborted(Exception):
    """Raised to the consumer when the producer side gave up"""


class OutputChannel:
    """
    Bounded channel of formatted batches

    Args:
        maxsize: Maximum number of batches waiting for the consumer
    """

    def __init__(self, maxsize: int = 0):
        self._queue: "queue.Queue" = queue.Queue(maxsize=maxsize)
        self._consumer_failed = threading.Event()
        self._closed = threading.Event()

    def send(self, batch: str):
        """
        Hand a batch to the consumer, blocking while the channel is full

        Raises:
            ChannelClosedError: If the channel was closed or the consumer stopped receiving
        """
        if self._closed.is_set():
            raise ChannelClosedError("Cannot send on a closed channel")

        while True:
            if self._consumer_failed.is_set():
                raise ChannelClosedError("Output consumer stopped receiving")
            try:
                self._queue.put(batch, timeout=_SEND_POLL_SECONDS)
                return
            except queue.Full:
                continue

    def close(self):
        """Signal end-of-stream; the consumer finalizes after draining"""
        self._finish(END_OF_STREAM)

    def abort(self):
        """Signal that the producer side failed; the consumer aborts"""
        self._finish(ABORT)

    def _finish(self, marker):
        if self._closed.is_set():
            return
        self._closed.set()
        while not self._consumer_failed.is_set():
            try:
                self._queue.put(marker, timeout=_SEND_POLL_SECONDS)
                return
            except queue.Full:
                continue

    def mark_failed(self):
        """Called by the consumer when it can no longer accept batches"""
        self._consumer_failed.set()

    def __iter__(self) -> Iterator[str]:
        """
        Yield batches in received order until end-of-stream

        Raises:
            ProducerAborted: If the producer side aborted the stream
        """
        while True:
            item = self._queue.get()
            if item is END_OF_STREAM:
                return
            if item is ABORT:
                raise ProducerAborted()
            yield item
