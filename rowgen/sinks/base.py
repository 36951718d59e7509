"""
Output Sink Base

Every sink consumes formatted batches on its own thread, decoupled from the
generation workers. The pipeline only sends batches and closes the channel.
"""

import logging
import threading
from typing import Optional

from ..exceptions import SinkError
from .channel import OutputChannel, ProducerAborted


class Sink:
    """
    Base class for output sinks

    Subclasses implement write() and, where needed, open(), finalize() and abort().
    The consumer loop calls them in order: open (by the pipeline), write per
    batch, then finalize on end-of-stream or abort on failure.
    """

    name = "sink"

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(type(self).__module__)
        self.batches_written = 0
        self._thread: Optional[threading.Thread] = None
        self._error: Optional[BaseException] = None

    def open(self):
        """Acquire the destination before any batch flows"""

    def write(self, batch: str):
        """Consume one batch"""
        raise NotImplementedError("Subclasses must implement write()")

    def finalize(self):
        """Flush and release the destination after end-of-stream"""

    def abort(self):
        """Release the destination after a failure; best-effort"""

    def start(self, channel: OutputChannel):
        """Start the consumer thread"""
        self._thread = threading.Thread(
            target=self._consume,
            args=(channel,),
            name=f"rowgen-{self.name}-sink",
            daemon=True,
        )
        self._thread.start()

    def join(self):
        """
        Wait for the consumer to drain and finalize

        Raises:
            SinkError: If the consumer failed
        """
        if self._thread is not None:
            self._thread.join()

        if self._error is not None:
            if isinstance(self._error, SinkError):
                raise self._error
            raise SinkError(f"{self.name} output failed: {self._error}") from self._error

    def _consume(self, channel: OutputChannel):
        try:
            for batch in channel:
                self.write(batch)
                self.batches_written += 1
            self.finalize()
            self.logger.info(f"Schema generation complete. {self.batches_written} batches written.")
        except ProducerAborted:
            self.logger.warning(f"Generation failed, aborting {self.name} output")
            self._abort_quietly()
        except Exception as e:
            self._error = e
            channel.mark_failed()
            self.logger.error(f"{self.name} output failed: {e}")
            self._abort_quietly()

    def _abort_quietly(self):
        try:
            self.abort()
        except Exception as e:
            self.logger.error(f"Failed to abort {self.name} output: {e}")
