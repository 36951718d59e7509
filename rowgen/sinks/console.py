"""
Console Sink

Writes batches to standard output in the order they are received.
"""

import logging
import sys
from typing import Optional, TextIO

from .base import Sink


class ConsoleSink(Sink):
    """
    Writes every batch to a text stream (stdout by default)

    Args:
        stream: Destination stream; resolved at open() time when omitted
        logger: Optional logger
    """

    name = "console"

    def __init__(self, stream: Optional[TextIO] = None, logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self._stream = stream

    def open(self):
        if self._stream is None:
            self._stream = sys.stdout

    def write(self, batch: str):
        self._stream.write(batch)

    def finalize(self):
        self._stream.flush()

    def abort(self):
        self._stream.flush()
