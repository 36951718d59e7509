"""
File Sink

Writes all batches of a run to exactly one destination file through a
buffered handle. Output already written is left in place on failure.
"""

import logging
from pathlib import Path
from typing import Optional, TextIO, Union

from ..exceptions import SinkError
from .base import Sink

WRITE_BUFFER_SIZE = 1024 * 1024


class FileSink(Sink):
    """
    Buffered file output

    Args:
        filepath: Destination file, created or truncated on open()
        logger: Optional logger
    """

    name = "file"

    def __init__(self, filepath: Union[str, Path], logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self.filepath = Path(filepath)
        self._handle: Optional[TextIO] = None

    def open(self):
        try:
            self.filepath.parent.mkdir(parents=True, exist_ok=True)
            self._handle = open(
                self.filepath, 'w', encoding='utf-8', newline='', buffering=WRITE_BUFFER_SIZE
            )
        except OSError as e:
            raise SinkError(f"Failed to open output file {self.filepath}: {e}") from e
        self.logger.info(f"Writing output to {self.filepath}")

    def write(self, batch: str):
        self._handle.write(batch)

    def finalize(self):
        self._handle.flush()
        self._handle.close()
        self.logger.info(f"File written successfully: {self.filepath}")

    def abort(self):
        if self._handle is not None and not self._handle.closed:
            self._handle.close()
