"""
Output Sinks Module

Terminal consumers of generated batches:
- ConsoleSink: standard output
- FileSink: one buffered file per run
- MultipartUploadSink: S3 multipart upload

create_sink() picks the sink for a configured output mode.
"""

import logging
from typing import Optional

from ..config import Config, OutputMode
from ..exceptions import ConfigurationError
from .base import Sink
from .channel import OutputChannel, ProducerAborted
from .console import ConsoleSink
from .file import FileSink
from .object_storage import MultipartUploadSink, build_s3_client, parse_location


def create_sink(config: Config, logger: Optional[logging.Logger] = None) -> Sink:
    """
    Build the sink for the configured output mode

    Args:
        config: Run configuration
        logger: Optional logger handed to the sink

    Returns:
        An unopened Sink
    """
    mode = config.output.mode
    output_file = config.output.output_file

    if mode == OutputMode.CONSOLE:
        return ConsoleSink(logger=logger)

    if mode == OutputMode.FILE:
        if not output_file:
            raise ConfigurationError("output_file required when output mode is 'file'!")
        return FileSink(output_file, logger=logger)

    if mode == OutputMode.OBJECT_STORAGE:
        if not output_file:
            raise ConfigurationError("output_file required when output mode is 's3'!")
        bucket, key = parse_location(output_file)
        return MultipartUploadSink(
            bucket,
            key,
            part_size=config.storage.part_size,
            storage=config.storage,
            logger=logger,
        )

    if mode == OutputMode.DATABASE:
        raise ConfigurationError("Database output not yet implemented!")

    raise ConfigurationError("An invalid output mode was specified.")


__all__ = [
    "Sink",
    "OutputChannel",
    "ProducerAborted",
    "ConsoleSink",
    "FileSink",
    "MultipartUploadSink",
    "build_s3_client",
    "parse_location",
    "create_sink",
]
