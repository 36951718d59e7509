"""
Exception Hierarchy

All errors raised by rowgen derive from RowgenError so callers (the CLI,
or anything embedding generate_data) can catch a single base class.
"""

from typing import Optional


class RowgenError(Exception):
    """Base exception for rowgen"""


class ConfigurationError(RowgenError):
    """Invalid run configuration, detected before generation starts"""


class SchemaError(RowgenError):
    """Schema description could not be turned into a Schema object"""


class FieldGenerationError(RowgenError):
    """
    A single field could not be rendered into a row

    Args:
        field_name: Name of the offending field
        message: Description of the failure
    """

    def __init__(self, field_name: str, message: str):
        super().__init__(f"Field '{field_name}': {message}")
        self.field_name = field_name


class SinkError(RowgenError):
    """Output sink failed to open, write, or finalize"""


class ChannelClosedError(SinkError):
    """Batch sent after the sink consumer stopped receiving"""


class WorkerError(RowgenError):
    """A generation worker terminated abnormally"""

    def __init__(self, message: str, worker_id: Optional[int] = None):
        super().__init__(message)
        self.worker_id = worker_id
