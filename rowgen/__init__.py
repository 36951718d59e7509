"""
Rowgen Package

Schema-driven synthetic row generation with a concurrent batch pipeline
and pluggable output sinks (console, file, S3 multipart upload).
"""

__version__ = "1.0.0"
__author__ = "Rowgen Team"

from .config import Config, ConfigLoader, ConfigValidator, OutputMode
from .exceptions import (
    ConfigurationError,
    FieldGenerationError,
    RowgenError,
    SchemaError,
    SinkError,
    WorkerError,
)
from .orchestrator import BatchPipeline, RunSummary, generate_data
from .schema import Field, Schema, load_schema_from_file

__all__ = [
    "Config",
    "ConfigLoader",
    "ConfigValidator",
    "OutputMode",
    "BatchPipeline",
    "RunSummary",
    "generate_data",
    "Field",
    "Schema",
    "load_schema_from_file",
    "RowgenError",
    "ConfigurationError",
    "SchemaError",
    "FieldGenerationError",
    "SinkError",
    "WorkerError",
]
