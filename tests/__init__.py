"""
Test Suite for Rowgen

Provides tests for:
- Primitive value generators
- Row generation and fixed-width layout
- Schema loading
- Configuration management
- Output sinks (console, file, S3 multipart)
- Batch pipeline orchestration
- CLI
"""

__version__ = "1.0.0"
