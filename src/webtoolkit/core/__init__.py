"""Core webtoolkit utilities.

This module exports configuration, logging and the exception taxonomy.
"""

from webtoolkit.core.config import ToolkitConfig, get_config
from webtoolkit.core.exceptions import (
    ErrorKind,
    FilesystemError,
    JSONBodyError,
    SerializationError,
    SlugError,
    ToolkitError,
    TransportError,
    UploadError,
)
from webtoolkit.core.logging import configure_logging, get_logger

__all__ = [
    "ToolkitConfig",
    "get_config",
    "configure_logging",
    "get_logger",
    "ErrorKind",
    "ToolkitError",
    "JSONBodyError",
    "UploadError",
    "FilesystemError",
    "SlugError",
    "SerializationError",
    "TransportError",
]
