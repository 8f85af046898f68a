"""webtoolkit - Helpers for FastAPI and Starlette request handlers.

Random identifiers, multipart uploads with content sniffing, slugs, attachment
downloads, strict JSON request decoding, JSON responses and remote JSON pushes.
"""

__version__ = "0.1.0"

from webtoolkit.core.config import ToolkitConfig
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
from webtoolkit.domain.entities.uploaded_file import UploadedFile
from webtoolkit.infrastructure.api.schemas.envelope_schemas import JSONEnvelope
from webtoolkit.toolkit import Toolkit

__all__ = [
    "__version__",
    "Toolkit",
    "ToolkitConfig",
    "UploadedFile",
    "JSONEnvelope",
    "ErrorKind",
    "ToolkitError",
    "JSONBodyError",
    "UploadError",
    "FilesystemError",
    "SlugError",
    "SerializationError",
    "TransportError",
]
