"""Exceptions raised by toolkit operations.

Every failure carries a machine-readable ``kind`` and a human-readable message
that is safe to put straight into a JSON error envelope.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from webtoolkit.domain.entities.uploaded_file import UploadedFile


class ErrorKind(str, Enum):
    """Kinds of toolkit failures."""

    BODY_TOO_LARGE = "body_too_large"
    MALFORMED_SYNTAX = "malformed_syntax"
    WRONG_TYPE = "wrong_type"
    TRUNCATED_BODY = "truncated_body"
    EMPTY_BODY = "empty_body"
    MULTIPLE_VALUES = "multiple_values"
    UNKNOWN_FIELD = "unknown_field"
    INVALID_VALUE = "invalid_value"
    DECODE_TARGET = "decode_target"
    MALFORMED_FORM = "malformed_form"
    MISSING_FILE = "missing_file"
    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
    FILESYSTEM_FAILURE = "filesystem_failure"
    FILE_NOT_FOUND = "file_not_found"
    EMPTY_INPUT = "empty_input"
    EMPTY_RESULT = "empty_result"
    SERIALIZATION_FAILURE = "serialization_failure"
    TRANSPORT_FAILURE = "transport_failure"


class ToolkitError(Exception):
    """Base class for all toolkit errors."""

    def __init__(self, message: str, kind: ErrorKind):
        self.message = message
        self.kind = kind
        super().__init__(message)


class JSONBodyError(ToolkitError):
    """Raised when a request body cannot be read or decoded as JSON."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        *,
        offset: int | None = None,
        field: str | None = None,
        limit: int | None = None,
    ):
        self.offset = offset
        self.field = field
        self.limit = limit
        super().__init__(message, kind)


class UploadError(ToolkitError):
    """Raised when a multipart upload is rejected.

    ``uploaded_files`` holds the records of files that were fully written
    before the failure. Those files stay on disk.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        uploaded_files: list["UploadedFile"] | None = None,
    ):
        self.uploaded_files = list(uploaded_files or [])
        super().__init__(message, kind)


class FilesystemError(ToolkitError):
    """Raised when a directory or file operation fails."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.FILESYSTEM_FAILURE):
        super().__init__(message, kind)


class SlugError(ToolkitError):
    """Raised when a slug cannot be produced."""


class SerializationError(ToolkitError):
    """Raised when a payload cannot be serialized to JSON."""

    def __init__(self, message: str):
        super().__init__(message, ErrorKind.SERIALIZATION_FAILURE)


class TransportError(ToolkitError):
    """Raised when a remote request fails before a response arrives."""

    def __init__(self, message: str):
        super().__init__(message, ErrorKind.TRANSPORT_FAILURE)
