"""Unit tests for the toolkit exception taxonomy."""

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


def test_message_and_kind():
    error = JSONBodyError("body must not be empty", ErrorKind.EMPTY_BODY)

    assert str(error) == "body must not be empty"
    assert error.message == "body must not be empty"
    assert error.kind is ErrorKind.EMPTY_BODY
    assert isinstance(error, ToolkitError)


def test_json_body_error_context():
    error = JSONBodyError(
        "body must not be larger than 10 bytes",
        ErrorKind.BODY_TOO_LARGE,
        limit=10,
    )

    assert error.limit == 10
    assert error.offset is None
    assert error.field is None


def test_upload_error_copies_uploaded_files():
    stored = [UploadedFile("abc.png", "a.png", 10)]
    error = UploadError("the uploaded file type is not permitted", ErrorKind.UNSUPPORTED_FILE_TYPE, stored)
    stored.append(UploadedFile("def.png", "b.png", 20))

    assert error.uploaded_files == [UploadedFile("abc.png", "a.png", 10)]


def test_fixed_kinds():
    assert FilesystemError("boom").kind is ErrorKind.FILESYSTEM_FAILURE
    assert SerializationError("boom").kind is ErrorKind.SERIALIZATION_FAILURE
    assert TransportError("boom").kind is ErrorKind.TRANSPORT_FAILURE
    assert SlugError("boom", ErrorKind.EMPTY_RESULT).kind is ErrorKind.EMPTY_RESULT


def test_error_kind_values_are_strings():
    assert ErrorKind.UNKNOWN_FIELD == "unknown_field"
    assert ErrorKind("multiple_values") is ErrorKind.MULTIPLE_VALUES
