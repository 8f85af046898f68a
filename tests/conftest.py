"""Pytest configuration for all tests."""

from collections.abc import Callable, Sequence

import httpx
import pytest
from fastapi import Request

from webtoolkit.core.config import ToolkitConfig
from webtoolkit.toolkit import Toolkit

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 600
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x01" * 600
TEXT_BYTES = b"hello world, this is plain text\n"
BOUNDARY = "webtoolkit-test-boundary"


def build_request(
    body: bytes = b"",
    headers: dict[str, str] | None = None,
    chunk_size: int | None = None,
) -> Request:
    """Build a Starlette request whose body arrives in ``chunk_size`` pieces."""
    raw_headers = [
        (key.lower().encode("latin-1"), value.encode("latin-1"))
        for key, value in (headers or {}).items()
    ]
    size = chunk_size or max(len(body), 1)
    chunks = [body[i : i + size] for i in range(0, len(body), size)] or [b""]
    messages = [
        {"type": "http.request", "body": chunk, "more_body": index < len(chunks) - 1}
        for index, chunk in enumerate(chunks)
    ]

    async def receive() -> dict:
        if messages:
            return messages.pop(0)
        return {"type": "http.disconnect"}

    scope = {
        "type": "http",
        "method": "POST",
        "path": "/",
        "headers": raw_headers,
        "query_string": b"",
    }
    return Request(scope, receive)


def build_multipart_request(
    files: Sequence[tuple[str, tuple[str, bytes, str]]],
    data: dict[str, str] | None = None,
    chunk_size: int | None = None,
) -> Request:
    """Encode files with httpx and wrap the result in a Starlette request.

    Without files httpx falls back to url-encoding, so a multipart body
    holding only the plain fields is written by hand.
    """
    if not files:
        return build_request(
            _fields_only_multipart(data or {}),
            {"content-type": f"multipart/form-data; boundary={BOUNDARY}"},
            chunk_size=chunk_size,
        )
    encoded = httpx.Request("POST", "http://test/upload", files=list(files), data=data)
    body = encoded.read()
    return build_request(body, dict(encoded.headers), chunk_size=chunk_size)


def _fields_only_multipart(data: dict[str, str]) -> bytes:
    parts = [
        f'--{BOUNDARY}\r\nContent-Disposition: form-data; name="{name}"\r\n\r\n{value}\r\n'
        for name, value in data.items()
    ]
    return ("".join(parts) + f"--{BOUNDARY}--\r\n").encode()


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Factory for raw-body requests."""
    return build_request


@pytest.fixture
def make_multipart_request() -> Callable[..., Request]:
    """Factory for multipart/form-data requests."""
    return build_multipart_request


@pytest.fixture
def config() -> ToolkitConfig:
    """Toolkit config isolated from WEBTOOLKIT_* environment variables."""
    return ToolkitConfig(_env_file=None, allowed_mime_types=[], allow_unknown_fields=False)


@pytest.fixture
def toolkit(config: ToolkitConfig) -> Toolkit:
    """Toolkit bound to the test config."""
    return Toolkit(config)


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def text_bytes() -> bytes:
    return TEXT_BYTES
