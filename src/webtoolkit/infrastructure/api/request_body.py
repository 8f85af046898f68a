"""Size-limited request body streaming."""

from collections.abc import AsyncIterator

from fastapi import Request


class BodyLimitExceeded(Exception):
    """Raised when a request body grows past its byte limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"request body exceeds {limit} bytes")


def declared_length(request: Request) -> int | None:
    """Return the Content-Length header as an int, if present and valid."""
    value = request.headers.get("content-length")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


async def iter_limited_body(request: Request, limit: int) -> AsyncIterator[bytes]:
    """Yield request body chunks, failing once more than ``limit`` bytes arrive.

    A declared Content-Length above the limit fails before anything is read.

    Raises:
        BodyLimitExceeded: If the body is larger than ``limit``.
    """
    length = declared_length(request)
    if length is not None and length > limit:
        raise BodyLimitExceeded(limit)

    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise BodyLimitExceeded(limit)
        yield chunk


async def read_limited_body(request: Request, limit: int) -> bytes:
    """Read the whole request body, at most ``limit`` bytes."""
    chunks = [chunk async for chunk in iter_limited_body(request, limit)]
    return b"".join(chunks)
