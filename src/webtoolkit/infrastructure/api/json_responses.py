"""JSON response writing and error envelopes."""

import json
from collections.abc import Mapping
from typing import Any

from fastapi import Response
from fastapi.encoders import jsonable_encoder

from webtoolkit.core.exceptions import SerializationError
from webtoolkit.infrastructure.api.schemas.envelope_schemas import JSONEnvelope

JSON_MEDIA_TYPE = "application/json"


def serialize_json(data: Any) -> bytes:
    """Serialize data to compact UTF-8 JSON.

    Pydantic models, dataclasses, datetimes and the other types FastAPI knows
    how to encode are converted first. NaN and infinities are rejected.

    Raises:
        SerializationError: If the data cannot be represented as JSON.
    """
    try:
        return json.dumps(
            jsonable_encoder(data),
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("utf-8")
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(f"could not serialize JSON: {e}") from e


def write_json(
    data: Any,
    status_code: int = 200,
    headers: Mapping[str, str] | None = None,
) -> Response:
    """Build a JSON response.

    Caller headers are merged in first; Content-Type is always
    ``application/json``.
    """
    body = serialize_json(data)
    merged = {
        key: value for key, value in (headers or {}).items() if key.lower() != "content-type"
    }
    return Response(
        content=body,
        status_code=status_code,
        headers=merged,
        media_type=JSON_MEDIA_TYPE,
    )


def error_json(error: BaseException | str, status_code: int = 400) -> Response:
    """Build an error envelope response ``{"error": true, "message": ...}``."""
    envelope = JSONEnvelope(error=True, message=str(error))
    return write_json(envelope.to_payload(), status_code=status_code)
