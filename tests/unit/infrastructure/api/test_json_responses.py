"""Unit tests for JSON response writing."""

import json
from dataclasses import dataclass
from datetime import datetime, timezone

import pytest
from pydantic import BaseModel

from webtoolkit.core.exceptions import ErrorKind, SerializationError, ToolkitError
from webtoolkit.infrastructure.api.json_responses import (
    JSON_MEDIA_TYPE,
    error_json,
    serialize_json,
    write_json,
)
from webtoolkit.infrastructure.api.schemas.envelope_schemas import JSONEnvelope


class Item(BaseModel):
    name: str
    price: float


@dataclass
class Tag:
    label: str


class TestSerializeJSON:
    """Tests for serialize_json."""

    def test_compact_utf8(self):
        assert serialize_json({"name": "café", "n": [1, 2]}) == '{"name":"café","n":[1,2]}'.encode()

    def test_models_and_dataclasses(self):
        payload = {"item": Item(name="pen", price=1.5), "tag": Tag(label="new")}

        assert json.loads(serialize_json(payload)) == {
            "item": {"name": "pen", "price": 1.5},
            "tag": {"label": "new"},
        }

    def test_datetime(self):
        moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

        assert json.loads(serialize_json({"at": moment})) == {"at": "2024-01-02T03:04:05+00:00"}

    def test_nan_rejected(self):
        with pytest.raises(SerializationError) as exc_info:
            serialize_json({"value": float("nan")})

        assert exc_info.value.kind is ErrorKind.SERIALIZATION_FAILURE
        assert str(exc_info.value).startswith("could not serialize JSON:")

    def test_unencodable_object_rejected(self):
        with pytest.raises(SerializationError):
            serialize_json({"value": object()})


class TestWriteJSON:
    """Tests for write_json."""

    def test_body_and_status(self):
        payload = {"error": False, "message": "foo"}

        response = write_json(payload, status_code=202)

        assert response.status_code == 202
        assert json.loads(response.body) == payload
        assert response.headers["content-type"] == JSON_MEDIA_TYPE

    def test_default_status(self):
        assert write_json({"ok": True}).status_code == 200

    def test_extra_headers(self):
        response = write_json({"ok": True}, headers={"FOO": "BAR", "X-Request-Id": "abc"})

        assert response.headers["foo"] == "BAR"
        assert response.headers["x-request-id"] == "abc"

    def test_content_type_not_overridable(self):
        response = write_json({"ok": True}, headers={"Content-Type": "text/plain"})

        assert response.headers["content-type"] == JSON_MEDIA_TYPE
        assert len(response.headers.getlist("content-type")) == 1

    def test_serialization_failure_raises(self):
        with pytest.raises(SerializationError):
            write_json({"value": float("inf")})


class TestErrorJSON:
    """Tests for error_json."""

    def test_custom_status(self):
        response = error_json(ValueError("some error"), status_code=503)

        assert response.status_code == 503
        assert json.loads(response.body) == {"error": True, "message": "some error"}

    def test_default_status(self):
        response = error_json(ToolkitError("bad input", ErrorKind.INVALID_VALUE))

        assert response.status_code == 400
        assert json.loads(response.body) == {"error": True, "message": "bad input"}

    def test_string_message(self):
        response = error_json("plain message")

        assert json.loads(response.body)["message"] == "plain message"


class TestJSONEnvelope:
    """Tests for the response envelope schema."""

    def test_data_omitted_when_none(self):
        assert JSONEnvelope(message="ok").to_payload() == {"error": False, "message": "ok"}

    def test_data_included(self):
        envelope = JSONEnvelope(message="ok", data={"id": 1})

        assert envelope.to_payload() == {"error": False, "message": "ok", "data": {"id": 1}}
