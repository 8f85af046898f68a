"""Strict JSON request body decoding.

Decodes exactly one JSON document from a request body into a target type and
translates decoder and validation failures into JSONBodyError values whose
messages can be shown to API clients as-is.
"""

import dataclasses
import json
import re
import types
from typing import Any, TypeVar, Union, get_args, get_origin

from fastapi import Request
from pydantic import BaseModel, PydanticUserError, TypeAdapter, ValidationError
from typing_extensions import get_type_hints, is_typeddict

from webtoolkit.core.exceptions import ErrorKind, JSONBodyError
from webtoolkit.core.logging import get_logger
from webtoolkit.infrastructure.api.request_body import BodyLimitExceeded, read_limited_body

logger = get_logger(__name__)

T = TypeVar("T")

_WHITESPACE = re.compile(r"[ \t\n\r]*")
# A string literal, or one of the constants Python's decoder accepts but JSON does not
_CONSTANT_TOKEN = re.compile(r'"(?:[^"\\]|\\.)*"|(-?Infinity|NaN)')
_SEQUENCE_ORIGINS = (list, tuple, set, frozenset)


class _NonStandardConstant(ValueError):
    """Raised by the decoder on NaN, Infinity or -Infinity."""


def _reject_constant(name: str) -> Any:
    raise _NonStandardConstant(name)


_DECODER = json.JSONDecoder(parse_constant=_reject_constant)


async def read_json(
    request: Request,
    target: type[T],
    *,
    max_bytes: int,
    allow_unknown_fields: bool = False,
) -> T:
    """Read and decode a request body into ``target``.

    Args:
        request: Incoming request.
        target: Type to decode into (pydantic model, dataclass, TypedDict...).
        max_bytes: Maximum body size.
        allow_unknown_fields: Accept keys that ``target`` does not declare.

    Returns:
        The decoded value.

    Raises:
        JSONBodyError: If the body is too large or is not exactly one JSON
            value matching ``target``.
    """
    try:
        raw = await read_limited_body(request, max_bytes)
    except BodyLimitExceeded as e:
        logger.debug("JSON body rejected", kind=ErrorKind.BODY_TOO_LARGE.value, limit=e.limit)
        raise JSONBodyError(
            f"body must not be larger than {e.limit} bytes",
            ErrorKind.BODY_TOO_LARGE,
            limit=e.limit,
        ) from e

    try:
        return decode_json_body(raw, target, allow_unknown_fields=allow_unknown_fields)
    except JSONBodyError as e:
        logger.debug("JSON body rejected", kind=e.kind.value, error=e.message)
        raise


def decode_json_body(raw: bytes, target: type[T], *, allow_unknown_fields: bool = False) -> T:
    """Decode one JSON document from raw bytes into ``target``."""
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise JSONBodyError(
            f"body contains badly-formed JSON (at character {e.start})",
            ErrorKind.MALFORMED_SYNTAX,
            offset=e.start,
        ) from e

    start = _WHITESPACE.match(text, 0).end()
    if start == len(text):
        raise JSONBodyError("body must not be empty", ErrorKind.EMPTY_BODY)

    try:
        value, end = _DECODER.raw_decode(text, start)
    except json.JSONDecodeError as e:
        if e.pos >= len(text) or e.msg.startswith("Unterminated string"):
            raise JSONBodyError("body contains badly-formed JSON", ErrorKind.TRUNCATED_BODY) from e
        raise JSONBodyError(
            f"body contains badly-formed JSON (at character {e.pos})",
            ErrorKind.MALFORMED_SYNTAX,
            offset=e.pos,
        ) from e
    except _NonStandardConstant as e:
        offset = _constant_offset(text, start)
        raise JSONBodyError(
            f"body contains badly-formed JSON (at character {offset})",
            ErrorKind.MALFORMED_SYNTAX,
            offset=offset,
        ) from e

    if _WHITESPACE.match(text, end).end() != len(text):
        raise JSONBodyError("body must contain only one JSON value", ErrorKind.MULTIPLE_VALUES)

    try:
        adapter = TypeAdapter(target)
    except (PydanticUserError, TypeError) as e:
        raise JSONBodyError(f"error unmarshalling JSON: {e}", ErrorKind.DECODE_TARGET) from e

    if not allow_unknown_fields:
        unknown = find_unknown_field(target, value)
        if unknown is not None:
            raise JSONBodyError(
                f'body contained unknown key "{unknown}"',
                ErrorKind.UNKNOWN_FIELD,
                field=unknown,
            )

    try:
        return adapter.validate_json(text[start:end], strict=True)
    except ValidationError as e:
        raise _translate_validation_error(e, end) from e


def find_unknown_field(target: Any, value: Any, prefix: str = "") -> str | None:
    """Return the dotted path of the first key ``target`` does not declare.

    Walks pydantic models, dataclasses and TypedDicts, and looks inside
    sequences, dict values and optionals. Models that set ``extra="allow"``
    accept any key at their own level.
    """
    declared = _declared_fields(target)
    if declared is not None:
        if not isinstance(value, dict):
            return None
        known, allow_extra = declared
        for key, item in value.items():
            if key not in known:
                if allow_extra:
                    continue
                return f"{prefix}{key}"
            nested = find_unknown_field(known[key], item, f"{prefix}{key}.")
            if nested is not None:
                return nested
        return None

    origin = get_origin(target)
    args = get_args(target)
    if origin is dict and len(args) == 2 and isinstance(value, dict):
        for key, item in value.items():
            nested = find_unknown_field(args[1], item, f"{prefix}{key}.")
            if nested is not None:
                return nested
        return None
    if origin in _SEQUENCE_ORIGINS and args and isinstance(value, list):
        for index, item in enumerate(value):
            nested = find_unknown_field(args[0], item, f"{prefix}{index}.")
            if nested is not None:
                return nested
        return None
    if origin is Union or origin is types.UnionType:
        for arg in args:
            if _declared_fields(arg) is not None:
                return find_unknown_field(arg, value, prefix)
    return None


def _constant_offset(text: str, start: int) -> int:
    """Return the offset of the first NaN/Infinity token outside a string."""
    for match in _CONSTANT_TOKEN.finditer(text, start):
        if match.group(1):
            return match.start(1)
    return start


def _declared_fields(target: Any) -> tuple[dict[str, Any], bool] | None:
    """Map JSON keys to field types for models, dataclasses and TypedDicts."""
    if get_origin(target) is not None or not isinstance(target, type):
        return None

    if issubclass(target, BaseModel):
        known: dict[str, Any] = {}
        for name, field in target.model_fields.items():
            known[name] = field.annotation
            if field.alias:
                known[field.alias] = field.annotation
        return known, target.model_config.get("extra") == "allow"

    if dataclasses.is_dataclass(target):
        hints = get_type_hints(target)
        known = {field.name: hints.get(field.name, field.type) for field in dataclasses.fields(target)}
        return known, False

    if is_typeddict(target):
        config = getattr(target, "__pydantic_config__", None) or {}
        return get_type_hints(target), config.get("extra") == "allow"

    return None


def _translate_validation_error(error: ValidationError, offset: int) -> JSONBodyError:
    details = error.errors()[0]
    error_type = details["type"]
    field = ".".join(str(part) for part in details["loc"])

    if error_type == "extra_forbidden":
        return JSONBodyError(
            f'body contained unknown key "{field}"',
            ErrorKind.UNKNOWN_FIELD,
            field=field,
        )

    if error_type.endswith("_type") or error_type.endswith("_parsing"):
        if field:
            return JSONBodyError(
                f'body contains incorrect JSON type for field "{field}"',
                ErrorKind.WRONG_TYPE,
                field=field,
            )
        return JSONBodyError(
            f"body contains incorrect JSON type (at character {offset})",
            ErrorKind.WRONG_TYPE,
            offset=offset,
        )

    if field:
        message = f'body contains invalid value for field "{field}": {details["msg"]}'
    else:
        message = f"body contains invalid value: {details['msg']}"
    return JSONBodyError(message, ErrorKind.INVALID_VALUE, field=field or None)
