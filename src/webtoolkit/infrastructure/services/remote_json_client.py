"""Push JSON payloads to remote HTTP endpoints."""

from typing import Any

import httpx

from webtoolkit.core.exceptions import TransportError
from webtoolkit.core.logging import get_logger
from webtoolkit.infrastructure.api.json_responses import JSON_MEDIA_TYPE, serialize_json

logger = get_logger(__name__)


async def push_json_to_remote(
    url: str,
    data: Any,
    client: httpx.AsyncClient | None = None,
) -> tuple[httpx.Response, int]:
    """POST ``data`` as JSON to ``url``.

    Uses ``client`` when given, otherwise a short-lived default client. The
    request is sent once; timeouts are whatever the client is configured with.

    Returns:
        The response and its status code. Non-2xx statuses are not errors.

    Raises:
        SerializationError: If ``data`` cannot be serialized.
        TransportError: If no response was received.
    """
    payload = serialize_json(data)
    headers = {"Content-Type": JSON_MEDIA_TYPE}

    try:
        if client is None:
            async with httpx.AsyncClient() as default_client:
                response = await default_client.post(url, content=payload, headers=headers)
        else:
            response = await client.post(url, content=payload, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("Remote JSON push failed", url=url, error=str(e))
        raise TransportError(f"could not reach {url}: {e}") from e

    logger.info("Remote JSON push", url=url, status_code=response.status_code)
    return response, response.status_code
