"""Single JSON round-trip over httpx with typed failures."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from wechat_media.utils.errors import HTTPStatusError, NetworkError, ResponseParseError

logger = logging.getLogger(__name__)


def send_json(
    http: httpx.Client,
    method: str,
    url: str,
    *,
    action: str,
    params: dict[str, Any] | None = None,
    body: dict[str, Any] | None = None,
) -> Any:
    """Send one request and return the decoded JSON body.

    Args:
        http: The client to send through.
        method: HTTP method (GET, POST).
        url: Absolute URL without query string.
        action: What is being attempted, used as the prefix of error messages.
        params: Query parameters.
        body: JSON request body.

    Raises:
        NetworkError: The request never produced a response.
        HTTPStatusError: The response status was not 200.
        ResponseParseError: The body was not valid JSON.
    """
    # Query strings carry secrets and tokens; log the path only.
    logger.debug("%s %s", method, url)
    try:
        response = http.request(method, url, params=params, json=body)
    except httpx.HTTPError as e:
        raise NetworkError(f"{action} failed: network error: {e}") from e
    except httpx.InvalidURL as e:
        raise NetworkError(f"{action} failed: invalid URL {url!r}: {e}") from e

    if response.status_code != 200:
        raise HTTPStatusError(action, response.status_code, response.reason_phrase)

    try:
        return response.json()
    except ValueError as e:
        raise ResponseParseError(f"{action} failed: response is not valid JSON: {e}") from e
