"""Authenticated API client for the WeChat Official Account platform.

Injects the access token into every call. Does not retry.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from wechat_media.auth import TokenService
from wechat_media.config import Config
from wechat_media.utils.http import send_json

logger = logging.getLogger(__name__)


class WeChatClient:
    """HTTP client for token-authenticated endpoints."""

    def __init__(
        self,
        config: Config,
        auth: TokenService,
        verbose: bool = False,
    ) -> None:
        self._config = config
        self._auth = auth
        self._verbose = verbose
        self._http = httpx.Client()

    def request(
        self,
        method: str,
        path: str,
        *,
        action: str,
        body: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Make an authenticated API request and return its JSON body.

        Args:
            method: HTTP method (GET, POST).
            path: API path (e.g. "/cgi-bin/material/batchget_material").
            action: Description of the call, used in error messages.
            body: JSON request body.
            params: Extra query parameters.

        Raises:
            NetworkError, HTTPStatusError, ResponseParseError: see send_json.
        """
        query = {"access_token": self._auth.get_access_token()}
        if params:
            query.update(params)

        url = self._config.url(path)
        if self._verbose:
            logger.info(f"{method} {url}")
            if body:
                logger.info(f"Body: {body}")

        return send_json(self._http, method, url, action=action, params=query, body=body)

    def get(self, path: str, **kwargs: Any) -> Any:
        """Convenience method for GET requests."""
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Any:
        """Convenience method for POST requests."""
        return self.request("POST", path, **kwargs)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()
        self._auth.close()
