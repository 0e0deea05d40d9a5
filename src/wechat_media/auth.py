"""Access token lifecycle for the WeChat Official Account API.

Handles the cached token check, refresh on expiry, and persistence.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Callable

import httpx
from pydantic import ValidationError

from wechat_media.config import Config
from wechat_media.models.auth import Credential, TokenResponse, TokenStatus
from wechat_media.models.results import unwrap
from wechat_media.store import CredentialStore
from wechat_media.utils.errors import CredentialError, ResponseParseError
from wechat_media.utils.http import send_json

logger = logging.getLogger(__name__)

TOKEN_PATH = "/cgi-bin/token"

# Seconds shaved off expires_in so a token is not used right at its expiry
EXPIRY_MARGIN = 5


class TokenService:
    """Hands out a valid access token, refreshing and persisting as needed."""

    def __init__(
        self,
        config: Config,
        store: CredentialStore,
        http: httpx.Client | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._store = store
        self._http = http or httpx.Client()
        self._clock = clock

    def get_access_token(self, force_refresh: bool = False) -> str:
        """Get a valid access token, refreshing if needed.

        Args:
            force_refresh: Skip the cache and always call the refresh endpoint.

        Returns:
            A valid access token string.
        """
        if not force_refresh:
            cached = self._load_cached()
            if cached is not None and cached.is_valid(self._clock()):
                logger.info("Using cached access token")
                return cached.access_token
            logger.info("Cached access token expired or missing, refreshing")

        credential = self._refresh_token()
        self._store.save(credential)
        return credential.access_token

    def get_status(self) -> TokenStatus:
        """Describe the cached credential without touching the network."""
        cached = self._load_cached()
        if cached is None:
            return TokenStatus(has_token=False, is_expired=True)

        now = self._clock()
        is_expired = not cached.is_valid(now)
        return TokenStatus(
            has_token=True,
            is_expired=is_expired,
            expires_at=datetime.fromtimestamp(cached.expires_at),
            seconds_remaining=None if is_expired else int(cached.expires_at - now),
        )

    def _load_cached(self) -> Credential | None:
        """Read the store, treating an unusable cache the same as an empty one."""
        try:
            return self._store.load()
        except CredentialError as e:
            logger.warning("Ignoring unusable token cache: %s", e)
            return None

    def _refresh_token(self) -> Credential:
        """Exchange appid/secret for a new access token."""
        action = "Token refresh"
        app = self._config.app
        data = send_json(
            self._http,
            "GET",
            self._config.url(TOKEN_PATH),
            action=action,
            params={
                "grant_type": "client_credential",
                "appid": app.appid,
                "secret": app.secret,
            },
        )

        # A JSON null body carries neither shape.
        try:
            token_data = TokenResponse.model_validate(data if data is not None else {})
        except ValidationError as e:
            raise ResponseParseError(f"{action} failed: unexpected response: {e}") from e

        granted: TokenResponse = unwrap(token_data.classify(), action)
        expires_at = int(self._clock()) + granted.expires_in - EXPIRY_MARGIN
        try:
            return Credential(access_token=granted.access_token, expires_at=expires_at)
        except ValidationError as e:
            raise ResponseParseError(
                f"{action} failed: expires_in {granted.expires_in} is out of range"
            ) from e

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()
