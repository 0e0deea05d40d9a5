"""Shared fixtures for the wechat-media test suite."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from wechat_media.config import AppConfig, Config
from wechat_media.models.auth import Credential

NOW = 1_700_000_000


class MemoryCredentialStore:
    """In-memory stand-in for FileCredentialStore."""

    def __init__(self, credential: Credential | None = None) -> None:
        self.credential = credential
        self.saved: list[Credential] = []
        self.load_error: Exception | None = None
        self.save_error: Exception | None = None

    def load(self) -> Credential | None:
        if self.load_error is not None:
            raise self.load_error
        return self.credential

    def save(self, credential: Credential) -> None:
        if self.save_error is not None:
            raise self.save_error
        self.saved.append(credential)
        self.credential = credential


def make_response(json_data=None, status_code=200, reason="OK"):
    """Build a fake httpx.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.reason_phrase = reason
    resp.json.return_value = json_data if json_data is not None else {}
    return resp


@pytest.fixture
def fake_config() -> Config:
    return Config(
        app=AppConfig(appid="wx-test-appid", secret="test-secret"),
        token_file="access_token.json",
        api_base="https://api.weixin.qq.com",
    )


@pytest.fixture
def memory_store() -> MemoryCredentialStore:
    return MemoryCredentialStore()


@pytest.fixture
def clock():
    """Frozen clock returning NOW."""
    return lambda: NOW


@pytest.fixture
def mock_http():
    """MagicMock standing in for httpx.Client."""
    http = MagicMock()
    http.close = MagicMock()
    return http


@pytest.fixture
def mock_client():
    """MagicMock standing in for WeChatClient."""
    client = MagicMock()
    client.get = MagicMock()
    client.post = MagicMock()
    client.close = MagicMock()
    return client
