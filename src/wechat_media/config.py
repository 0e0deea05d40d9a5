"""Configuration management for the WeChat media CLI.

Loads the app credentials from config.yaml, with .env / environment
variables taking precedence over the document.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field
from dotenv import load_dotenv

from wechat_media.utils.errors import ConfigMissingFieldError, ConfigParseError

DEFAULT_CONFIG_FILE = "config.yaml"
DEFAULT_TOKEN_FILE = "access_token.json"
DEFAULT_API_BASE = "https://api.weixin.qq.com"


class AppConfig(BaseModel):
    """Official account credentials."""
    model_config = ConfigDict(frozen=True)

    appid: str = Field(description="Official account AppID")
    secret: str = Field(description="Official account AppSecret")


class Config(BaseModel):
    """Full application configuration."""
    model_config = ConfigDict(frozen=True)

    app: AppConfig
    token_file: str = Field(default=DEFAULT_TOKEN_FILE, description="Path of the cached access token")
    api_base: str = Field(default=DEFAULT_API_BASE, description="Platform API root URL")

    def url(self, path: str) -> str:
        """Absolute URL for an API path such as /cgi-bin/token."""
        return self.api_base.rstrip("/") + path


def _env(*keys: str, default: str = "") -> str:
    """Try multiple env var names, return the first one found."""
    for key in keys:
        val = os.environ.get(key, "")
        if val:
            return val.strip().strip('"')
    return default


def _read_document(path: Path) -> dict[str, Any]:
    """Parse the YAML config document. A missing file reads as empty."""
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigParseError(f"Failed to read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Failed to parse config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def _field(data: dict[str, Any], key: str, *env_keys: str, default: str = "") -> str:
    """Resolve one setting: environment first, then the document."""
    val = _env(*env_keys)
    if val:
        return val
    raw = data.get(key)
    if raw is None:
        return default
    return str(raw).strip()


def load_config(path: str | Path = DEFAULT_CONFIG_FILE) -> Config:
    """Load configuration from a YAML document plus environment overrides.

    Raises:
        ConfigParseError: The document exists but is unreadable or not a mapping.
        ConfigMissingFieldError: appid or secret is empty after all sources.
    """
    path = Path(path)
    data = _read_document(path)

    appid = _field(data, "appid", "WECHAT_APPID")
    secret = _field(data, "secret", "WECHAT_SECRET")
    if not appid:
        raise ConfigMissingFieldError("appid", str(path))
    if not secret:
        raise ConfigMissingFieldError("secret", str(path))

    return Config(
        app=AppConfig(appid=appid, secret=secret),
        token_file=_field(data, "token_file", "WECHAT_TOKEN_FILE", default=DEFAULT_TOKEN_FILE),
        api_base=_field(data, "api_base", "WECHAT_API_BASE", default=DEFAULT_API_BASE),
    )


@lru_cache(maxsize=4)
def get_config(path: str | None = None) -> Config:
    """Load and cache the application configuration.

    The path falls back to $WECHAT_MEDIA_CONFIG, then ./config.yaml.
    A .env file in the working directory is loaded first if present.
    """
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return load_config(path or _env("WECHAT_MEDIA_CONFIG", default=DEFAULT_CONFIG_FILE))
