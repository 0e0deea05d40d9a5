"""Error types and structured error reporting for the CLI."""

from __future__ import annotations

import json
import sys

from rich.console import Console

console = Console(stderr=True)


class WeChatMediaError(Exception):
    """Base class for every error this tool reports."""

    code = "RUNTIME_ERROR"


# ── Configuration ────────────────────────────────────────────────────

class ConfigError(WeChatMediaError):
    code = "CONFIG_ERROR"


class ConfigMissingFieldError(ConfigError):
    """A required configuration key is absent or empty."""

    def __init__(self, field: str, source: str = "") -> None:
        self.field = field
        where = f" in {source}" if source else ""
        super().__init__(f"Missing required config field '{field}'{where}")


class ConfigParseError(ConfigError):
    """The configuration document could not be read or parsed."""


# ── Credential cache ─────────────────────────────────────────────────

class CredentialError(WeChatMediaError):
    code = "CREDENTIAL_ERROR"


class CredentialReadError(CredentialError):
    pass


class CredentialParseError(CredentialError):
    pass


class CredentialWriteError(CredentialError):
    pass


# ── Remote API ───────────────────────────────────────────────────────

class NetworkError(WeChatMediaError):
    """Transport-level failure (DNS, connect, TLS, timeout)."""

    code = "CONNECTION_ERROR"


class HTTPStatusError(WeChatMediaError):
    """The server answered with a status other than 200."""

    code = "HTTP_ERROR"

    def __init__(self, action: str, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        detail = f"{status_code} {reason}".strip()
        super().__init__(f"{action} failed (HTTP {detail})")


class ResponseParseError(WeChatMediaError):
    """The response body was not the JSON document we expected."""

    code = "PARSE_ERROR"


class APIError(WeChatMediaError):
    """The platform returned a non-zero errcode."""

    code = "API_ERROR"

    def __init__(self, action: str, errcode: int, errmsg: str = "") -> None:
        self.errcode = errcode
        self.errmsg = errmsg
        super().__init__(f"{action} failed: API error {errcode} - {errmsg}")


class InvalidResponseError(WeChatMediaError):
    """Well-formed JSON carrying neither a payload nor an errcode."""

    code = "INVALID_RESPONSE"


# Hints for well-known platform errcodes
_ERRCODE_HINTS: dict[int, str] = {
    -1: "Platform is busy, try again in a moment",
    40001: "Access token rejected, run `wechat-media auth refresh`",
    40013: "Invalid appid, check `appid` in your config",
    40125: "Invalid secret, check `secret` in your config",
    40164: "Caller IP is not whitelisted in the platform's developer settings",
    41001: "Access token missing from the request",
    42001: "Access token expired, run `wechat-media auth refresh`",
    45009: "Daily API quota reached, wait for the quota to reset",
    48001: "This account is not authorized to use the material API",
}

# Fallback hints keyed by error class
_CODE_HINTS: dict[str, str] = {
    "CONFIG_ERROR": "Check config.yaml (or WECHAT_APPID / WECHAT_SECRET)",
    "CREDENTIAL_ERROR": "Run `wechat-media auth clear` to discard the cached token",
    "CONNECTION_ERROR": "Connection error, check network connectivity",
    "INVALID_RESPONSE": "Unexpected response shape, the API may have changed",
}


def _get_hint(error: Exception) -> str | None:
    """Match an error to an actionable hint."""
    if isinstance(error, APIError) and error.errcode in _ERRCODE_HINTS:
        return _ERRCODE_HINTS[error.errcode]
    return _CODE_HINTS.get(getattr(error, "code", ""))


def handle_error(error: Exception) -> None:
    """Report an error as JSON on stdout and as readable text on stderr.

    The stdout object is meant for scripts:
    {"error": true, "code": "API_ERROR", "message": "...", "errcode": 40013, "hint": "..."}
    """
    message = str(error)
    hint = _get_hint(error)

    error_obj: dict[str, object] = {
        "error": True,
        "code": getattr(error, "code", "RUNTIME_ERROR"),
        "message": message,
    }
    if isinstance(error, APIError):
        error_obj["errcode"] = error.errcode
    if hint:
        error_obj["hint"] = hint

    json.dump(error_obj, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")

    console.print(f"[red]Error:[/red] {message}", markup=True, highlight=False)
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
