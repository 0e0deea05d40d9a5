"""Tests for utils/errors.py — error codes, hints, structured output."""
import json

from wechat_media.utils.errors import (
    APIError,
    ConfigMissingFieldError,
    CredentialWriteError,
    HTTPStatusError,
    NetworkError,
    ResponseParseError,
    WeChatMediaError,
    _get_hint,
    handle_error,
)


# ── Exception attributes ──────────────────────────────────────────────

def test_all_errors_share_base():
    for err in (NetworkError("x"), ResponseParseError("x"), APIError("x", 1), CredentialWriteError("x")):
        assert isinstance(err, WeChatMediaError)


def test_missing_field_message():
    err = ConfigMissingFieldError("secret", "config.yaml")
    assert err.field == "secret"
    assert str(err) == "Missing required config field 'secret' in config.yaml"


def test_api_error_message():
    err = APIError("Token refresh", 40013, "invalid appid")
    assert str(err) == "Token refresh failed: API error 40013 - invalid appid"


def test_http_status_message():
    assert str(HTTPStatusError("Material listing", 503, "Service Unavailable")) == \
        "Material listing failed (HTTP 503 Service Unavailable)"


# ── _get_hint ─────────────────────────────────────────────────────────

def test_hint_expired_token():
    assert "auth refresh" in _get_hint(APIError("x", 42001))


def test_hint_ip_whitelist():
    assert "whitelist" in _get_hint(APIError("x", 40164)).lower()


def test_hint_unknown_errcode():
    assert _get_hint(APIError("x", 99999)) is None


def test_hint_by_class():
    assert "network" in _get_hint(NetworkError("boom")).lower()
    assert "config" in _get_hint(ConfigMissingFieldError("appid")).lower()


def test_hint_plain_exception():
    assert _get_hint(RuntimeError("something")) is None


# ── handle_error JSON output ──────────────────────────────────────────

def test_handle_error_api_error(capsys):
    handle_error(APIError("Token refresh", 40125, "invalid appsecret"))
    data = json.loads(capsys.readouterr().out)
    assert data["error"] is True
    assert data["code"] == "API_ERROR"
    assert data["errcode"] == 40125
    assert "hint" in data


def test_handle_error_network(capsys):
    handle_error(NetworkError("connection refused"))
    assert json.loads(capsys.readouterr().out)["code"] == "CONNECTION_ERROR"


def test_handle_error_generic(capsys):
    handle_error(RuntimeError("something went wrong"))
    data = json.loads(capsys.readouterr().out)
    assert data["code"] == "RUNTIME_ERROR"
    assert "hint" not in data


def test_handle_error_keeps_unicode(capsys):
    handle_error(APIError("Material listing", 40007, "不合法的媒体文件id"))
    assert "不合法的媒体文件id" in capsys.readouterr().out
