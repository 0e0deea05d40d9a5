"""Tagged outcome of an API response envelope.

WeChat answers every call with one JSON shape that carries either the
payload fields or an errcode/errmsg pair. Envelopes classify themselves
into one of the three variants below so callers branch on a type instead
of on field presence.
"""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar, Union

from pydantic import BaseModel

from wechat_media.utils.errors import APIError, InvalidResponseError

T = TypeVar("T")


class Success(BaseModel, Generic[T]):
    kind: Literal["success"] = "success"
    payload: T


class Failure(BaseModel):
    kind: Literal["failure"] = "failure"
    code: int
    message: str = ""


class Malformed(BaseModel):
    kind: Literal["malformed"] = "malformed"


ApiResult = Union[Success[Any], Failure, Malformed]


def unwrap(result: ApiResult, action: str) -> Any:
    """Return the payload of a Success, raise for the other variants."""
    if isinstance(result, Success):
        return result.payload
    if isinstance(result, Failure):
        raise APIError(action, result.code, result.message)
    raise InvalidResponseError(f"{action} failed: response has neither a payload nor an errcode")
