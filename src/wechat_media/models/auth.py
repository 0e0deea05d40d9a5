"""Auth-related data models."""

from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from wechat_media.models.results import ApiResult, Failure, Malformed, Success

# 3000-01-01T00:00:00Z; keeps expires_at convertible to a local datetime
MAX_EXPIRES_AT = 32_503_680_000


class Credential(BaseModel):
    """An access token and the unix time at which we stop trusting it."""
    model_config = ConfigDict(frozen=True)

    access_token: str
    expires_at: int = Field(ge=0, le=MAX_EXPIRES_AT)

    def is_valid(self, now: float) -> bool:
        return self.expires_at > now


class TokenResponse(BaseModel):
    """Response from the /cgi-bin/token endpoint."""
    access_token: str = ""
    expires_in: int = 0
    errcode: int = 0
    errmsg: str = ""

    def classify(self) -> ApiResult:
        # A token wins over an errcode when both are present.
        if self.access_token and self.expires_in:
            return Success(payload=self)
        if self.errcode:
            return Failure(code=self.errcode, message=self.errmsg)
        return Malformed()


class TokenStatus(BaseModel):
    """Current state of the cached access token."""
    has_token: bool
    is_expired: bool
    expires_at: datetime | None = None
    seconds_remaining: int | None = None
