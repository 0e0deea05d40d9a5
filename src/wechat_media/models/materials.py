"""Permanent material (media asset) models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from wechat_media.models.results import ApiResult, Failure, Malformed, Success


class MaterialItem(BaseModel):
    """A single image asset from the material library."""
    model_config = ConfigDict(frozen=True)

    media_id: str
    name: str = ""
    url: str = ""


class MaterialRequest(BaseModel):
    """Body of a batchget_material call."""
    type: str = "image"
    offset: int = 0
    count: int = 20


class MaterialResponse(BaseModel):
    """Response from /cgi-bin/material/batchget_material."""
    item: list[MaterialItem] | None = None
    total_count: int | None = None
    item_count: int | None = None
    errcode: int = 0
    errmsg: str = ""

    def classify(self) -> ApiResult:
        # An empty but present item list is a valid, empty page.
        if self.item is not None:
            return Success(payload=self.item)
        if self.errcode:
            return Failure(code=self.errcode, message=self.errmsg)
        return Malformed()
