"""Permanent material listing service."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from wechat_media.client import WeChatClient
from wechat_media.models.materials import MaterialItem, MaterialRequest, MaterialResponse
from wechat_media.models.results import unwrap
from wechat_media.utils.errors import ResponseParseError

logger = logging.getLogger(__name__)

BATCHGET_PATH = "/cgi-bin/material/batchget_material"

# Single fixed page
PAGE_SIZE = 20


class MaterialService:
    """Service for reading the account's material library."""

    def __init__(self, client: WeChatClient) -> None:
        self._client = client

    def list_image_assets(self) -> list[MaterialItem]:
        """List the first page of image materials, in server order."""
        action = "Material listing"
        request = MaterialRequest(type="image", offset=0, count=PAGE_SIZE)
        data = self._client.post(BATCHGET_PATH, action=action, body=request.model_dump())

        # A JSON null body carries neither shape.
        try:
            response = MaterialResponse.model_validate(data if data is not None else {})
        except ValidationError as e:
            raise ResponseParseError(f"{action} failed: unexpected response: {e}") from e

        items: list[MaterialItem] = unwrap(response.classify(), action)
        logger.info(
            "Fetched %d image materials (total %s)",
            len(items),
            response.total_count if response.total_count is not None else "unknown",
        )
        return items
