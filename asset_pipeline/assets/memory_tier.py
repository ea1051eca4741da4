from collections.abc import Mapping, MutableMapping
from typing import Any

from asset_pipeline.assets.base import BaseAssetTier
from asset_pipeline.assets.models import AssetRecord


class MemoryTier(BaseAssetTier):
    """Reads records from the volatile in-process image map."""

    name = "memory"

    def __init__(self, images: MutableMapping[str, Mapping[str, Any]]) -> None:
        self._images = images

    async def fetch(self, item_id: str) -> AssetRecord | None:
        data = self._images.get(item_id)
        if data is None:
            return None
        return AssetRecord.from_mapping(item_id, data, self.name)

    async def discard(self, item_id: str) -> None:
        self._images.pop(item_id, None)
