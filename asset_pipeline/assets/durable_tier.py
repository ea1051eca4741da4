from asset_pipeline.assets.base import BaseAssetTier
from asset_pipeline.assets.models import AssetRecord
from asset_pipeline.database.repositories.asset_record_repository import AssetRecordRepository


class DurableStoreTier(BaseAssetTier):
    """Reads records from the PostgreSQL-backed durable store."""

    name = "durable"

    def __init__(self, repo: AssetRecordRepository) -> None:
        self._repo = repo

    async def fetch(self, item_id: str) -> AssetRecord | None:
        data = await self._repo.find_by_item_id(item_id)
        if data is None:
            return None
        return AssetRecord.from_mapping(item_id, data, self.name)

    async def discard(self, item_id: str) -> None:
        await self._repo.delete(item_id)
