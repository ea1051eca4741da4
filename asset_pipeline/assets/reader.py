from collections.abc import Sequence

from asset_pipeline.assets.base import BaseAssetTier
from asset_pipeline.assets.models import AssetRecord
from asset_pipeline.logging.logger import Log


class TieredAssetReader:
    """Resolves an item's image record from an ordered list of storage tiers.

    Tiers are consulted in list order and the first non-empty record wins;
    lower tiers are never touched once a record is found. A tier that raises
    is logged and treated as empty.
    """

    def __init__(self, tiers: Sequence[BaseAssetTier]) -> None:
        self._tiers = list(tiers)

    @property
    def tier_names(self) -> list[str]:
        return [tier.name for tier in self._tiers]

    async def resolve(self, item_id: object) -> AssetRecord | None:
        key = str(item_id)
        for tier in self._tiers:
            try:
                record = await tier.fetch(key)
            except Exception as exc:
                Log.warning(f"Tier {tier.name} unavailable for item {key}: {exc}")
                continue
            if record is None or record.is_empty:
                Log.debug(f"Tier {tier.name} has no record for item {key}")
                continue
            Log.debug(f"Resolved item {key} from tier {tier.name}")
            return record
        return None

    async def discard(self, item_id: object) -> None:
        """Remove the item from every tier. Failures are logged, not raised."""
        key = str(item_id)
        for tier in self._tiers:
            try:
                await tier.discard(key)
            except Exception as exc:
                Log.warning(f"Could not discard item {key} from tier {tier.name}: {exc}")
