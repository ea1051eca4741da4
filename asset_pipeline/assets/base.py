from abc import ABC, abstractmethod

from asset_pipeline.assets.models import AssetRecord


class BaseAssetTier(ABC):
    """Contract for one local storage tier that may hold an item's images."""

    name: str = ""

    @abstractmethod
    async def fetch(self, item_id: str) -> AssetRecord | None:
        """Look up the record stored for an item.

        Args:
            item_id: Stringified cart item id.

        Returns:
            The stored AssetRecord, or None when this tier has nothing for the item.

        Raises:
            AssetTierError: if the stored value cannot be decoded.
        """

    @abstractmethod
    async def discard(self, item_id: str) -> None:
        """Forget whatever this tier holds for the item."""
