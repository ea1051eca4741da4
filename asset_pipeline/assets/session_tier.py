from collections.abc import Callable, MutableMapping

from asset_pipeline.assets.base import BaseAssetTier
from asset_pipeline.assets.models import AssetRecord


def full_key(prefix: str, item_id: str) -> str:
    return f"{prefix}_full_{item_id}"


def compressed_key(prefix: str, item_id: str) -> str:
    return f"{prefix}_{item_id}"


class SessionStoreTier(BaseAssetTier):
    """Reads JSON-serialized records from the session string store.

    One instance per key layout: ``{prefix}_full_{id}`` holds the full-fidelity
    record, ``{prefix}_{id}`` the size-capped compressed one.
    """

    def __init__(
        self,
        name: str,
        storage: MutableMapping[str, str],
        key_builder: Callable[[str], str],
    ) -> None:
        self.name = name
        self._storage = storage
        self._key_builder = key_builder

    def key_for(self, item_id: str) -> str:
        return self._key_builder(item_id)

    async def fetch(self, item_id: str) -> AssetRecord | None:
        raw = self._storage.get(self.key_for(item_id))
        if not raw:
            return None
        return AssetRecord.from_json(item_id, raw, self.name)

    async def discard(self, item_id: str) -> None:
        self._storage.pop(self.key_for(item_id), None)

    @classmethod
    def full(cls, storage: MutableMapping[str, str], prefix: str) -> "SessionStoreTier":
        return cls("session_full", storage, lambda item_id: full_key(prefix, item_id))

    @classmethod
    def compressed(cls, storage: MutableMapping[str, str], prefix: str) -> "SessionStoreTier":
        return cls("session_compressed", storage, lambda item_id: compressed_key(prefix, item_id))
