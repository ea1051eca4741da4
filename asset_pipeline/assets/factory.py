from collections.abc import Callable
from typing import ClassVar

from asset_pipeline.assets.base import BaseAssetTier
from asset_pipeline.assets.durable_tier import DurableStoreTier
from asset_pipeline.assets.memory_tier import MemoryTier
from asset_pipeline.assets.reader import TieredAssetReader
from asset_pipeline.assets.session_tier import SessionStoreTier
from asset_pipeline.config.settings import Settings
from asset_pipeline.database.repositories.asset_record_repository import AssetRecordRepository
from asset_pipeline.session.context import SessionContext

_TierBuilder = Callable[[Settings, SessionContext], BaseAssetTier]


class AssetTierFactory:
    """Builds the ordered tier list named by ``settings.asset_tiers``."""

    BUILDERS: ClassVar[dict[str, _TierBuilder]] = {
        "durable": lambda settings, _session: DurableStoreTier(
            AssetRecordRepository(settings.asset_store_table)
        ),
        "session_full": lambda settings, session: SessionStoreTier.full(
            session.session_storage, settings.session_key_prefix
        ),
        "session_compressed": lambda settings, session: SessionStoreTier.compressed(
            session.session_storage, settings.session_key_prefix
        ),
        "memory": lambda _settings, session: MemoryTier(session.memory_images),
    }

    @classmethod
    def tier_names(cls, settings: Settings) -> list[str]:
        return [name.strip().lower() for name in settings.asset_tiers.split(",") if name.strip()]

    @classmethod
    def create(cls, settings: Settings, session: SessionContext) -> list[BaseAssetTier]:
        tiers = []
        for name in cls.tier_names(settings):
            builder = cls.BUILDERS.get(name)
            if builder is None:
                raise ValueError(
                    f"Unknown asset tier '{name}'. Choose from: {list(cls.BUILDERS)}"
                )
            tiers.append(builder(settings, session))
        return tiers

    @classmethod
    def create_reader(cls, settings: Settings, session: SessionContext) -> TieredAssetReader:
        return TieredAssetReader(cls.create(settings, session))
