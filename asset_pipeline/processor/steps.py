import time
from collections.abc import Callable

from asset_pipeline.assets.reader import TieredAssetReader
from asset_pipeline.assets.selector import select_best
from asset_pipeline.logging.logger import Log
from asset_pipeline.processor.pipeline import ItemContext, PipelineStep
from asset_pipeline.upload.base import BaseUploadClient


def destination_id(batch_label: str, index: int, epoch_millis: int) -> str:
    """Per-item public id: ``{batch}/item{n}_{millis}`` with a 1-based ``n``."""
    return f"{batch_label}/item{index + 1}_{epoch_millis}"


class ResolveRecordStep(PipelineStep):
    def __init__(self, reader: TieredAssetReader) -> None:
        self._reader = reader

    async def run(self, context: ItemContext) -> ItemContext:
        context.record = await self._reader.resolve(context.item.id)
        return context


class SelectImageStep(PipelineStep):
    async def run(self, context: ItemContext) -> ItemContext:
        # A resolved record is authoritative; inline fields are only the fallback.
        if context.record is not None:
            context.image_data = select_best(context.record.variants)
            source = context.record.source
        else:
            context.image_data = select_best(context.item.image_variants())
            source = "inline"
        if context.image_data is None:
            Log.warning(f"Item {context.item.id} has no usable image (source: {source})")
        else:
            Log.debug(
                f"Item {context.item.id}: selected {len(context.image_data)} chars from {source}"
            )
        return context


class UploadImageStep(PipelineStep):
    def __init__(
        self,
        upload_client: BaseUploadClient,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._upload_client = upload_client
        self._clock = clock

    async def run(self, context: ItemContext) -> ItemContext:
        if context.image_data is None:
            raise ValueError("ItemContext.image_data must be set before upload")
        context.destination_id = destination_id(
            context.batch_label, context.index, int(self._clock() * 1000)
        )
        context.outcome = await self._upload_client.upload(
            context.image_data, context.destination_id
        )
        return context
