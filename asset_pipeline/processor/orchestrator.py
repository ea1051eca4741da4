import asyncio
import time
from collections.abc import Callable, Sequence

from asset_pipeline.assets.reader import TieredAssetReader
from asset_pipeline.cart.models import CartItem, RemoteUrls
from asset_pipeline.logging.logger import Log
from asset_pipeline.processor.exceptions import BatchInputError
from asset_pipeline.processor.models import NO_IMAGE_ERROR, UploadResult
from asset_pipeline.processor.pipeline import ItemContext
from asset_pipeline.processor.steps import ResolveRecordStep, SelectImageStep, UploadImageStep
from asset_pipeline.upload.base import BaseUploadClient


class BatchUploadOrchestrator:
    """Resolves, selects and uploads the image of every cart item in a batch.

    Per item: resolve record -> select variant -> upload. Each item's failure
    is captured in its own UploadResult; the returned list always has one
    entry per input item, in input order.

    With ``concurrency == 1`` (the default) items are handled strictly one
    after the other, so only one image payload is in flight at a time. Larger
    values run up to that many items at once.
    """

    def __init__(
        self,
        reader: TieredAssetReader,
        upload_client: BaseUploadClient,
        *,
        concurrency: int = 1,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._resolve = ResolveRecordStep(reader)
        self._select = SelectImageStep()
        self._upload = UploadImageStep(upload_client, clock=clock)
        self._concurrency = max(1, concurrency)

    async def upload_batch(self, items: Sequence[CartItem], batch_label: str) -> list[UploadResult]:
        """Run the per-item chain over ``items``.

        Raises:
            BatchInputError: if ``items`` is not a list/tuple of CartItem or
                ``batch_label`` is empty.
        """
        self._validate(items, batch_label)
        Log.info("Uploading item images", batch=batch_label, items=len(items))

        if self._concurrency == 1:
            results = []
            for index, item in enumerate(items):
                results.append(await self._process_item(index, item, batch_label))
        else:
            semaphore = asyncio.Semaphore(self._concurrency)

            async def bounded(index: int, item: CartItem) -> UploadResult:
                async with semaphore:
                    return await self._process_item(index, item, batch_label)

            results = list(
                await asyncio.gather(*(bounded(i, item) for i, item in enumerate(items)))
            )

        uploaded = sum(1 for result in results if result.succeeded)
        Log.info("Batch uploaded", batch=batch_label, uploaded=uploaded, total=len(items))
        return results

    async def _process_item(self, index: int, item: CartItem, batch_label: str) -> UploadResult:
        context = ItemContext(index=index, item=item, batch_label=batch_label)
        try:
            context = await self._resolve.run(context)
            context = await self._select.run(context)
            if context.image_data is None:
                return UploadResult(item_index=index, error=NO_IMAGE_ERROR)
            context = await self._upload.run(context)
        except Exception as exc:
            Log.exception(f"Item {item.id} at position {index} failed unexpectedly")
            return UploadResult(item_index=index, error=str(exc) or type(exc).__name__)

        outcome = context.outcome
        if outcome is None or not outcome.success or not outcome.url:
            error = (outcome.error if outcome else None) or "Upload failed"
            Log.error(f"Upload failed: {error}", item_id=item.id, position=index)
            return UploadResult(item_index=index, error=error)

        Log.info("Uploaded item image", item_id=item.id, position=index, url=outcome.url)
        return UploadResult(
            item_index=index,
            urls=RemoteUrls(
                original=outcome.url,
                print=outcome.url,
                display=outcome.url,
                public_id=outcome.public_id or context.destination_id,
            ),
        )

    @staticmethod
    def _validate(items: object, batch_label: str) -> None:
        if not isinstance(items, (list, tuple)):
            raise BatchInputError(f"items must be a list, got {type(items).__name__}")
        for index, item in enumerate(items):
            if not isinstance(item, CartItem):
                raise BatchInputError(
                    f"items[{index}] must be a CartItem, got {type(item).__name__}"
                )
        if not batch_label or not str(batch_label).strip():
            raise BatchInputError("batch_label must be a non-empty string")
