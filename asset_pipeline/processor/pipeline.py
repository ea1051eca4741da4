from abc import ABC, abstractmethod
from dataclasses import dataclass

from asset_pipeline.assets.models import AssetRecord
from asset_pipeline.cart.models import CartItem
from asset_pipeline.upload.models import UploadOutcome


@dataclass(slots=True)
class ItemContext:
    """State carried through the per-item steps of one batch position."""

    index: int
    item: CartItem
    batch_label: str
    record: AssetRecord | None = None
    image_data: str | None = None
    destination_id: str = ""
    outcome: UploadOutcome | None = None


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: ItemContext) -> ItemContext:
        raise NotImplementedError
