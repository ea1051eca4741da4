"""Network-free upload adapter.

Handy for local development and for exercising the checkout flow without a
remote host. Register real providers in UploadClientFactory.
"""

from asset_pipeline.upload.base import BaseUploadClient
from asset_pipeline.upload.models import UploadOutcome


class ExampleUploadClient(BaseUploadClient):
    """Pretends every upload succeeds and records what it was given."""

    BASE_URL = "https://assets.example.invalid"

    def __init__(self, folder: str = "frame-orders", min_data_length: int = 20) -> None:
        self._folder = folder
        self._min_data_length = min_data_length
        self.uploads: list[tuple[str, str]] = []

    async def upload(self, image_data: str, destination_id: str) -> UploadOutcome:
        if len(image_data) < self._min_data_length:
            return UploadOutcome.failed("Image data is too short to be a valid image")
        self.uploads.append((destination_id, image_data))
        public_id = f"{self._folder}/{destination_id}"
        return UploadOutcome.succeeded(f"{self.BASE_URL}/{public_id}", public_id)
