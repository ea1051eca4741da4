from abc import ABC, abstractmethod

from asset_pipeline.upload.models import UploadOutcome


class BaseUploadClient(ABC):
    """Contract for remote asset host adapters."""

    @abstractmethod
    async def upload(self, image_data: str, destination_id: str) -> UploadOutcome:
        """Upload one image under the given destination id.

        Args:
            image_data: Data URI (or remote URL) of the image.
            destination_id: Caller-chosen public id on the remote host.

        Returns:
            UploadOutcome. Implementations never raise; every failure is
            reported through ``UploadOutcome.failed``.
        """

    async def aclose(self) -> None:
        """Release network resources held by the adapter."""
