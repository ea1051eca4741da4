from dataclasses import dataclass

from asset_pipeline.cart.models import RemoteUrls

NO_IMAGE_ERROR = "No image data found"


@dataclass(frozen=True)
class UploadResult:
    """Outcome of one batch position. Exactly one of ``urls``/``error`` is set."""

    item_index: int
    urls: RemoteUrls | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.urls is None) == (self.error is None):
            raise ValueError("UploadResult needs exactly one of urls or error")

    @property
    def succeeded(self) -> bool:
        return self.urls is not None

    def to_dict(self) -> dict[str, object]:
        return {
            "itemIndex": self.item_index,
            "urls": self.urls.to_dict() if self.urls else None,
            "error": self.error,
        }


@dataclass(frozen=True)
class UploadSummary:
    uploaded: int
    total: int

    @property
    def failed(self) -> int:
        return self.total - self.uploaded

    @property
    def message(self) -> str:
        return f"{self.uploaded} of {self.total} images uploaded successfully"
