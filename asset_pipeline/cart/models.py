from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from asset_pipeline.cart.exceptions import CartItemError

# Browser payload key -> CartItem attribute, for the inline image fields.
IMAGE_FIELDS: dict[str, str] = {
    "highQualityPrintImage": "high_quality_print_image",
    "adminCroppedImage": "admin_cropped_image",
    "printImage": "print_image",
    "originalImage": "original_image",
    "displayImage": "display_image",
    "previewImage": "preview_image",
}

_DISPLAY_FIELDS: dict[str, str] = {
    "frameSize": "frame_size",
    "frameColor": "frame_color",
    "quantity": "quantity",
    "price": "price",
}

_ANNOTATION_FIELDS = ("remoteUrls", "uploadStatus", "uploadError")


@dataclass(frozen=True)
class RemoteUrls:
    """Remote locations of an uploaded image.

    The three named slots point at the same upload; the host is not asked to
    generate separate derivatives.
    """

    original: str
    print: str
    display: str
    public_id: str

    def to_dict(self) -> dict[str, str]:
        return {
            "original": self.original,
            "print": self.print,
            "display": self.display,
            "publicId": self.public_id,
        }


@dataclass(frozen=True)
class CartItem:
    """One frame order line as held in the browser cart."""

    id: str
    frame_size: Any = None
    frame_color: str | None = None
    quantity: int = 1
    price: float = 0.0
    high_quality_print_image: str | None = None
    admin_cropped_image: str | None = None
    print_image: str | None = None
    original_image: str | None = None
    display_image: str | None = None
    preview_image: str | None = None
    attributes: Mapping[str, Any] = field(default_factory=dict)
    remote_urls: RemoteUrls | None = None
    upload_status: str | None = None
    upload_error: str | None = None

    def image_variants(self) -> dict[str, str]:
        """Populated inline image fields keyed by their variant names."""
        variants = {}
        for key, attr in IMAGE_FIELDS.items():
            value = getattr(self, attr)
            if value:
                variants[key] = value
        return variants

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CartItem":
        """Build a CartItem from the browser's camelCase cart entry.

        Keys this model does not know about are kept in ``attributes``.

        Raises:
            CartItemError: if the entry is not an object or has no id.
        """
        if not isinstance(data, Mapping):
            raise CartItemError("Cart item must be an object")
        if data.get("id") in (None, ""):
            raise CartItemError("Cart item is missing 'id'")

        known = {"id", *IMAGE_FIELDS, *_DISPLAY_FIELDS, *_ANNOTATION_FIELDS}
        kwargs: dict[str, Any] = {
            attr: data[key] for key, attr in _DISPLAY_FIELDS.items() if key in data
        }
        for key, attr in IMAGE_FIELDS.items():
            value = data.get(key)
            kwargs[attr] = value if isinstance(value, str) and value else None
        return cls(
            id=str(data["id"]),
            attributes={k: v for k, v in data.items() if k not in known},
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the camelCase shape, annotations included when set."""
        payload: dict[str, Any] = dict(self.attributes)
        payload["id"] = self.id
        for key, attr in _DISPLAY_FIELDS.items():
            payload[key] = getattr(self, attr)
        for key, attr in IMAGE_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                payload[key] = value
        if self.upload_status is not None:
            payload["remoteUrls"] = self.remote_urls.to_dict() if self.remote_urls else None
            payload["uploadStatus"] = self.upload_status
            if self.upload_error is not None:
                payload["uploadError"] = self.upload_error
        return payload
