import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from asset_pipeline.assets.exceptions import AssetRecordParseError

# Highest fidelity first. "previewImage" is the legacy name of the display variant.
VARIANT_PRIORITY: tuple[str, ...] = (
    "highQualityPrintImage",
    "adminCroppedImage",
    "printImage",
    "originalImage",
    "displayImage",
    "previewImage",
)


@dataclass(frozen=True)
class AssetRecord:
    """Named image variants held for one cart item in one storage tier."""

    item_id: str
    variants: Mapping[str, Any] = field(default_factory=dict)
    source: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.variants

    @classmethod
    def from_mapping(cls, item_id: str, data: Any, source: str) -> "AssetRecord":
        if not isinstance(data, Mapping):
            raise AssetRecordParseError(
                f"Record for item {item_id} in {source} must be an object, "
                f"got {type(data).__name__}"
            )
        return cls(item_id=item_id, variants=dict(data), source=source)

    @classmethod
    def from_json(cls, item_id: str, raw: str, source: str) -> "AssetRecord":
        """Decode a JSON-serialized record.

        Raises:
            AssetRecordParseError: if the payload is not valid JSON or not an object.
        """
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise AssetRecordParseError(
                f"Invalid JSON for item {item_id} in {source}: {exc}"
            ) from exc
        return cls.from_mapping(item_id, data, source)
