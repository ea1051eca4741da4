from collections.abc import Mapping, Sequence
from typing import Any

from asset_pipeline.assets.models import VARIANT_PRIORITY


def select_best(
    variants: Mapping[str, Any],
    priority: Sequence[str] = VARIANT_PRIORITY,
) -> str | None:
    """Return the highest-fidelity populated variant, or None if none is usable.

    Works the same for a stored AssetRecord's variants and a cart item's
    inline image fields. Non-string and empty values are skipped.
    """
    for name in priority:
        value = variants.get(name)
        if isinstance(value, str) and value:
            return value
    return None
