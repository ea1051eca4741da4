import re
from collections.abc import Iterable

from asset_pipeline.logging.logger import Log
from asset_pipeline.session.context import SessionContext


def remove_orphaned_images(
    session: SessionContext,
    valid_ids: Iterable[str],
    prefix: str,
) -> list[str]:
    """Drop session image keys that belong to items no longer in the cart.

    Matches ``{prefix}_{id}``, ``{prefix}_full_{id}`` and the legacy
    ``{prefix}_hq_{id}``. Returns the removed keys.
    """
    pattern = re.compile(rf"^{re.escape(prefix)}_(?:full_|hq_)?(.+)$")
    keep = {str(item_id) for item_id in valid_ids}

    orphaned = []
    for key in list(session.session_storage):
        match = pattern.match(key)
        if match and match.group(1) not in keep:
            orphaned.append(key)

    for key in orphaned:
        del session.session_storage[key]
        Log.debug(f"Removed orphaned session image {key}")
    if orphaned:
        Log.info(f"Removed {len(orphaned)} orphaned session images")
    return orphaned
