class AssetTierError(Exception):
    """Base exception for storage tier failures."""


class AssetRecordParseError(AssetTierError):
    """Raised when a stored record cannot be decoded into an AssetRecord."""
