"""Decoding of ``data:`` URIs produced by the browser canvas."""

import base64
import binascii
from urllib.parse import unquote_to_bytes

from asset_pipeline.upload.exceptions import InvalidImageDataError
from asset_pipeline.upload.models import ImagePayload

_DEFAULT_MIME = "application/octet-stream"


def is_remote_url(image_data: str) -> bool:
    return image_data.startswith(("http://", "https://"))


def decode_data_uri(image_data: str) -> ImagePayload:
    """Split a data URI into its MIME type and decoded bytes.

    Raises:
        InvalidImageDataError: if the string is not a data URI, the payload
            cannot be decoded, or it decodes to nothing.
    """
    if not image_data.startswith("data:"):
        raise InvalidImageDataError("Image data is not a data URI")
    header, sep, body = image_data[5:].partition(",")
    if not sep:
        raise InvalidImageDataError("Data URI has no payload separator")

    params = header.split(";")
    mime_type = params[0] or _DEFAULT_MIME
    if "base64" in params[1:]:
        try:
            content = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidImageDataError(f"Invalid base64 payload: {exc}") from exc
    else:
        content = unquote_to_bytes(body)

    if not content:
        raise InvalidImageDataError("Data URI payload is empty")
    return ImagePayload(content=content, mime_type=mime_type)
