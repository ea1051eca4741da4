import pytest

from asset_pipeline.upload.data_uri import decode_data_uri, is_remote_url
from asset_pipeline.upload.exceptions import InvalidImageDataError


class TestDecodeDataUri:
    def test_decodes_base64_png(self, png_data_uri: str) -> None:
        payload = decode_data_uri(png_data_uri)
        assert payload.mime_type == "image/png"
        assert payload.content.startswith(b"\x89PNG")
        assert payload.extension == "png"

    def test_jpeg_extension(self) -> None:
        payload = decode_data_uri("data:image/jpeg;base64,/9j/4AAQ")
        assert payload.extension == "jpg"

    def test_percent_encoded_payload(self) -> None:
        payload = decode_data_uri("data:image/svg+xml,%3Csvg%2F%3E")
        assert payload.content == b"<svg/>"
        assert payload.extension == "svg"

    def test_missing_mime_defaults_to_octet_stream(self) -> None:
        payload = decode_data_uri("data:;base64,AAAA")
        assert payload.mime_type == "application/octet-stream"

    def test_not_a_data_uri(self) -> None:
        with pytest.raises(InvalidImageDataError, match="not a data URI"):
            decode_data_uri("blob:https://example.com/123")

    def test_missing_separator(self) -> None:
        with pytest.raises(InvalidImageDataError, match="separator"):
            decode_data_uri("data:image/png;base64")

    def test_invalid_base64(self) -> None:
        with pytest.raises(InvalidImageDataError, match="Invalid base64"):
            decode_data_uri("data:image/png;base64,@@@")

    def test_empty_payload(self) -> None:
        with pytest.raises(InvalidImageDataError, match="empty"):
            decode_data_uri("data:image/png;base64,")


class TestIsRemoteUrl:
    def test_https(self) -> None:
        assert is_remote_url("https://res.cloudinary.com/x.png")

    def test_data_uri(self) -> None:
        assert not is_remote_url("data:image/png;base64,AAAA")
