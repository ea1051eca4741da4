from collections.abc import Callable
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from asset_pipeline.logging.logger import Log
from asset_pipeline.upload.base import BaseUploadClient
from asset_pipeline.upload.data_uri import decode_data_uri, is_remote_url
from asset_pipeline.upload.exceptions import (
    InvalidImageDataError,
    UploadError,
    UploadNetworkError,
    UploadRejectedError,
)
from asset_pipeline.upload.models import UploadOutcome

_RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


class CloudinaryUploadClient(BaseUploadClient):
    """Unsigned preset uploads to a Cloudinary-style ``/image/upload`` endpoint."""

    def __init__(
        self,
        *,
        upload_url: str,
        upload_preset: str,
        folder: str,
        timeout_seconds: float,
        max_retries: int = 2,
        retry_backoff_seconds: float = 1.0,
        min_data_length: int = 20,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._upload_url = upload_url
        self._upload_preset = upload_preset
        self._folder = folder
        self._max_retries = max(0, max_retries)
        self._retry_backoff_seconds = max(0.0, retry_backoff_seconds)
        self._min_data_length = min_data_length
        self._client = httpx.AsyncClient(timeout=timeout_seconds, transport=transport)

    async def upload(self, image_data: str, destination_id: str) -> UploadOutcome:
        try:
            body = await self._upload_with_retry(image_data, destination_id)
            return self._parse_success(body, destination_id)
        except UploadError as exc:
            Log.error(f"Upload of {destination_id} failed: {exc}")
            return UploadOutcome.failed(str(exc))
        except Exception as exc:
            Log.exception(f"Unexpected error uploading {destination_id}")
            return UploadOutcome.failed(str(exc) or type(exc).__name__)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _upload_with_retry(self, image_data: str, destination_id: str) -> dict[str, Any]:
        data, files = self._build_form(image_data, destination_id)
        retrying = AsyncRetrying(
            retry=retry_if_exception(self._is_retryable),
            stop=stop_after_attempt(self._max_retries + 1),
            wait=wait_exponential(multiplier=self._retry_backoff_seconds),
            before_sleep=self._log_retry(destination_id),
            reraise=True,
        )
        return await retrying(self._post, data, files)

    @staticmethod
    def _log_retry(destination_id: str) -> Callable[[RetryCallState], None]:
        def log(retry_state: RetryCallState) -> None:
            delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
            exc = retry_state.outcome.exception() if retry_state.outcome else None
            Log.warning(
                f"Upload of {destination_id} failed (attempt {retry_state.attempt_number}), "
                f"retrying in {delay:.1f}s: {exc}"
            )

        return log

    def _build_form(
        self, image_data: str, destination_id: str
    ) -> tuple[dict[str, str], dict[str, tuple[str, bytes, str]] | None]:
        if not isinstance(image_data, str) or len(image_data) < self._min_data_length:
            raise InvalidImageDataError("Image data is too short to be a valid image")
        data = {
            "upload_preset": self._upload_preset,
            "public_id": destination_id,
            "folder": self._folder,
        }
        if is_remote_url(image_data):
            data["file"] = image_data
            return data, None
        payload = decode_data_uri(image_data)
        filename = f"{destination_id.rsplit('/', 1)[-1]}.{payload.extension}"
        return data, {"file": (filename, payload.content, payload.mime_type)}

    async def _post(
        self,
        data: dict[str, str],
        files: dict[str, tuple[str, bytes, str]] | None,
    ) -> dict[str, Any]:
        try:
            response = await self._client.post(self._upload_url, data=data, files=files)
        except httpx.TimeoutException as exc:
            raise UploadNetworkError(f"Upload timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise UploadNetworkError(f"Upload network error: {exc}") from exc

        if not response.is_success:
            raise UploadRejectedError(
                f"Upload failed with status {response.status_code}: "
                f"{self._error_detail(response)}",
                status_code=response.status_code,
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise UploadError(f"Upload host returned invalid JSON: {exc}") from exc
        if not isinstance(body, dict):
            raise UploadError("Upload host returned a non-object response")
        return body

    @staticmethod
    def _is_retryable(exc: BaseException) -> bool:
        if isinstance(exc, UploadRejectedError):
            return exc.status_code in _RETRYABLE_STATUS
        return isinstance(exc, UploadNetworkError)

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text.strip() or response.reason_phrase
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if isinstance(error, str) and error:
                return error
        return response.text.strip()

    @staticmethod
    def _parse_success(body: dict[str, Any], destination_id: str) -> UploadOutcome:
        url = body.get("secure_url") or body.get("url")
        if not url:
            raise UploadError("Upload host response has no URL")
        return UploadOutcome.succeeded(str(url), str(body.get("public_id") or destination_id))
