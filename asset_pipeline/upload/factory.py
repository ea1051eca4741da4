from asset_pipeline.config.settings import Settings
from asset_pipeline.upload.base import BaseUploadClient
from asset_pipeline.upload.cloudinary_client_adapter import CloudinaryUploadClient
from asset_pipeline.upload.example_client_adapter import ExampleUploadClient


class UploadClientFactory:
    """Creates the configured upload adapter."""

    PROVIDERS = ("cloudinary", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseUploadClient:
        provider = settings.upload_provider.lower()
        if provider == "example":
            return ExampleUploadClient(
                folder=settings.upload_folder,
                min_data_length=settings.upload_min_data_length,
            )
        if provider == "cloudinary":
            return CloudinaryUploadClient(
                upload_url=cls._resolve_upload_url(settings),
                upload_preset=cls._require(settings.upload_preset, "upload_preset"),
                folder=settings.upload_folder,
                timeout_seconds=settings.upload_timeout_seconds,
                max_retries=settings.upload_max_retries,
                retry_backoff_seconds=settings.upload_retry_backoff_seconds,
                min_data_length=settings.upload_min_data_length,
            )
        raise ValueError(
            f"Unknown upload provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @classmethod
    def _resolve_upload_url(cls, settings: Settings) -> str:
        cloud_name = cls._require(settings.upload_cloud_name, "upload_cloud_name")
        base_url = settings.upload_api_base_url.rstrip("/")
        return f"{base_url}/{cloud_name}/image/upload"

    @staticmethod
    def _require(value: str, name: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError(f"{name} is required for upload_provider=cloudinary")
        return value
