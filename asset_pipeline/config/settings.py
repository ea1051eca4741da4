from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "frame_orders"
    db_username: str = "frame_orders"
    db_password: str = "secret"
    db_pool_max_size: int = 10
    db_connect_timeout_seconds: float = 10.0

    asset_store_table: str = "cart_asset_records"
    asset_tiers: str = "durable,session_full,session_compressed,memory"
    session_key_prefix: str = "cartImage"

    upload_provider: str = "cloudinary"
    upload_api_base_url: str = "https://api.cloudinary.com/v1_1"
    upload_cloud_name: str = ""
    upload_preset: str = ""
    upload_folder: str = "frame-orders"
    upload_timeout_seconds: int = 60
    upload_max_retries: int = 2
    upload_retry_backoff_seconds: float = 1.0
    upload_min_data_length: int = 20
    upload_concurrency: int = 1

    order_endpoint_url: str = "http://localhost:8000/api/orders"
    order_timeout_seconds: int = 30
    order_number_prefix: str = "FR"
    allow_partial_uploads: bool = True
