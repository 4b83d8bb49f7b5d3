"""Application settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    catalogue_base_url: str = "https://catalogue.dataspace.copernicus.eu/odata/v1"
    token_url: str = (
        "https://identity.dataspace.copernicus.eu/auth/realms/CDSE/protocol/openid-connect/token"
    )
    client_id: str = "cdse-public"

    # Mission scope of every search
    product_family: str = "SENTINEL-1"
    collection_name: str = "SENTINEL-1"
    product_type: str = "OCN"
    # Hard cap of the Products endpoint for $top
    max_page_size: int = 1000

    request_timeout_seconds: float = 90
    download_timeout_seconds: float = 300
    download_max_attempts: int = 3
    max_redirects: int = 10

    # Data space credentials (only needed for downloads)
    username: str | None = None
    password: str | None = None

    prometheus_port: int | None = None
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="S1OCN_",
        extra="ignore",
    )
