from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration read from environment variables."""

    app_name: str = Field(default="Recolour Workflow API")
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(asctime)s %(levelname)s [%(environment)s] %(name)s %(message)s")

    # Asset storage
    assets_path: Path = Field(default=Path("recolour-case"))
    uploads_path: Path = Field(default=Path("recolour-case/uploads"))
    uploads_url_prefix: str = Field(default="/api/assets/uploads")

    # Demo data
    seed_demo_data: bool = Field(default=True)
    seed_actor: str = Field(default="operator")

    # Observability configuration
    otel_enabled: bool = Field(default=False)
    otel_service_name: str = Field(default="recolour-api")
    otel_exporter_otlp_endpoint: str | None = Field(default=None)
    otel_exporter_otlp_headers: str | None = Field(default=None)

    class Config:
        env_file = ".env"
        env_prefix = "RECOLOUR_"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of the application settings."""

    return Settings()
