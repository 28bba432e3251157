"""Configuration management for the brand engine."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    pass


class Settings(BaseSettings):
    """Brand engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    BRAND_ENGINE_ENV: str = Field(default="dev", description="Environment: dev, staging, prod")

    # Remote logo services
    LOGO_SERVICE_URL: str = Field(
        default="https://logo.clearbit.com", description="Brand-logo-by-domain service"
    )
    FAVICON_SERVICE_URL: str = Field(
        default="https://www.google.com", description="Favicon service base URL"
    )
    FAVICON_SIZE: int = Field(default=256, description="Requested favicon size in pixels")

    # Probe / download timeouts (seconds)
    BRAND_API_TIMEOUT: float = Field(default=5.0, description="Brand-logo API probe timeout")
    COMMON_PATH_TIMEOUT: float = Field(default=3.0, description="Common logo path probe timeout")
    LOGO_DOWNLOAD_TIMEOUT: float = Field(default=10.0, description="Logo download timeout")
    LOGO_OUTPUT_DIR: str = Field(
        default="public/images", description="Where downloaded logos are written"
    )

    # Rendering
    VIEWPORT_WIDTH: int = Field(default=1920, description="Screenshot viewport width")
    VIEWPORT_HEIGHT: int = Field(default=1080, description="Screenshot viewport height")
    NAVIGATION_TIMEOUT_MS: int = Field(default=15000, description="Page navigation timeout")
    SETTLE_DELAY_MS: int = Field(
        default=1500, description="Wait after DOM ready for images and fonts"
    )

    # Palette extraction
    PALETTE_CLUSTERS: int = Field(default=6, description="KMeans clusters for screenshot palette")
    PALETTE_MAX_SIZE: int = Field(default=400, description="Max screenshot side before sampling")
    PALETTE_SAMPLE_PIXELS: int = Field(default=15000, description="Pixels sampled for KMeans")


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
