"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    app_name: str = "ModCxBlogLatestArticle"
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Blog
    blog_url: str = "https://modcxblog.cn/"
    http_timeout_seconds: float = 15.0
    user_agent: str = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"
    fetch_retries: int = 3

    # Storage
    cache_dir: Path = Path(".")
    assets_dir: Path = Path(".")  # holds fonts/, icons/ and logo.png

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def cache_image_path(self) -> Path:
        return self.cache_dir / "latest.png"

    @property
    def cache_meta_path(self) -> Path:
        return self.cache_dir / "cache.json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
