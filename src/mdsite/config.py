"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    sites_dir: Path = Path(".")
    host: str = "0.0.0.0"
    port: int = 6969
    template_timeout: float = 60.0
    strip_port: bool = False
    debug: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="MDSITE_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def addr(self) -> str:
        """Listen address as ``host:port``."""
        return f"{self.host}:{self.port}"


settings = Settings()
