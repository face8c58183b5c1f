"""Application configuration from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings

_PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    garden_env: str = "development"
    garden_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Storage
    database_url: str = "sqlite:///./database/garden.db"
    uploads_dir: Path = Path("uploads")
    assets_dir: Path = _PACKAGE_DIR / "static" / "sticker-assets"
    max_upload_bytes: int = 5 * 1024 * 1024

    # Server
    host: str = "127.0.0.1"
    port: int = 5000

    # Projects
    default_creator: str = "Anonymous Gardener"
    seed_demo_data: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def is_production(self) -> bool:
        return self.garden_env.lower() == "production"


settings = Settings()
