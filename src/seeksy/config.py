"""Seeksy application configuration via environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Global application settings loaded from environment / .env file."""

    # General
    seeksy_env: str = "development"
    seeksy_debug: bool = True
    seeksy_api_key: str = "changeme-generate-a-real-key"

    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "seeksy"
    postgres_password: str = "seeksy_dev_password"
    postgres_db: str = "seeksy"
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_echo: bool = False               # SQL statement logging, separate from debug

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Hosted backend project URL (render callbacks + public storage links)
    public_base_url: str = "http://localhost:54321"

    @property
    def render_callback_url(self) -> str:
        return f"{self.public_base_url.rstrip('/')}/functions/v1/shotstack-webhook"

    @property
    def certified_watermark_url(self) -> str:
        return (
            f"{self.public_base_url.rstrip('/')}"
            "/storage/v1/object/public/assets/seeksy-certified-watermark.png"
        )

    # Caption segmentation defaults
    caption_max_words: int = 5
    caption_max_duration: float = 2.5   # seconds on screen per segment
    caption_max_chars: int = 32         # one line at 42px on a 1080-wide frame
    caption_pause_threshold: float = 0.6
    caption_min_words_before_comma: int = 3

    # CORS
    cors_origins: list[str] = ["*"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
