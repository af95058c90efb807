from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    gnews_api_key: str | None = None
    gnews_base_url: str = "https://gnews.io/api/v4"

    cache_ttl_seconds: int = 600
    request_timeout: float = 10.0
    default_lang: str = "en"
    default_country: str = "us"
    default_max_articles: int = 10
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
