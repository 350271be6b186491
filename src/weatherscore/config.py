"""Engine settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    forecast_base_url: str = "https://api.open-meteo.com/v1"
    historical_base_url: str = "https://archive-api.open-meteo.com/v1"
    http_timeout: float = 30.0
    forecast_horizon_days: int = 16
    # Cache freshness
    forecast_ttl_hours: float = 6
    historical_ttl_days: float = 7
    averaging_years: int = 5
    # Batch search
    batch_size: int = 10
    high_score_threshold: int = 70
    early_stop_factor: int = 2
    max_candidates: int = 500
    default_limit: int = 50
    long_range_warning_days: int = 30
    cache_database_url: str = "sqlite:///weather_cache.db"
    log_dir: str = "logs"

    model_config = SettingsConfigDict(
        env_prefix="WEATHERSCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()

__all__ = ["settings", "Settings"]
