from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    github_graphql_url: str = "https://api.github.com/graphql"
    github_token: str | None = None
    github_timeout_seconds: float = 20.0
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1
    log_level: str = "INFO"
    rate_limit_per_minute: int = 30
    rate_limit_window_seconds: int = 60
    cache_ttl_seconds: float = 60.0
    max_identities: int = 10
    calendar_cell_size: int = 12
    calendar_cell_gap: int = 4

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
