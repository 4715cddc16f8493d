"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

DB_URL_DEFAULT = "sqlite+aiosqlite:///./studio.db"
DB_POOL_SIZE_DEFAULT = 5
DB_MAX_OVERFLOW_DEFAULT = 10
ENV_FILE_DEFAULT = ".env.local"


class DatabaseSettings(BaseSettings):
    """Structured store connection settings."""

    model_config = SettingsConfigDict(env_prefix="STUDIO_DB_")

    url: str = DB_URL_DEFAULT
    pool_size: int = DB_POOL_SIZE_DEFAULT
    max_overflow: int = DB_MAX_OVERFLOW_DEFAULT
    echo: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    def engine_options(self) -> dict[str, object]:
        """Keyword arguments for create_async_engine."""
        options: dict[str, object] = {"echo": self.echo}
        if not self.is_sqlite:
            options["pool_size"] = self.pool_size
            options["max_overflow"] = self.max_overflow
        return options


class IntegrationSettings(BaseSettings):
    """Third-party integration and HTTP surface settings."""

    model_config = SettingsConfigDict(env_prefix="STUDIO_")

    env_file: str = ENV_FILE_DEFAULT
    sync_process_env: bool = True
    internal_token: str = ""
    cors_origins: str = ""
    log_level: str = "INFO"

    def get_cors_origin_list(self) -> list[str]:
        """Parse comma-separated CORS origins."""
        if not self.cors_origins:
            return []
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
