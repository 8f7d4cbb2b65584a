"""Application settings loaded from the environment.

All settings can be overridden with ``DOCVIEWER_``-prefixed environment
variables or a local ``.env`` file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the documentation viewer."""

    model_config = SettingsConfigDict(
        env_prefix="DOCVIEWER_",
        env_file=".env",
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    sentry_dsn: str | None = None
    cors_allowed_origins: str = "*"

    # Manifest / document fetch
    manifest_url: str = "http://localhost:8080/docs.json"
    fetch_timeout_seconds: float = 15.0

    # Search
    search_min_chars: int = 2
    search_delay_seconds: float = 0.1

    # Rendering
    renderer_timeout_seconds: float = 10.0

    # Scrolling and emphasis
    header_height: int = 60
    scroll_margin: int = 20
    emphasis_seconds: float = 2.0

    # Activation band of the table-of-contents tracker, as fractions of the
    # scroll container height trimmed from the top and bottom.
    toc_band_top: float = 0.2
    toc_band_bottom: float = 0.7

    # Viewer sessions
    max_sessions: int = 256
    preferences_path: str | None = None

    # Client caching of documents and navigation
    docs_cache_seconds: int = 300

    @property
    def cors_origins_list(self) -> list[str]:
        """Comma-separated CORS origins as a list."""
        if self.cors_allowed_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]


settings = Settings()
