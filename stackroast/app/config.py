"""Application configuration with environment variable support.

All settings can be overridden via environment variables prefixed with ``STACKROAST_``,
or via a ``.env`` file in the project root.

Examples::

    STACKROAST_PORT=9000 stackroast start
    STACKROAST_DATABASE_URL=postgresql+asyncpg://user:pw@db/roasts stackroast start
    STACKROAST_GOOGLE_API_KEY=... stackroast start
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root: two levels up from this file (stackroast/app/config.py -> project/)
_BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """StackRoast configuration — all values overridable via env vars."""

    model_config = SettingsConfigDict(
        env_prefix="STACKROAST_",
        env_file=str(_BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    # Extra browser origins allowed by CORS, besides the app's own localhost origin
    cors_origins: list[str] = []

    # Paths
    data_dir: Path = _BASE_DIR / "data"

    # Logging
    log_level: str = "INFO"

    # Database (falls back to a SQLite file under data_dir)
    database_url_override: str | None = Field(
        default=None,
        validation_alias=AliasChoices("STACKROAST_DATABASE_URL", "DATABASE_URL"),
    )

    # AI roast generation
    google_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("STACKROAST_GOOGLE_API_KEY", "GOOGLE_API_KEY"),
    )
    ai_model: str = "gemini-2.0-flash"
    ai_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    ai_timeout: float = 30.0

    # Votes: use the socket peer address when no forwarding header is present,
    # instead of the shared "unknown" voter slot.
    voter_ip_from_client: bool = False

    @property
    def db_path(self) -> Path:
        return self.data_dir / "stackroast.db"

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return f"sqlite+aiosqlite:///{self.db_path}"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


# Singleton instance — import this everywhere
settings = Settings()
