"""Connector configuration using Pydantic Settings.

All configuration is loaded from environment variables.
No secrets are hardcoded.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Used when neither the query nor the store sets top_k.
DEFAULT_TOP_K = 10000


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class SearchMode(str, Enum):
    """Embedding shape a store accepts, fixed at construction."""

    DENSE = "dense"
    SPARSE = "sparse"
    HYBRID = "hybrid"


class PineconeSettings(BaseSettings):
    """Pinecone index configuration.

    Index creation is out of scope; ``host`` must point at an existing
    index (``https://<index>-<project>.svc.<region>.pinecone.io`` or a
    Pinecone Local endpoint).
    """

    model_config = SettingsConfigDict(env_prefix="PINECONE_")

    host: str = Field(
        default="http://localhost:5080",
        description="Index host URL (Pinecone Local default)",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Pinecone API key",
    )
    namespace: str | None = Field(
        default=None,
        description="Namespace applied to every request (unset = default namespace)",
    )
    search_mode: SearchMode = Field(
        default=SearchMode.DENSE,
        description="Embedding shape accepted by add and query",
    )
    top_k: int = Field(
        default=DEFAULT_TOP_K,
        description="Maximum matches returned when a query sets no top_k",
    )
    timestamp_fields: list[str] = Field(
        default_factory=lambda: ["created_at", "updated_at"],
        description="Metadata keys holding [epoch_seconds, fraction] timestamps",
    )


class Settings(BaseSettings):
    """Main connector settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    pinecone: PineconeSettings = Field(default_factory=PineconeSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached connector settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()
