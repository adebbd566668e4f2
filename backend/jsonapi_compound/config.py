"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - unknown_relationship_policy is always a valid UnknownRelationshipPolicy

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults fail fast on unknown relationships; production may opt into "wrap"
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jsonapi_compound.core.domain_types import UnknownRelationshipPolicy


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Relationship resolution
    unknown_relationship_policy: UnknownRelationshipPolicy = UnknownRelationshipPolicy.RAISE
    include_query_param: str = "include"

    @field_validator("unknown_relationship_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        """Accept "RAISE" / " wrap " style values from the environment."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
