"""Process-wide rendering settings."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Rendering settings loaded from environment variables with JSONAPI_ prefix."""

    # URL overrides, take precedence over the request-derived values
    host: Optional[str] = None
    scheme: Optional[str] = None
    # Used when neither the view nor the render context sets one
    namespace: str = ""
    # Member names
    field_transformation: Optional[Literal["underscore", "dasherize", "camelize"]] = None
    # Output
    remove_links: bool = False
    validate_documents: bool = False

    model_config = SettingsConfigDict(env_prefix="JSONAPI_", env_file=".env")


@lru_cache
def get_settings() -> Settings:
    """Return cached rendering settings instance."""
    return Settings()
