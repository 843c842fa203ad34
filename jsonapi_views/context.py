"""Request-scoped values consumed by URL derivation and custom fields."""

from __future__ import annotations

from typing import Any, Mapping

from fastapi import Request
from pydantic import BaseModel, ConfigDict, Field

from jsonapi_views.config import Settings


class RenderContext(BaseModel):
    """Scheme, host and namespace of the request a document is rendered for.

    ``state`` carries arbitrary request-scoped values (the current user, a
    locale) that custom field computations may read.
    """

    model_config = ConfigDict(frozen=True)

    scheme: str | None = None
    host: str | None = None
    namespace: str | None = None
    state: Mapping[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_request(cls, request: Request, **state: Any) -> "RenderContext":
        """Build a context from an inbound FastAPI request."""
        return cls(scheme=request.url.scheme, host=request.url.netloc, state=state)

    @property
    def origin(self) -> str:
        """Return ``scheme://host``, or an empty string for relative URLs."""
        if not self.host:
            return ""
        return f"{self.scheme or 'http'}://{self.host}"

    def with_overrides(self, settings: Settings) -> "RenderContext":
        """Apply the configured host/scheme overrides and default namespace."""
        update: dict[str, Any] = {}
        if settings.host:
            update["host"] = settings.host
        if settings.scheme:
            update["scheme"] = settings.scheme
        if self.namespace is None:
            update["namespace"] = settings.namespace
        return self.model_copy(update=update) if update else self
