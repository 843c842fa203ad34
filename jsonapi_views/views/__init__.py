"""View declarations and the view registry."""

from .base import IncludeMode, JSONAPIView, Relationship, attribute
from .registry import ViewRegistry, default_registry

__all__ = [
    "IncludeMode",
    "JSONAPIView",
    "Relationship",
    "ViewRegistry",
    "attribute",
    "default_registry",
]
