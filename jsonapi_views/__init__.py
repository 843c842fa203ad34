"""Render application data as JSON:API v1.1 compound documents."""

from .assembler import DocumentAssembler, render_many, render_one
from .config import Settings, get_settings
from .context import RenderContext
from .core.document import JSONAPIDocumentBuilder
from .core.errors import ConfigurationError, DataError, JSONAPIErrorBuilder, JSONAPIViewError
from .core.markers import NOT_LOADED
from .utils.query_string import flatten
from .views import IncludeMode, JSONAPIView, ViewRegistry, attribute, default_registry

__all__ = [
    "ConfigurationError",
    "DataError",
    "DocumentAssembler",
    "IncludeMode",
    "JSONAPIDocumentBuilder",
    "JSONAPIErrorBuilder",
    "JSONAPIView",
    "JSONAPIViewError",
    "NOT_LOADED",
    "RenderContext",
    "Settings",
    "ViewRegistry",
    "attribute",
    "default_registry",
    "flatten",
    "get_settings",
    "render_many",
    "render_one",
]
