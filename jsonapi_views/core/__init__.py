"""Core JSON:API document and error helpers."""

from .document import JSONAPIDocumentBuilder
from .errors import ConfigurationError, DataError, JSONAPIErrorBuilder, JSONAPIViewError
from .markers import NOT_LOADED, is_loaded

__all__ = [
    "ConfigurationError",
    "DataError",
    "JSONAPIDocumentBuilder",
    "JSONAPIErrorBuilder",
    "JSONAPIViewError",
    "NOT_LOADED",
    "is_loaded",
]
