"""SQLAlchemy helpers for JSON:API views."""

from .helpers import instance_state, is_unloaded, loaded_value

__all__ = ["instance_state", "is_unloaded", "loaded_value"]
