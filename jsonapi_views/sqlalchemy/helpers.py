"""SQLAlchemy helpers for detecting unloaded relationships."""

from __future__ import annotations

from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm.attributes import NO_VALUE
from sqlalchemy.orm.state import InstanceState

from jsonapi_views.core.markers import NOT_LOADED


def instance_state(instance: Any) -> InstanceState | None:
    """Return the SQLAlchemy instance state, or None for unmapped data."""
    if instance is None or isinstance(instance, (dict, list, tuple, str)):
        return None
    state = inspect(instance, raiseerr=False)
    return state if isinstance(state, InstanceState) else None


def is_unloaded(instance: Any, key: str) -> bool:
    """Return True when ``key`` is a mapped attribute that was never loaded.

    Only persistent and detached instances are considered: reading an unset
    attribute on a transient or pending object never reaches the database.
    """
    state = instance_state(instance)
    if state is None or state.transient or state.pending:
        return False
    if key not in state.attrs:
        return False
    return state.attrs[key].loaded_value is NO_VALUE


def loaded_value(instance: Any, key: str) -> Any:
    """Read ``key`` without triggering a lazy load.

    Returns ``NOT_LOADED`` when the attribute was never fetched, otherwise the
    attribute value. Unknown attributes raise ``AttributeError``.
    """
    if is_unloaded(instance, key):
        return NOT_LOADED
    return getattr(instance, key)
