"""Lookup table from resource type to view."""

from __future__ import annotations

import logging
from typing import Any, Iterator

from jsonapi_views.core.errors import ConfigurationError
from jsonapi_views.views.base import JSONAPIView

log = logging.getLogger(__name__)


class ViewRegistry:
    """Map resource types (and view classes) to view instances.

    Views are registered once at startup. A view whose ``Meta.type_`` is unset
    can still be registered by class; rendering it raises the configuration
    error instead.
    """

    def __init__(self) -> None:
        self._by_class: dict[type[JSONAPIView], JSONAPIView] = {}
        self._by_type: dict[str, JSONAPIView] = {}

    def register(self, view: type[JSONAPIView] | JSONAPIView) -> Any:
        """Register a view class or instance. Returns its argument, so it works as a decorator."""
        instance = view(registry=self) if isinstance(view, type) else view
        if not isinstance(instance, JSONAPIView):
            raise ConfigurationError(f"{view!r} is not a JSONAPIView.")
        view_cls = type(instance)
        type_ = getattr(instance.Meta, "type_", None)
        if type_:
            existing = self._by_type.get(type_)
            if existing is not None and type(existing) is not view_cls:
                raise ConfigurationError(
                    f"Resource type '{type_}' is already registered by {type(existing).__name__}."
                )
            self._by_type[type_] = instance
        self._by_class[view_cls] = instance
        log.debug("Registered view %s for type %r", view_cls.__name__, type_)
        return view

    def get(self, type_: str) -> JSONAPIView:
        """Return the view registered for ``type_``."""
        try:
            return self._by_type[type_]
        except KeyError:
            raise ConfigurationError(f"No view registered for resource type '{type_}'.") from None

    def resolve(self, target: str | type[JSONAPIView] | JSONAPIView) -> JSONAPIView:
        """Return the view instance for a type name, a view class or an instance.

        Unregistered view classes are instantiated against this registry.
        """
        if isinstance(target, JSONAPIView):
            return target
        if isinstance(target, str):
            return self.get(target)
        if isinstance(target, type) and issubclass(target, JSONAPIView):
            instance = self._by_class.get(target)
            return instance if instance is not None else target(registry=self)
        raise ConfigurationError(f"Cannot resolve {target!r} to a view.")

    def __contains__(self, type_: object) -> bool:
        return type_ in self._by_type

    def __iter__(self) -> Iterator[JSONAPIView]:
        return iter(self._by_class.values())

    def __len__(self) -> int:
        return len(self._by_class)


default_registry = ViewRegistry()
