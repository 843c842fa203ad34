"""Base view for describing how a resource type renders as JSON:API."""

from __future__ import annotations

from collections.abc import Collection
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Mapping, NamedTuple

from jsonapi_views.core.errors import ConfigurationError, DataError
from jsonapi_views.core.markers import NOT_LOADED
from jsonapi_views.sqlalchemy.helpers import loaded_value
from jsonapi_views.utils.query_string import encode_query

if TYPE_CHECKING:
    from jsonapi_views.context import RenderContext
    from jsonapi_views.views.registry import ViewRegistry


class IncludeMode(str, Enum):
    """How a relationship is rendered."""

    LINKAGE = "linkage"
    INCLUDE = "include"


class Relationship(NamedTuple):
    """A resolved relationship: its name, target view and inclusion mode."""

    name: str
    view: "JSONAPIView"
    mode: IncludeMode


def attribute(func: Callable[..., Any] | str | None = None, *, name: str | None = None) -> Any:
    """Mark a view method as the computation for an attribute.

    The method is called as ``method(data, context)``. Usable bare (the
    attribute takes the method name) or with an explicit name::

        @attribute
        def full_name(self, data, context): ...

        @attribute("full-name")
        def compute_full_name(self, data, context): ...
    """
    if isinstance(func, str):
        name, func = func, None

    def decorator(method: Callable[..., Any]) -> Callable[..., Any]:
        method._jsonapi_attribute = name or method.__name__
        return method

    return decorator(func) if callable(func) else decorator


def is_collection(value: Any) -> bool:
    """Return True for to-many relation values: any collection but strings and mappings."""
    return isinstance(value, Collection) and not isinstance(value, (str, bytes, bytearray, Mapping))


def get_value(data: Any, name: str) -> Any:
    """Read ``name`` from a mapping key or an object attribute."""
    try:
        if isinstance(data, Mapping):
            return data[name]
        return getattr(data, name)
    except (KeyError, AttributeError) as exc:
        raise DataError(
            f"Cannot read '{name}' from {type(data).__name__}: {exc}"
        ) from exc


class JSONAPIView:
    """Describe how one resource type renders as JSON:API.

    Configure a subclass through its ``Meta`` class::

        class PostView(JSONAPIView):
            class Meta:
                type_ = "posts"
                namespace = "/api"
                fields = ["title", "body"]
                relationships = {
                    "author": UserView,
                    "comments": (CommentView, "include"),
                }

    Relationship targets may be view classes, view instances or registered
    type names. Methods decorated with :func:`attribute` compute fields that
    are absent from the underlying data or override them.
    """

    class Meta:
        """View metadata (type, namespace, fields, relationships)."""

        type_: str | None = None
        namespace: str | None = None
        fields: list[str] | None = None
        hidden: list[str] = []
        relationships: dict[str, Any] = {}

    _custom_fields: dict[str, str] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        custom_fields: dict[str, str] = {}
        for klass in reversed(cls.__mro__):
            for attr_name, value in vars(klass).items():
                field_name = getattr(value, "_jsonapi_attribute", None)
                if field_name:
                    custom_fields[field_name] = attr_name
        cls._custom_fields = custom_fields

    def __init__(self, registry: "ViewRegistry | None" = None) -> None:
        if registry is None:
            from jsonapi_views.views.registry import default_registry

            registry = default_registry
        self.registry = registry

    def __repr__(self) -> str:
        return f"<{type(self).__name__} type={getattr(self.Meta, 'type_', None)!r}>"

    def type(self) -> str:
        """Return the resource type."""
        type_ = getattr(self.Meta, "type_", None)
        if not type_:
            raise ConfigurationError(f"{type(self).__name__}.Meta.type_ must be set.")
        return type_

    def fields(self) -> list[str]:
        """Return the declared attribute names, in declaration order."""
        fields = getattr(self.Meta, "fields", None)
        if fields is None:
            raise ConfigurationError(f"{type(self).__name__}.Meta.fields must be set.")
        return [field for field in fields if field != "id"]

    def namespace(self, context: "RenderContext | None" = None) -> str:
        namespace = getattr(self.Meta, "namespace", None)
        if namespace is None and context is not None:
            namespace = context.namespace
        return namespace or ""

    def hidden(self, data: Any) -> set[str]:
        """Return the fields hidden for ``data``. Override for per-item rules."""
        return set(getattr(self.Meta, "hidden", ()) or ())

    def id(self, data: Any) -> str | None:
        """Return the resource id, or None for absent and unloaded data."""
        if data is None or data is NOT_LOADED:
            return None
        value = get_value(data, "id")
        return None if value is None else str(value)

    def relationships(self) -> dict[str, Relationship]:
        """Return the declared relationships with their target views resolved."""
        declared = getattr(self.Meta, "relationships", None) or {}
        resolved: dict[str, Relationship] = {}
        for name, target in declared.items():
            mode = IncludeMode.LINKAGE
            if isinstance(target, tuple):
                try:
                    target, mode = target
                    mode = IncludeMode(mode)
                except ValueError as exc:
                    raise ConfigurationError(
                        f"{type(self).__name__} relationship '{name}' must be a view "
                        f"or a (view, 'include'|'linkage') pair."
                    ) from exc
            resolved[name] = Relationship(name, self.registry.resolve(target), mode)
        return resolved

    def has_custom_field(self, name: str) -> bool:
        return name in self._custom_fields

    def compute_custom_field(self, name: str, data: Any, context: "RenderContext | None") -> Any:
        method = getattr(self, self._custom_fields[name])
        return method(data, context)

    def attribute_value(self, field: str, data: Any, context: "RenderContext | None") -> Any:
        if self.has_custom_field(field):
            return self.compute_custom_field(field, data, context)
        return get_value(data, field)

    def attributes(self, data: Any, context: "RenderContext | None" = None) -> dict[str, Any]:
        """Return the visible attributes of ``data``."""
        hidden = self.hidden(data)
        return {
            field: self.attribute_value(field, data, context)
            for field in self.fields()
            if field not in hidden
        }

    def relationship_value(self, data: Any, name: str) -> Any:
        """Return the raw value of relationship ``name``, or ``NOT_LOADED``."""
        if isinstance(data, Mapping):
            return get_value(data, name)
        try:
            return loaded_value(data, name)
        except AttributeError as exc:
            raise DataError(
                f"Cannot read relationship '{name}' from {type(data).__name__}: {exc}"
            ) from exc

    def links(self, data: Any, context: "RenderContext | None") -> dict[str, str]:
        """Return extra resource links. Override to add links."""
        return {}

    def meta(self, data: Any, context: "RenderContext | None") -> dict[str, Any] | None:
        """Return resource-level meta. Override to add meta."""
        return None

    def url_for(self, data: Any, context: "RenderContext | None" = None) -> str:
        """Return the URL of ``data``, or the collection URL.

        The collection URL is used for ``None``, unloaded relations and
        sequences. A context with a host makes the URL absolute.
        """
        origin = context.origin if context is not None else ""
        base = f"{origin}{self.namespace(context)}/{self.type()}"
        if data is None or data is NOT_LOADED or is_collection(data):
            return base
        return f"{base}/{self.id(data)}"

    def url_for_rel(self, data: Any, relationship: str, context: "RenderContext | None" = None) -> str:
        return f"{self.url_for(data, context)}/relationships/{relationship}"

    def url_for_pagination(
        self,
        data: Any,
        context: "RenderContext | None",
        pagination: Mapping[str, Any] | None,
    ) -> str:
        """Return ``url_for(data)`` with ``page[...]`` query parameters appended."""
        query = encode_query(pagination or {}, prefix="page")
        url = self.url_for(data, context)
        return f"{url}?{query}" if query else url
