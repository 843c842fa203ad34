"""Assemble compound JSON:API documents from views and data."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Iterable, Mapping, Sequence

from pydantic import ValidationError

from jsonapi_views.config import Settings, get_settings
from jsonapi_views.context import RenderContext
from jsonapi_views.core.document import JSONAPIDocumentBuilder
from jsonapi_views.core.errors import DataError
from jsonapi_views.core.markers import NOT_LOADED, is_loaded
from jsonapi_views.pagination import OffsetPagination, PageNumberPagination, PaginationBase
from jsonapi_views.schemas import JSONAPIDocument
from jsonapi_views.utils.inflection import get_transformer
from jsonapi_views.views.base import IncludeMode, JSONAPIView, Relationship, is_collection

log = logging.getLogger(__name__)

IncludeTree = Mapping[str, Any]
ResourceKey = tuple[str, str]


def parse_include(include: Iterable[str] | IncludeTree | None) -> dict[str, Any]:
    """Turn dotted include paths into a nested tree.

    ``["author", "comments.author"]`` -> ``{"author": {}, "comments": {"author": {}}}``
    """
    if include is None:
        return {}
    if isinstance(include, Mapping):
        return dict(include)
    tree: dict[str, Any] = {}
    for path in include:
        node = tree
        for part in (part for part in path.split(".") if part):
            node = node.setdefault(part, {})
    return tree


def _tree_difference(tree: IncludeTree, expanded: IncludeTree) -> dict[str, Any]:
    """Return the branches of ``tree`` that ``expanded`` does not cover."""
    missing: dict[str, Any] = {}
    for name, subtree in tree.items():
        if name not in expanded:
            missing[name] = subtree
            continue
        rest = _tree_difference(subtree, expanded[name])
        if rest:
            missing[name] = rest
    return missing


def _merge_tree(target: dict[str, Any], tree: IncludeTree) -> None:
    for name, subtree in tree.items():
        _merge_tree(target.setdefault(name, {}), subtree)


class _RenderState:
    """Per-call bookkeeping: resources already placed and those still to process.

    Each placed resource remembers the include tree it was expanded with, so
    a later path asking for more of it only expands the new branches.
    """

    def __init__(self) -> None:
        self.expanded: dict[ResourceKey, dict[str, Any]] = {}
        self.included: list[dict[str, Any]] = []
        self.pending: deque[tuple[JSONAPIView, Any, IncludeTree, bool]] = deque()

    def visit(self, key: ResourceKey, include_tree: IncludeTree) -> bool:
        """Mark ``key`` as placed; return False if it already was."""
        if key in self.expanded:
            return False
        self.expanded[key] = {}
        _merge_tree(self.expanded[key], include_tree)
        return True

    def unexpanded(self, key: ResourceKey, include_tree: IncludeTree) -> dict[str, Any]:
        """Record ``include_tree`` for a placed ``key``; return its new branches."""
        missing = _tree_difference(include_tree, self.expanded[key])
        _merge_tree(self.expanded[key], missing)
        return missing


class DocumentAssembler:
    """Render single resources and collections as compound documents.

    Settings are injected once; every render call resolves its context
    against them and keeps its own visited set, so one assembler can be
    shared between concurrent renders.
    """

    document_builder_class: type = JSONAPIDocumentBuilder

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        paginator: PaginationBase | None = None,
    ) -> None:
        self.settings = settings if settings is not None else get_settings()
        self.paginator = paginator
        self.transform_key = get_transformer(self.settings.field_transformation)

    def get_document_builder(self) -> JSONAPIDocumentBuilder:
        """Instantiate the document builder."""
        return self.document_builder_class()

    def resolve_context(self, context: RenderContext | None) -> RenderContext:
        """Return the context with configured overrides applied."""
        if context is None:
            return RenderContext(namespace=self.settings.namespace)
        return context.with_overrides(self.settings)

    def get_paginator(self, page: Mapping[str, Any]) -> PaginationBase:
        if self.paginator is not None:
            return self.paginator
        if "offset" in page or "limit" in page:
            return OffsetPagination()
        return PageNumberPagination()

    def render_one(
        self,
        view: JSONAPIView,
        item: Any,
        context: RenderContext | None = None,
        meta: Mapping[str, Any] | None = None,
        *,
        include: Iterable[str] | IncludeTree | None = None,
    ) -> dict[str, Any]:
        """Render ``item`` (or ``None``) as the primary data of a document."""
        context = self.resolve_context(context)
        state = _RenderState()
        resource = None
        if item is not None:
            include_tree = parse_include(include)
            state.visit(self.resource_key(view, item), include_tree)
            resource = self.build_resource(view, item, context, include_tree, state)
            self._render_pending(context, state)
        links = None
        if not self.settings.remove_links:
            links = {"self": view.url_for(item, context)}
        document = self.get_document_builder().build_single(
            resource,
            included=state.included,
            links=links,
            meta=meta,
        )
        log.debug(
            "Rendered %s resource (%d included)",
            view.type(),
            len(state.included),
        )
        return self._validate(document)

    def render_many(
        self,
        view: JSONAPIView,
        items: Iterable[Any],
        context: RenderContext | None = None,
        meta: Mapping[str, Any] | None = None,
        *,
        page: Mapping[str, Any] | None = None,
        include: Iterable[str] | IncludeTree | None = None,
        total: int | None = None,
        paginator: PaginationBase | None = None,
    ) -> dict[str, Any]:
        """Render ``items`` as the primary data of a collection document.

        ``page`` holds the already-parsed ``page[...]`` parameters; when given,
        pagination links are added and, with ``total``, pagination meta.
        """
        context = self.resolve_context(context)
        items = list(items)
        include_tree = parse_include(include)
        state = _RenderState()
        for item in items:
            state.visit(self.resource_key(view, item), include_tree)
        resources = [
            self.build_resource(view, item, context, include_tree, state) for item in items
        ]
        self._render_pending(context, state)

        links = None
        if page:
            paginator = paginator or self.get_paginator(page)
            if not self.settings.remove_links:
                links = {"self": view.url_for_pagination(items, context, page)}
                links.update(paginator.get_links(view, items, context, page, total=total))
            if total is not None:
                meta = {**paginator.get_meta(page, total=total), **(meta or {})}
        elif not self.settings.remove_links:
            links = {"self": view.url_for(items, context)}

        document = self.get_document_builder().build_collection(
            resources,
            included=state.included,
            links=links,
            meta=meta,
        )
        log.debug(
            "Rendered %d %s resources (%d included)",
            len(resources),
            view.type(),
            len(state.included),
        )
        return self._validate(document)

    def resource_key(self, view: JSONAPIView, item: Any) -> ResourceKey:
        """Return ``(type, id)`` for a present item; a missing id is a data error."""
        resource_id = view.id(item)
        if resource_id is None:
            raise DataError(f"Cannot render a '{view.type()}' resource without an id.")
        return view.type(), resource_id

    def build_resource(
        self,
        view: JSONAPIView,
        item: Any,
        context: RenderContext,
        include_tree: IncludeTree,
        state: _RenderState,
    ) -> dict[str, Any]:
        """Build the resource object for ``item`` and queue its included relations."""
        type_, resource_id = self.resource_key(view, item)
        attributes = view.attributes(item, context)
        resource: dict[str, Any] = {
            "type": type_,
            "id": resource_id,
            "attributes": {self.transform_key(key): value for key, value in attributes.items()},
            "relationships": {},
        }
        for relationship in view.relationships().values():
            key = self.transform_key(relationship.name)
            value = view.relationship_value(item, relationship.name)
            resource["relationships"][key] = self.build_relationship(
                view, item, relationship, key, value, context
            )
        self._expand_relationships(view, item, include_tree, state)
        if not self.settings.remove_links:
            resource["links"] = {"self": view.url_for(item, context), **view.links(item, context)}
        resource_meta = view.meta(item, context)
        if resource_meta:
            resource["meta"] = dict(resource_meta)
        return resource

    def build_relationship(
        self,
        view: JSONAPIView,
        item: Any,
        relationship: Relationship,
        key: str,
        value: Any,
        context: RenderContext,
    ) -> dict[str, Any]:
        """Build the relationship object (linkage plus links) for one relation."""
        target = relationship.view
        if value is None or value is NOT_LOADED:
            data: Any = None
        elif is_collection(value):
            data = [self.identifier(target, related) for related in value]
        else:
            data = self.identifier(target, value)
        relationship_object: dict[str, Any] = {"data": data}
        if not self.settings.remove_links:
            relationship_object["links"] = {
                "self": view.url_for_rel(item, key, context),
                "related": target.url_for(value, context),
            }
        return relationship_object

    def identifier(self, view: JSONAPIView, item: Any) -> dict[str, str]:
        type_, resource_id = self.resource_key(view, item)
        return {"type": type_, "id": resource_id}

    def _expand_relationships(
        self,
        view: JSONAPIView,
        item: Any,
        include_tree: IncludeTree,
        state: _RenderState,
        *,
        requested_only: bool = False,
    ) -> None:
        """Queue the related resources of ``item`` that belong in ``included``."""
        for relationship in view.relationships().values():
            key = self.transform_key(relationship.name)
            subtree = include_tree.get(relationship.name, include_tree.get(key))
            always = relationship.mode is IncludeMode.INCLUDE and not requested_only
            if subtree is None and not always:
                continue
            value = view.relationship_value(item, relationship.name)
            if value is not None and is_loaded(value):
                self._queue_related(relationship.view, value, subtree or {}, state)

    def _queue_related(
        self,
        view: JSONAPIView,
        value: Any,
        include_tree: IncludeTree,
        state: _RenderState,
    ) -> None:
        related_items = value if is_collection(value) else [value]
        for related in related_items:
            key = self.resource_key(view, related)
            if state.visit(key, include_tree):
                state.pending.append((view, related, include_tree, True))
                continue
            missing = state.unexpanded(key, include_tree)
            if missing:
                state.pending.append((view, related, missing, False))

    def _render_pending(self, context: RenderContext, state: _RenderState) -> None:
        # Work queue instead of recursion; placed resources are only expanded again
        # for include branches they have not been expanded with.
        while state.pending:
            view, item, include_tree, render = state.pending.popleft()
            if render:
                state.included.append(
                    self.build_resource(view, item, context, include_tree, state)
                )
            else:
                self._expand_relationships(view, item, include_tree, state, requested_only=True)

    def _validate(self, document: dict[str, Any]) -> dict[str, Any]:
        if not self.settings.validate_documents:
            return document
        try:
            JSONAPIDocument.model_validate(document)
        except ValidationError as exc:
            raise DataError(f"Rendered document is not valid JSON:API: {exc}") from exc
        return document


def render_one(
    view: JSONAPIView,
    item: Any,
    context: RenderContext | None = None,
    meta: Mapping[str, Any] | None = None,
    **options: Any,
) -> dict[str, Any]:
    """Render a single resource with the configured settings."""
    return DocumentAssembler().render_one(view, item, context, meta, **options)


def render_many(
    view: JSONAPIView,
    items: Sequence[Any],
    context: RenderContext | None = None,
    meta: Mapping[str, Any] | None = None,
    **options: Any,
) -> dict[str, Any]:
    """Render a collection of resources with the configured settings."""
    return DocumentAssembler().render_many(view, items, context, meta, **options)
