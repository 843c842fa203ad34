"""Standard JSON:API pagination strategies."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from jsonapi_views.core.errors import DataError

from .base import PaginationBase


def _page_int(page: Mapping[str, Any], key: str, default: int) -> int:
    value = page.get(key, default)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise DataError(f"page[{key}] must be an integer, got {value!r}.") from exc


class PageNumberPagination(PaginationBase):
    """Links for page[number]/page[size] pagination."""

    default_size = 10

    def get_links(
        self,
        view: Any,
        items: Sequence[Any],
        context: Any,
        page: Mapping[str, Any],
        *,
        total: int | None = None,
    ) -> dict[str, str]:
        """Build first/prev/next/last links; last needs ``total``."""
        number = max(_page_int(page, "number", 1), 1)
        size = max(_page_int(page, "size", self.default_size), 1)

        def build_url(page_number: int) -> str:
            query_params = {"number": page_number, "size": size}
            query_params.update((k, v) for k, v in page.items() if k not in query_params)
            return view.url_for_pagination(items, context, query_params)

        links = {"first": build_url(1)}
        if number > 1:
            links["prev"] = build_url(number - 1)
        if total is None:
            if len(items) >= size:
                links["next"] = build_url(number + 1)
            return links
        last_number = max(1, -(-total // size))
        links["last"] = build_url(last_number)
        if number < last_number:
            links["next"] = build_url(number + 1)
        return links

    def get_meta(self, page: Mapping[str, Any], *, total: int) -> dict[str, Any]:
        """Build pagination metadata with total, number and size."""
        size = max(_page_int(page, "size", self.default_size), 1)
        return {
            "total": total,
            "number": max(_page_int(page, "number", 1), 1),
            "size": size,
            "pages": max(1, -(-total // size)),
        }


class OffsetPagination(PaginationBase):
    """Links for page[offset]/page[limit] pagination."""

    default_limit = 10

    def get_links(
        self,
        view: Any,
        items: Sequence[Any],
        context: Any,
        page: Mapping[str, Any],
        *,
        total: int | None = None,
    ) -> dict[str, str]:
        """Build pagination links for offset pagination."""
        offset = max(_page_int(page, "offset", 0), 0)
        limit = max(_page_int(page, "limit", self.default_limit), 1)

        def build_url(page_offset: int) -> str:
            query_params = {"offset": page_offset, "limit": limit}
            query_params.update((k, v) for k, v in page.items() if k not in query_params)
            return view.url_for_pagination(items, context, query_params)

        links = {"first": build_url(0)}
        prev_offset = offset - limit
        if offset > 0:
            links["prev"] = build_url(max(prev_offset, 0))
        if total is None:
            if len(items) >= limit:
                links["next"] = build_url(offset + limit)
            return links
        last_offset = max(0, (max(total - 1, 0) // limit) * limit)
        links["last"] = build_url(last_offset)
        next_offset = offset + limit
        if next_offset <= last_offset:
            links["next"] = build_url(next_offset)
        return links

    def get_meta(self, page: Mapping[str, Any], *, total: int) -> dict[str, Any]:
        """Build pagination metadata with total, limit, and offset."""
        return {
            "total": total,
            "limit": max(_page_int(page, "limit", self.default_limit), 1),
            "offset": max(_page_int(page, "offset", 0), 0),
        }
