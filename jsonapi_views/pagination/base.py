"""Pagination base class for JSON:API links and meta."""

from typing import Any, Mapping, Sequence


class PaginationBase:
    """Define the pagination link API used by the document assembler."""

    def get_links(
        self,
        view: Any,
        items: Sequence[Any],
        context: Any,
        page: Mapping[str, Any],
        *,
        total: int | None = None,
    ) -> dict[str, str]:
        """Return JSON:API pagination links (first, last, prev, next)."""
        raise NotImplementedError

    def get_meta(self, page: Mapping[str, Any], *, total: int) -> dict[str, Any]:
        """Return JSON:API pagination metadata."""
        raise NotImplementedError
