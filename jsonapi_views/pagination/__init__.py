"""Pagination link strategies for JSON:API."""

from .base import PaginationBase
from .standard import OffsetPagination, PageNumberPagination

__all__ = ["OffsetPagination", "PageNumberPagination", "PaginationBase"]
