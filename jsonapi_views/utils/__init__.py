"""Utility helpers for query strings and member names."""

from .inflection import camelize, dasherize, get_transformer, underscore
from .query_string import encode_query, flatten

__all__ = [
    "camelize",
    "dasherize",
    "encode_query",
    "flatten",
    "get_transformer",
    "underscore",
]
