"""Helpers for turning nested mappings into JSON:API query strings."""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import urlencode


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _flatten_value(key: str, value: Any) -> list[tuple[str, Any]]:
    if isinstance(value, Mapping):
        pairs: list[tuple[str, Any]] = []
        for inner_key, inner_value in value.items():
            pairs.extend(_flatten_value(f"{key}[{inner_key}]", inner_value))
        return pairs
    if _is_sequence(value):
        # Elements are emitted untouched, mappings inside lists included.
        return [(f"{key}[]", element) for element in value]
    return [(key, value)]


def flatten(params: Mapping[str, Any]) -> list[tuple[str, Any]]:
    """Flatten a nested mapping into ``(key, value)`` pairs using bracket notation.

    - scalars: ``{"number": 5}`` -> ``[("number", 5)]``
    - sequences: ``{"alphabet": ["a", "b"]}`` -> ``[("alphabet[]", "a"), ("alphabet[]", "b")]``
    - mappings: ``{"filters": {"age": 18}}`` -> ``[("filters[age]", 18)]``

    Nested mappings are flattened at any depth. Sequences are not descended
    into, so a list of mappings yields the mappings themselves as values.
    Output order follows the iteration order of the input.
    """
    pairs: list[tuple[str, Any]] = []
    for key, value in params.items():
        pairs.extend(_flatten_value(str(key), value))
    return pairs


def _prefixed(prefix: str, key: str) -> str:
    name, bracket, rest = key.partition("[")
    return f"{prefix}[{name}]{bracket}{rest}"


def encode_query(params: Mapping[str, Any], *, prefix: str | None = None) -> str:
    """Return a URL-encoded query string for ``params``.

    With ``prefix="page"`` every top-level key is wrapped, so ``{"number": 1}``
    encodes as ``page%5Bnumber%5D=1``. ``None`` values encode as empty strings.
    """
    pairs = flatten(params)
    if prefix:
        pairs = [(_prefixed(prefix, key), value) for key, value in pairs]
    return urlencode([(key, "" if value is None else value) for key, value in pairs])
