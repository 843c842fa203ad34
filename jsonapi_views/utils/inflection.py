"""Member-name transformations applied to attribute and relationship keys."""

from __future__ import annotations

from typing import Callable

FIELD_TRANSFORMATIONS = ("underscore", "dasherize", "camelize")


def underscore(value: str) -> str:
    return value.replace("-", "_")


def dasherize(value: str) -> str:
    return value.replace("_", "-")


def camelize(value: str) -> str:
    """Turn ``first_name`` (or ``first-name``) into ``firstName``."""
    head, *tail = underscore(value).split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


def get_transformer(name: str | None) -> Callable[[str], str]:
    """Return the key transformer registered under ``name``.

    ``None`` leaves keys untouched.
    """
    if name is None:
        return str
    if name == "underscore":
        return underscore
    if name == "dasherize":
        return dasherize
    if name == "camelize":
        return camelize
    raise ValueError(f"Unknown field transformation '{name}'.")
