"""Sentinel values shared by views and the document assembler."""


class _NotLoaded:
    """Marker for a relation that exists but was never fetched."""

    _instance = None

    def __new__(cls) -> "_NotLoaded":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_LOADED"

    def __bool__(self) -> bool:
        return False


NOT_LOADED = _NotLoaded()


def is_loaded(value: object) -> bool:
    """Return False for the unresolved-relation placeholder."""
    return value is not NOT_LOADED
