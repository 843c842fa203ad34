"""JSON:API error objects and render-time exceptions."""

import logging
from http import HTTPStatus
from typing import Any

log = logging.getLogger(__name__)


class JSONAPIErrorBuilder:
    """Build JSON:API error objects and error documents."""

    def error_object(
        self,
        *,
        status: str | None = None,
        code: str | None = None,
        title: str | None = None,
        detail: str | None = None,
        source: dict[str, Any] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API error object."""
        error: dict[str, Any] = {}
        if status is not None:
            error["status"] = status
        if code is not None:
            error["code"] = code
        if title is not None:
            error["title"] = title
        if detail is not None:
            error["detail"] = detail
        if source is not None:
            error["source"] = source
        if meta is not None:
            error["meta"] = meta
        if not error:
            raise ValueError("Error object must include at least one field.")
        return error

    def error_document(self, errors: list[dict[str, Any]]) -> dict[str, Any]:
        """Return a JSON:API document with an errors array."""
        return {"errors": errors}


class JSONAPIViewError(Exception):
    """Base class for errors raised while rendering a document."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    title = "Rendering Error"
    code: str | None = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_error_object(self) -> dict[str, Any]:
        """Return this error as a JSON:API error object."""
        return JSONAPIErrorBuilder().error_object(
            status=str(self.status_code),
            code=self.code,
            title=self.title,
            detail=self.message,
        )


class ConfigurationError(JSONAPIViewError):
    """A view or registry was declared incorrectly."""

    title = "Configuration Error"
    code = "configuration_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        log.error("Configuration error: %s", message)


class DataError(JSONAPIViewError):
    """Data handed to a view does not have the declared shape."""

    title = "Data Error"
    code = "data_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        log.warning("Data error: %s", message)
