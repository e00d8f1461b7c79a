"""Pydantic data models for hacocms.

This module defines the content base model, the list envelope returned by
list-type endpoints, query parameter typing and the error types raised by
the client.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypedDict, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Builds one content object from the raw JSON object of a single content.
# Pydantic model classes are accepted as-is (see build_content).
ContentFactory = Callable[[dict[str, Any]], T]

QueryValue = str | int | Sequence[str | int] | None


class ApiContent(BaseModel):
    """Base model for hacoCMS contents.

    Every content returned by the API carries an ID and its lifecycle
    timestamps. Subclass this model to declare the fields of an API schema;
    camelCase JSON keys map to snake_case attributes.

    Attributes:
        id: Content ID
        created_at: Creation time (JSON ``createdAt``)
        updated_at: Last update time (JSON ``updatedAt``)
        published_at: Publication time (JSON ``publishedAt``), None if not set
        closed_at: Close time (JSON ``closedAt``), None if not set
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None
    closed_at: datetime | None = None


class ListMeta(BaseModel):
    """Pagination window of a list response.

    Attributes:
        total: Number of contents matching the query
        offset: Offset of the first returned content
        limit: Maximum number of contents in one response
    """

    model_config = ConfigDict(frozen=True)

    total: int = Field(ge=0)
    offset: int = Field(ge=0)
    limit: int = Field(ge=0)


class ListApiResponse(BaseModel, Generic[T]):
    """Decoded response of a list-type endpoint.

    ``data`` keeps the order returned by the server. Its length is the size
    of the current page and may be smaller than ``meta.total``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    meta: ListMeta
    data: list[T]

    @property
    def has_more(self) -> bool:
        """Check if contents remain beyond this page."""
        return self.meta.offset + len(self.data) < self.meta.total


class QueryParameters(TypedDict, total=False):
    """Query parameters recognized by list-type endpoints.

    Any other key is passed to the server verbatim.
    """

    limit: int
    offset: int
    s: str | Sequence[str]  # sort, e.g. "-publishedAt,id"
    q: str  # filter expression
    fields: str | Sequence[str]


def build_content(constructor: ContentFactory[T] | type[T], raw: dict[str, Any]) -> T:
    """Construct a content object from its raw JSON object.

    Args:
        constructor: Pydantic model class, or any callable taking the raw object
        raw: Decoded JSON object of one content

    Returns:
        The constructed content
    """
    if isinstance(constructor, type) and issubclass(constructor, BaseModel):
        return constructor.model_validate(raw)  # type: ignore[return-value]
    return constructor(raw)  # type: ignore[call-arg]


class ErrorCode(str, Enum):
    """Error codes for hacocms errors."""

    DRAFT_TOKEN_REQUIRED = "draft_token_required"
    MISSING_SETTING = "missing_setting"
    INVALID_SETTING = "invalid_setting"
    NOT_AUTHENTICATED = "not_authenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    API_ERROR = "api_error"
    INVALID_RESPONSE = "invalid_response"


class HacoCmsError(Exception):
    """Base exception for hacocms.

    Attributes:
        code: Error code
        message: Human-readable error message
        details: Additional error details
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, object] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            details: Additional context (e.g., status code, response body)
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(HacoCmsError):
    """The client is not configured for the requested operation.

    Raised locally, before any request is sent.
    """


class RequestError(HacoCmsError):
    """The API answered with a non-2xx status.

    Attributes:
        status_code: HTTP status code
        body: Raw response body
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int,
        body: str,
    ) -> None:
        super().__init__(code, message, {"status_code": status_code, "response": body})
        self.status_code = status_code
        self.body = body


class DecodeError(HacoCmsError):
    """The response body could not be decoded into the expected shape."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        super().__init__(ErrorCode.INVALID_RESPONSE, message, details)
