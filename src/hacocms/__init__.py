"""hacocms - async client for the hacoCMS content API."""

from hacocms.api.client import HacoCmsClient
from hacocms.config import ClientSettings
from hacocms.models import (
    ApiContent,
    ConfigurationError,
    DecodeError,
    ErrorCode,
    HacoCmsError,
    ListApiResponse,
    ListMeta,
    QueryParameters,
    RequestError,
)

__version__ = "0.1.0"
__all__ = [
    "ApiContent",
    "ClientSettings",
    "ConfigurationError",
    "DecodeError",
    "ErrorCode",
    "HacoCmsClient",
    "HacoCmsError",
    "ListApiResponse",
    "ListMeta",
    "QueryParameters",
    "RequestError",
]
