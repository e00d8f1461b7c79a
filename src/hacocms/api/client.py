"""hacoCMS content API client using httpx.

Provides authenticated access to list-type and single-type endpoints,
with optional draft access through the Project-Draft-Token.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from types import TracebackType
from typing import Any, Self, TypeVar
from urllib.parse import quote, urljoin

import httpx

from hacocms.config import DEFAULT_TIMEOUT, ClientSettings
from hacocms.models import (
    ConfigurationError,
    ContentFactory,
    DecodeError,
    ErrorCode,
    ListApiResponse,
    ListMeta,
    QueryValue,
    RequestError,
    build_content,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Root path of the content API, relative to the project URL
API_ROOT = "/api/v1/"

DRAFT_TOKEN_HEADER = "Haco-Project-Draft-Token"


def _build_params(query: Mapping[str, QueryValue] | None) -> dict[str, str | int]:
    """Serialize query parameters for the API.

    Sequence values are joined with commas into one entry, None values are dropped.

    Args:
        query: Query parameters (limit, offset, s, filters...)

    Returns:
        Parameters suitable for httpx
    """
    params: dict[str, str | int] = {}
    for key, value in (query or {}).items():
        if value is None:
            continue
        if isinstance(value, Sequence) and not isinstance(value, str):
            params[key] = ",".join(str(v) for v in value)
        else:
            params[key] = value
    return params


class HacoCmsClient:
    """HTTP client for the hacoCMS content API.

    Holds a public session and, when a Project-Draft-Token is given, a draft
    session carrying the same headers plus the draft token header. No request
    is sent until an operation is awaited. Use as async context manager, or
    call aclose(), to release the sessions.

    Attributes:
        base_url: Absolute URL prefix of all requests (``.../api/v1/``)
        session: Public session
        draft_session: Draft session, None without Project-Draft-Token
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        project_draft_token: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize API client.

        Args:
            base_url: Project URL ``https://{subdomain}.hacocms.com/``
            access_token: Project Access-Token
            project_draft_token: Project-Draft-Token (optional)
            timeout: Request timeout in seconds
            transport: Custom httpx transport (optional)
        """
        self.base_url = urljoin(base_url, API_ROOT)

        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {access_token}",
        }
        self.session = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

        # For fetching drafts
        self.draft_session: httpx.AsyncClient | None = None
        if project_draft_token:
            self.draft_session = httpx.AsyncClient(
                base_url=self.base_url,
                headers={**headers, DRAFT_TOKEN_HEADER: project_draft_token},
                timeout=httpx.Timeout(timeout),
                transport=transport,
            )

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Self:
        """Create a client from ClientSettings."""
        return cls(
            settings.base_url,
            settings.access_token,
            settings.project_draft_token,
            timeout=settings.timeout,
            transport=transport,
        )

    @classmethod
    def from_env(cls) -> Self:
        """Create a client from HACOCMS_* environment variables.

        Raises:
            ConfigurationError: If a required variable is missing
        """
        return cls.from_settings(ClientSettings.from_env())

    @property
    def has_draft_access(self) -> bool:
        """Whether a Project-Draft-Token was given."""
        return self.draft_session is not None

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close both sessions."""
        await self.session.aclose()
        if self.draft_session is not None:
            await self.draft_session.aclose()

    def _preferred_session(self) -> httpx.AsyncClient:
        # Draft access is a superset of public access, so reads of a single
        # content always go through the draft session when there is one.
        if self.draft_session is not None:
            return self.draft_session
        return self.session

    def _handle_error_response(self, response: httpx.Response) -> None:
        """Handle error responses from the API.

        Args:
            response: HTTP response object

        Raises:
            RequestError: With appropriate error code
        """
        status = response.status_code
        body = response.text
        # The draft query parameter is a credential
        url = response.request.url.copy_remove_param("draft")
        logger.warning("API request failed: %s %s -> %d", response.request.method, url, status)

        if status == 401:
            raise RequestError(
                code=ErrorCode.NOT_AUTHENTICATED,
                message="Authentication failed. Check the Access-Token.",
                status_code=status,
                body=body,
            )
        elif status == 403:
            raise RequestError(
                code=ErrorCode.FORBIDDEN,
                message="Access denied.",
                status_code=status,
                body=body,
            )
        elif status == 404:
            raise RequestError(
                code=ErrorCode.NOT_FOUND,
                message="Resource not found.",
                status_code=status,
                body=body,
            )
        elif status == 429:
            raise RequestError(
                code=ErrorCode.RATE_LIMITED,
                message="Rate limit exceeded.",
                status_code=status,
                body=body,
            )
        elif status >= 500:
            raise RequestError(
                code=ErrorCode.SERVER_ERROR,
                message="Server error.",
                status_code=status,
                body=body,
            )
        else:
            raise RequestError(
                code=ErrorCode.API_ERROR,
                message=f"API request failed with status {status}.",
                status_code=status,
                body=body,
            )

    async def _get(
        self,
        session: httpx.AsyncClient,
        endpoint: str,
        params: dict[str, str | int] | None = None,
    ) -> Any:
        """Make a GET request and decode the JSON body.

        Args:
            session: Session to send the request with
            endpoint: Endpoint path relative to the API root
            params: Query parameters

        Returns:
            Decoded JSON body

        Raises:
            RequestError: If the API answers with a non-2xx status
            DecodeError: If the body is not valid JSON
        """
        path = endpoint.lstrip("/")
        logger.debug("GET %s%s (draft=%s)", self.base_url, path, session is self.draft_session)
        response = await session.get(path, params=params or None)

        if not response.is_success:
            self._handle_error_response(response)

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(
                message="API response is not valid JSON.",
                details={"status_code": response.status_code, "response": response.text},
            ) from e

    def _decode_single(self, constructor: ContentFactory[T] | type[T], body: Any) -> T:
        if not isinstance(body, dict):
            raise DecodeError(
                message="API response is not a JSON object.",
                details={"response": body},
            )
        try:
            return build_content(constructor, body)
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(
                message=f"Failed to construct content: {e}",
                details={"response": body},
            ) from e

    def _decode_list(self, constructor: ContentFactory[T] | type[T], body: Any) -> ListApiResponse[T]:
        if not isinstance(body, dict) or not isinstance(body.get("data"), list):
            raise DecodeError(
                message="API response is not a list envelope ({meta, data}).",
                details={"response": body},
            )
        try:
            meta = ListMeta.model_validate(body.get("meta"))
        except ValueError as e:
            raise DecodeError(
                message=f"Invalid list metadata: {e}",
                details={"response": body},
            ) from e

        data = [self._decode_single(constructor, item) for item in body["data"]]
        return ListApiResponse(meta=meta, data=data)

    async def get_list(
        self,
        constructor: ContentFactory[T] | type[T],
        endpoint: str,
        query: Mapping[str, QueryValue] | None = None,
    ) -> ListApiResponse[T]:
        """Get published contents of a list-type endpoint.

        Args:
            constructor: Content model class, or callable taking the raw JSON object
            endpoint: Endpoint of the list-type API
            query: Query parameters (limit, offset, s, ...)

        Returns:
            Decoded list response

        Raises:
            RequestError: If the API answers with a non-2xx status
            DecodeError: If the response does not match the list envelope
        """
        body = await self._get(self.session, endpoint, _build_params(query))
        return self._decode_list(constructor, body)

    async def get_list_including_draft(
        self,
        constructor: ContentFactory[T] | type[T],
        endpoint: str,
        query: Mapping[str, QueryValue] | None = None,
    ) -> ListApiResponse[T]:
        """Get contents of a list-type endpoint, drafts included.

        Args:
            constructor: Content model class, or callable taking the raw JSON object
            endpoint: Endpoint of the list-type API
            query: Query parameters (limit, offset, s, ...)

        Returns:
            Decoded list response

        Raises:
            ConfigurationError: If the client has no Project-Draft-Token
            RequestError: If the API answers with a non-2xx status
            DecodeError: If the response does not match the list envelope
        """
        if self.draft_session is None:
            raise ConfigurationError(
                code=ErrorCode.DRAFT_TOKEN_REQUIRED,
                message="need Project-Draft-Token to get draft contents",
            )

        body = await self._get(self.draft_session, endpoint, _build_params(query))
        return self._decode_list(constructor, body)

    async def get_single(
        self,
        constructor: ContentFactory[T] | type[T],
        endpoint: str,
    ) -> T:
        """Get the content of a single-type endpoint.

        Args:
            constructor: Content model class, or callable taking the raw JSON object
            endpoint: Endpoint of the single-type API

        Returns:
            The constructed content

        Raises:
            RequestError: If the API answers with a non-2xx status
            DecodeError: If the response is not a content object
        """
        body = await self._get(self._preferred_session(), endpoint)
        return self._decode_single(constructor, body)

    async def get_content(
        self,
        constructor: ContentFactory[T] | type[T],
        endpoint: str,
        content_id: str,
        draft_token: str | None = None,
    ) -> T:
        """Get one content of a list-type endpoint by ID.

        Args:
            constructor: Content model class, or callable taking the raw JSON object
            endpoint: Endpoint of the list-type API
            content_id: Content ID
            draft_token: Draft token of an unpublished content (optional)

        Returns:
            The constructed content

        Raises:
            RequestError: If the API answers with a non-2xx status
            DecodeError: If the response is not a content object
        """
        params = {"draft": draft_token} if draft_token else None
        path = f"{endpoint.rstrip('/')}/{quote(content_id, safe='')}"
        body = await self._get(self._preferred_session(), path, params)
        return self._decode_single(constructor, body)
