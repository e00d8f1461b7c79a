"""Stub transport and response factories for hacocms tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

from hacocms.api.client import HacoCmsClient

DUMMY_BASE_URL = "http://localhost:8000"
DUMMY_ACCESS_TOKEN = "DUMMY_ACCESS_TOKEN"
DUMMY_PROJECT_DRAFT_TOKEN = "DUMMY_PROJECT_DRAFT_TOKEN"
DUMMY_ENDPOINT = "/dummy"
DUMMY_DATE = "2022-03-08T12:00:00.000+09:00"
# 2022-03-08T03:00:00Z in epoch milliseconds
DUMMY_DATE_MS = 1646708400000


class RecordingTransport(httpx.MockTransport):
    """Stub transport that answers every request the same way and records it."""

    def __init__(
        self,
        status_code: int = 200,
        json_body: Any = None,
        text: str | None = None,
    ) -> None:
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json_body)

        super().__init__(handler)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


def create_content_response(
    content_id: str = "abcdef",
    date: str = DUMMY_DATE,
    closed_at: str | None = None,
    **fields: Any,
) -> dict[str, Any]:
    """Create a mock API response for one content.

    Args:
        content_id: The content ID.
        date: Timestamp used for createdAt, updatedAt and publishedAt.
        closed_at: closedAt value (null by default).
        **fields: Additional content fields.

    Returns:
        A dictionary matching the hacoCMS content format.
    """
    return {
        "id": content_id,
        "createdAt": date,
        "updatedAt": date,
        "publishedAt": date,
        "closedAt": closed_at,
        **fields,
    }


def create_list_response(
    contents: list[dict[str, Any]] | None = None,
    total: int | None = None,
    offset: int = 0,
    limit: int = 100,
) -> dict[str, Any]:
    """Create a mock API response for a list-type endpoint.

    Args:
        contents: List of content dictionaries.
        total: Total number of contents (defaults to len(contents)).
        offset: Offset of the page.
        limit: Limit of the page.

    Returns:
        A dictionary matching the hacoCMS list envelope.
    """
    if contents is None:
        contents = []

    return {
        "meta": {
            "total": total if total is not None else len(contents),
            "offset": offset,
            "limit": limit,
        },
        "data": contents,
    }


# make_client fixture signature: (status_code, json_body, text, project_draft_token, access_token)
ClientFactory = Callable[..., tuple[HacoCmsClient, RecordingTransport]]
