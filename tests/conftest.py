"""Pytest configuration and shared fixtures for hacocms tests."""

from __future__ import annotations

from typing import Any

import pytest

from hacocms.api.client import HacoCmsClient
from tests.helpers import DUMMY_ACCESS_TOKEN, DUMMY_BASE_URL, ClientFactory, RecordingTransport


@pytest.fixture
def make_client() -> ClientFactory:
    """Create a factory building a client wired to a RecordingTransport.

    Returns:
        Factory taking the stub response (status_code, json_body, text) and
        an optional project_draft_token. Returns (client, transport).
    """

    def factory(
        status_code: int = 200,
        json_body: Any = None,
        text: str | None = None,
        project_draft_token: str | None = None,
        access_token: str = DUMMY_ACCESS_TOKEN,
    ) -> tuple[HacoCmsClient, RecordingTransport]:
        transport = RecordingTransport(status_code, json_body, text)
        client = HacoCmsClient(
            DUMMY_BASE_URL,
            access_token,
            project_draft_token,
            transport=transport,
        )
        return client, transport

    return factory
