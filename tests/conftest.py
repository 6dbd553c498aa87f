"""
Pytest configuration and fixtures for github-http-adapter tests.
"""

from typing import List, Optional

import pytest
import responses as responses_lib

from github_http.core.adapter import HttpClientAdapter
from github_http.core.message import Request, Response
from github_http.core.transport import Transport


class RecordingTransport(Transport):
    """
    In-memory transport: records every sent request and replays queued
    responses (or raises queued exceptions) in order.
    """

    def __init__(self, responses: Optional[List[object]] = None):
        self.queue: List[object] = list(responses or [])
        self.sent: List[Request] = []
        self.closed = False

    def enqueue(self, item: object) -> None:
        self.queue.append(item)

    def send(self, request: Request) -> Response:
        self.sent.append(request)
        item = self.queue.pop(0) if self.queue else Response(200, {}, "{}", request.url)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> Request:
        return self.sent[-1]


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.github.com/"


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def adapter(transport):
    """Adapter wired to the recording transport."""
    adapter = HttpClientAdapter(transport=transport)
    yield adapter
    adapter.close()


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps
