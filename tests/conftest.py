"""
Shared fixtures: API clients backed by httpx.MockTransport so no test
touches the network.
"""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from posts_screen.api.client import APIClient


SAMPLE_POSTS = [
    {"userId": 1, "id": 1, "title": "sunt aut facere", "body": "quia et suscipit"},
    {"userId": 1, "id": 2, "title": "qui est esse", "body": "est rerum tempore"},
    {"userId": 2, "id": 11, "title": "et ea vero quia", "body": "delectus reiciendis"},
]


class FakeAPI:
    """Canned responses for the posts endpoint, switchable mid-test."""

    def __init__(self):
        self.status_code = 200
        self.content = json.dumps(SAMPLE_POSTS).encode("utf-8")
        self.error = None
        self.requests = []

    def respond_with(self, body, status_code=200):
        if not isinstance(body, (bytes, str)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.content = body
        self.status_code = status_code
        self.error = None

    def fail_with(self, error_cls=httpx.ConnectError, message="connection refused"):
        self.error = (error_cls, message)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            error_cls, message = self.error
            raise error_cls(message, request=request)
        return httpx.Response(self.status_code, content=self.content)


@pytest.fixture
def fake_api():
    return FakeAPI()


@pytest.fixture
def client(fake_api):
    """Create an APIClient that talks to the fake API."""
    api_client = APIClient(transport=httpx.MockTransport(fake_api.handler))
    yield api_client
    api_client.close()
