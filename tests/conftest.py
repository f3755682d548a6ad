"""
Pytest configuration and shared fixtures.
"""

import json
import logging
from unittest.mock import patch

import pytest

LONDON_RESPONSE = {
    "name": "London",
    "main": {"temp": 15.0, "feels_like": 14.0, "pressure": 1012, "humidity": 80},
    "weather": [{"main": "Clouds", "description": "overcast clouds"}],
}


class FakeResponse:
    """Stand-in for aiohttp.ClientResponse."""

    def __init__(self, body: bytes = b"", status: int = 200, read_error=None):
        self.body = body
        self.status = status
        self.read_error = read_error
        self.closed = False

    async def read(self) -> bytes:
        if self.read_error is not None:
            raise self.read_error
        return self.body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True
        return False


class FakeSession:
    """Stand-in for aiohttp.ClientSession recording requested URLs."""

    def __init__(self, response: FakeResponse = None, get_error=None):
        self.response = response
        self.get_error = get_error
        self.requested_urls = []

    async def get(self, url):
        self.requested_urls.append(str(url))
        if self.get_error is not None:
            raise self.get_error
        return self.response

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class ListHandler(logging.Handler):
    """In-memory log sink."""

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)

    @property
    def messages(self):
        return [record.getMessage() for record in self.records]


@pytest.fixture
def sample_api_key() -> str:
    """Sample API key for testing."""
    return "test_openweather_api_key_123"


@pytest.fixture
def mock_openweather_response() -> dict:
    """Mock OpenWeatherMap API response."""
    payload = json.loads(json.dumps(LONDON_RESPONSE))
    payload.update({"dt": 1640995200, "sys": {"country": "GB"}, "cod": 200})
    payload["weather"][0]["icon"] = "04d"
    return payload


@pytest.fixture
def fake_session():
    """
    Patch aiohttp.ClientSession with a FakeSession.

    Returns a function taking FakeResponse/FakeSession arguments and
    returning the installed session.
    """
    patchers = []

    def install(body=None, status=200, read_error=None, get_error=None):
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode("utf-8")
        elif isinstance(body, str):
            body = body.encode("utf-8")
        response = FakeResponse(body or b"", status=status, read_error=read_error)
        session = FakeSession(response=response, get_error=get_error)
        patcher = patch(
            "weather_cli.external_api.aiohttp.ClientSession", return_value=session
        )
        patcher.start()
        patchers.append(patcher)
        return session

    yield install

    for patcher in patchers:
        patcher.stop()


@pytest.fixture
def log_handler() -> ListHandler:
    """In-memory handler standing in for the log file."""
    return ListHandler()
