"""
External API client for OpenWeatherMap service.
"""

import asyncio
import json
import logging
import unicodedata
from typing import Optional

import aiohttp
from pydantic import ValidationError
from yarl import URL

from weather_cli.config import ExternalAPIConfig
from weather_cli.models import LocationQuery, OpenWeatherMapResponse, WeatherReport

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Base exception for weather fetch errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TransportError(FetchError):
    """Raised when the request cannot be built or the network call fails."""


class BodyReadError(FetchError):
    """Raised when the response body cannot be fully read."""


class DecodeError(FetchError):
    """Raised when the response body does not match the expected schema."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        provider_message: Optional[str] = None,
    ):
        self.status_code = status_code
        self.provider_message = provider_message
        super().__init__(message)


class NoConditionsAvailableError(FetchError):
    """Raised when the provider answers without any weather entries."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"no weather data available for the location '{location}'")


def encode_location(location: str) -> str:
    """
    Encode a location for the query string.

    Only spaces are escaped; validated locations contain no other characters
    that need it.
    """
    return location.replace(" ", "%20")


def _provider_message(body: bytes) -> Optional[str]:
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError):
        return None
    if isinstance(payload, dict) and payload.get("message") is not None:
        return str(payload["message"])
    return None


class OpenWeatherMapClient:
    """
    Asynchronous client for the OpenWeatherMap current weather endpoint.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = ExternalAPIConfig.OPENWEATHER_BASE_URL,
        units: str = ExternalAPIConfig.UNITS,
    ):
        """
        Initialize the OpenWeatherMap client.

        Args:
            api_key: OpenWeatherMap API key
            base_url: API base URL (defaults to config value)
            units: Unit system requested from the provider
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.units = units

    def build_url(self, location: LocationQuery) -> str:
        """
        Build the request URL for a validated location.

        Raises:
            TransportError: If the location holds a control character, which
                cannot be carried in a request line
        """
        for char in location.value:
            if unicodedata.category(char) == "Cc":
                raise TransportError(
                    f"error creating HTTP request: invalid control character "
                    f"{char!r} in location"
                )
        return (
            f"{self.base_url}/weather?q={encode_location(location.value)}"
            f"&appid={self.api_key}&units={self.units}"
        )

    async def get_weather(self, location: LocationQuery) -> WeatherReport:
        """
        Get current weather for a single location.

        Args:
            location: Validated location

        Returns:
            WeatherReport: Decoded weather data

        Raises:
            TransportError: If the request fails before a response arrives
            BodyReadError: If the response body cannot be read
            DecodeError: If the body is not a valid weather payload
            NoConditionsAvailableError: If the payload has no weather entries
        """
        url = self.build_url(location)

        async with aiohttp.ClientSession() as session:
            logger.debug("Requesting weather data for location: %s", location)

            try:
                response = await session.get(URL(url, encoded=True))
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                raise TransportError(f"error calling weather API: {e}") from e

            async with response:
                try:
                    body = await response.read()
                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    raise BodyReadError(f"error reading response body: {e}") from e

                logger.debug(
                    "Weather API answered %d (%d bytes) for %s",
                    response.status,
                    len(body),
                    location,
                )

                try:
                    payload = OpenWeatherMapResponse.model_validate_json(body)
                except ValidationError as e:
                    provider_message = _provider_message(body)
                    raise DecodeError(
                        f"error decoding weather API response "
                        f"(status: {response.status}, "
                        f"provider message: {provider_message}): {e}",
                        status_code=response.status,
                        provider_message=provider_message,
                    ) from e

        if not payload.weather:
            raise NoConditionsAvailableError(location.value)

        logger.debug("Successfully fetched weather for %s", location)
        return payload.to_report()


def fetch_weather(location: LocationQuery, api_key: str) -> WeatherReport:
    """
    Fetch current weather for one location, blocking until it completes.

    Args:
        location: Validated location
        api_key: OpenWeatherMap API key

    Returns:
        WeatherReport: Decoded weather data

    Raises:
        FetchError: If the weather data cannot be retrieved
    """
    client = OpenWeatherMapClient(api_key)
    return asyncio.run(client.get_weather(location))
