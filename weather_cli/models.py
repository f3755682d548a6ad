"""
Pydantic models for location queries and weather reports.
"""

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class LocationQuery(BaseModel):
    """A validated place name, ready to be sent to the provider."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., min_length=1, description="Trimmed place name")

    def __str__(self) -> str:
        return self.value


class Condition(BaseModel):
    """One categorical weather state with its human-readable detail."""

    model_config = ConfigDict(frozen=True)

    category: str
    description: str


class WeatherReport(BaseModel):
    """Current conditions for a single location."""

    model_config = ConfigDict(frozen=True)

    name: str
    temperature: float
    feels_like: float
    pressure: float
    humidity: float
    conditions: Tuple[Condition, ...] = Field(..., min_length=1)

    @property
    def primary_condition(self) -> Condition:
        """The first reported condition, the one shown to the user."""
        return self.conditions[0]


class MainReadings(BaseModel):
    """The ``main`` block of an OpenWeatherMap response."""

    temp: float
    feels_like: float
    pressure: float
    humidity: float


class WeatherEntry(BaseModel):
    """One element of the ``weather`` list of an OpenWeatherMap response."""

    main: str
    description: str


class OpenWeatherMapResponse(BaseModel):
    """Model for OpenWeatherMap current weather response."""

    name: str = Field(..., description="City name")
    main: MainReadings = Field(..., description="Main weather data")
    weather: List[WeatherEntry] = Field(..., description="Weather conditions")

    def to_report(self) -> WeatherReport:
        """
        Convert to our internal format.

        Raises:
            pydantic.ValidationError: If ``weather`` is empty
        """
        return WeatherReport(
            name=self.name,
            temperature=self.main.temp,
            feels_like=self.main.feels_like,
            pressure=self.main.pressure,
            humidity=self.main.humidity,
            conditions=tuple(
                Condition(category=entry.main, description=entry.description)
                for entry in self.weather
            ),
        )
