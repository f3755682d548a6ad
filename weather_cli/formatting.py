"""
Console rendering of weather reports.
"""

from typing import List

from weather_cli.models import WeatherReport


def _number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_report(report: WeatherReport) -> List[str]:
    """Render a report as the seven labelled lines printed to the console."""
    condition = report.primary_condition
    return [
        f"Location: {report.name}",
        f"Temperature: {_number(report.temperature)} °C",
        f"Feels like: {_number(report.feels_like)} °C",
        f"Pressure: {_number(report.pressure)} hPa",
        f"Humidity: {_number(report.humidity)} %",
        f"Weather: {condition.category}",
        f"Description: {condition.description}",
    ]
