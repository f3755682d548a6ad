"""
Command-line client for current weather conditions from OpenWeatherMap.
"""

__version__ = "1.0.0"
