"""
Validation of user-supplied locations.
"""

from typing import Union

from weather_cli.models import LocationQuery

# Locations are embedded in the query string with only spaces escaped,
# so none of these may reach the client.
DISALLOWED_CHARACTERS = frozenset("!@#$%^&*()_+={}[]|\\;:'\"<>,.?/~`")


class LocationValidationError(Exception):
    """Base exception for rejected locations."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class EmptyInputError(LocationValidationError):
    """Raised when the location is empty after trimming."""


class InvalidEncodingError(LocationValidationError):
    """Raised when the location is not valid UTF-8 text."""


class DisallowedCharacterError(LocationValidationError):
    """Raised when the location contains a disallowed character."""

    def __init__(self, message: str, character: str):
        self.character = character
        super().__init__(message)


def _as_text(raw: Union[str, bytes]) -> str:
    if isinstance(raw, bytes):
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEncodingError(
                "Invalid input: non-UTF8 character in location"
            ) from e

    try:
        raw.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidEncodingError(
            "Invalid input: non-UTF8 character in location"
        ) from e
    return raw


def validate_location(raw: Union[str, bytes]) -> LocationQuery:
    """
    Validate a raw location and wrap it as a LocationQuery.

    Args:
        raw: Location as typed by the user

    Returns:
        LocationQuery: The trimmed location

    Raises:
        InvalidEncodingError: If the value is not valid UTF-8 text
        EmptyInputError: If nothing is left after trimming whitespace
        DisallowedCharacterError: If a punctuation character is present
    """
    location = _as_text(raw).strip()

    if not location:
        raise EmptyInputError("Invalid input: empty location")

    for char in location:
        if char in DISALLOWED_CHARACTERS:
            raise DisallowedCharacterError(
                f"Invalid input: invalid character {char!r} in location", char
            )

    return LocationQuery(value=location)
