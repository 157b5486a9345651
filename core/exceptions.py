"""Errors raised while resolving storage cloud locations."""

from __future__ import annotations

from typing import Iterable

from azure.core.exceptions import AzureError


class CloudLocationError(AzureError):
    """Base class for every cloud location failure."""


class CloudDetectionError(CloudLocationError):
    """Raised when auto-detection cannot find any cloud name."""

    def __init__(self, message: str = "Auto-detect could not find a cloud name from the current environment.") -> None:
        super().__init__(message)


class UnknownCloudError(CloudLocationError):
    """Raised when auto-detection finds a cloud name that is not supported."""

    def __init__(self, name: str, allowed: Iterable[str]) -> None:
        self.name = name
        self.allowed = tuple(allowed)
        super().__init__(
            f"Auto-detect encountered an invalid cloud name '{name}', allowed values are: "
            f"{', '.join(self.allowed)}."
        )


class DataConversionError(CloudLocationError, ValueError):
    """Raised when a URL or connection string cannot be turned into a location."""


class UrlParseError(CloudLocationError, ValueError):
    """Raised when an assembled base URL is not a valid absolute URL."""


class ConfigurationError(CloudLocationError):
    """Raised when storage settings are missing or malformed."""


__all__ = [
    "CloudDetectionError",
    "CloudLocationError",
    "ConfigurationError",
    "DataConversionError",
    "UnknownCloudError",
    "UrlParseError",
]
