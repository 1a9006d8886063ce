"""Integrations package - Location capabilities.

This package handles everything that talks to the outside world:
    - LocationResolver and the LocationPlatform capability it wraps
    - Null and static platforms
    - Web platform (IP geolocation + reverse geocoding)

Modules:
    - base: Abstract base class for network integrations
    - location: LocationResolver and platform interface
    - web_location: HTTP-backed location platform
"""

from intlphone.integrations.base import IntegrationBase
from intlphone.integrations.location import (
    LocationPlatform,
    LocationResolver,
    NullLocationPlatform,
    StaticLocationPlatform,
)

__all__ = [
    "IntegrationBase",
    "LocationPlatform",
    "LocationResolver",
    "NullLocationPlatform",
    "StaticLocationPlatform",
]
