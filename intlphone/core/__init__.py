"""Core package - Configuration, logging, exceptions.

This package provides foundational infrastructure used by all other layers.

Modules:
    - config: Environment and configuration management
    - logging: Structured JSON logging
    - exceptions: Custom exception hierarchy
"""

from intlphone.core.exceptions import (
    ConfigurationError,
    GeocodeEmptyError,
    IntegrationError,
    IntlPhoneError,
    LocationError,
    PermissionDeniedError,
    PositionTimeoutError,
    UnmappedIsoCodeError,
    ValidationError,
)

__all__ = [
    "IntlPhoneError",
    "ConfigurationError",
    "ValidationError",
    "IntegrationError",
    "LocationError",
    "PermissionDeniedError",
    "PositionTimeoutError",
    "GeocodeEmptyError",
    "UnmappedIsoCodeError",
]
