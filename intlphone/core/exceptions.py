"""intlphone Exception Hierarchy.

All custom exceptions inherit from IntlPhoneError.
LocationError subclasses describe why a location lookup produced no
country. They are raised by location platforms and absorbed at the
LocationResolver boundary; callers of the normalizer never see them.

Exception Hierarchy:
    IntlPhoneError (base)
    ├── ConfigurationError
    ├── ValidationError
    └── IntegrationError
        └── LocationError
            ├── PermissionDeniedError
            ├── PositionTimeoutError
            ├── GeocodeEmptyError
            └── UnmappedIsoCodeError
"""


class IntlPhoneError(Exception):
    """Base exception for all intlphone errors.

    All custom exceptions in intlphone inherit from this class,
    allowing for broad exception handling when needed.
    """

    pass


class ConfigurationError(IntlPhoneError):
    """Configuration is invalid or missing.

    Raised when:
        - A numeric setting cannot be parsed
        - Configuration file is malformed
    """

    pass


class ValidationError(IntlPhoneError):
    """Phone number failed the E.164 gate.

    The only caller-visible failure of the subsystem. The UI layer turns
    it into a generic "please enter a valid phone number" message.
    """

    pass


class IntegrationError(IntlPhoneError):
    """External integration failed.

    Base class for integration-specific errors.
    """

    pass


class LocationError(IntegrationError):
    """Device or network location lookup produced no country."""

    pass


class PermissionDeniedError(LocationError):
    """Foreground location permission was not granted."""

    pass


class PositionTimeoutError(LocationError):
    """Current position could not be fixed within the timeout."""

    pass


class GeocodeEmptyError(LocationError):
    """Reverse geocoding returned no candidate with a country code."""

    pass


class UnmappedIsoCodeError(LocationError):
    """ISO country code has no entry in the calling code table."""

    pass
