"""Phone functions exposed to the app layer.

Single entry point for sign-in and OTP screens: normalize what the user
typed, gate it, show it.

Usage:
    from intlphone.phone import (
        format_for_display,
        is_valid_international_phone,
        normalize_to_international,
    )

    phone = await normalize_to_international(raw)
    if not is_valid_international_phone(phone):
        ...  # "Please enter a valid phone number"
"""

from typing import Optional

from intlphone.core.config import Config, get_config
from intlphone.core.exceptions import ConfigurationError
from intlphone.core.logging import get_logger
from intlphone.engine.calling_codes import COUNTRY_CODES
from intlphone.engine.detector import detect_calling_code_embedded
from intlphone.engine.display import format_for_display
from intlphone.engine.normalizer import PhoneNormalizer
from intlphone.engine.validator import (
    is_valid_international_phone,
    require_valid_international_phone,
)
from intlphone.integrations.location import LocationResolver, NullLocationPlatform

__all__ = [
    "COUNTRY_CODES",
    "build_location_resolver",
    "detect_calling_code_embedded",
    "format_for_display",
    "get_location_based_calling_code",
    "is_valid_international_phone",
    "normalize_to_international",
    "normalize_to_international_sync",
    "require_valid_international_phone",
]

logger = get_logger(__name__)


def build_location_resolver(config: Optional[Config] = None) -> LocationResolver:
    """Build the resolver the configuration asks for.

    Location lookups only happen when the user has consented
    (INTLPHONE_LOCATION_ENABLED). Otherwise, or when the configuration
    cannot be loaded, the resolver has no capability.
    """
    if config is None:
        try:
            config = get_config()
        except ConfigurationError as e:
            logger.warning(f"Location lookups disabled, configuration is invalid: {e}")
            return LocationResolver(NullLocationPlatform())

    if not config.location_enabled:
        return LocationResolver(NullLocationPlatform(), timeout=config.location_timeout)

    from intlphone.integrations.web_location import WebLocationPlatform

    platform = WebLocationPlatform(
        enabled=True,
        geoip_url=config.geoip_url,
        reverse_geocode_url=config.reverse_geocode_url,
        user_agent=config.user_agent,
    )
    return LocationResolver(platform, timeout=config.location_timeout)


async def normalize_to_international(
    raw: str,
    fallback_calling_code: Optional[str] = None,
    resolver: Optional[LocationResolver] = None,
) -> str:
    """Normalize typed input to "+<digits>", using location if allowed.

    Args:
        raw: Phone number as typed
        fallback_calling_code: Defaults to the configured fallback ("+1")
        resolver: Location resolver (optional, built from config)

    Returns:
        "" for input without digits, otherwise a string starting with "+"
    """
    normalizer = PhoneNormalizer(resolver or build_location_resolver())
    return await normalizer.normalize(raw, fallback_calling_code)


def normalize_to_international_sync(
    raw: str, fallback_calling_code: Optional[str] = None
) -> str:
    """Same as normalize_to_international but never consults location."""
    return PhoneNormalizer().normalize_sync(raw, fallback_calling_code)


async def get_location_based_calling_code(
    resolver: Optional[LocationResolver] = None,
) -> Optional[str]:
    """Calling code for the user's current country, e.g. for a placeholder hint."""
    resolver = resolver or build_location_resolver()
    return await resolver.resolve_calling_code()
