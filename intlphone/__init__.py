"""intlphone - Phone number normalization to E.164.

Converts free-form phone input into international format without making
the user pick a country.

Layers:
    - core: Configuration, logging, exceptions
    - engine: Calling code tables, detection, normalization, validation, display
    - integrations: Location capability (device, network, static)
    - phone: Functions exposed to the app layer
"""

__version__ = "0.1.0"

from intlphone.phone import (  # noqa: E402
    COUNTRY_CODES,
    detect_calling_code_embedded,
    format_for_display,
    get_location_based_calling_code,
    is_valid_international_phone,
    normalize_to_international,
    normalize_to_international_sync,
    require_valid_international_phone,
)

__all__ = [
    "__version__",
    "COUNTRY_CODES",
    "detect_calling_code_embedded",
    "format_for_display",
    "get_location_based_calling_code",
    "is_valid_international_phone",
    "normalize_to_international",
    "normalize_to_international_sync",
    "require_valid_international_phone",
]
