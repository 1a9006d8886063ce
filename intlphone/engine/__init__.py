"""Engine package - Phone number logic.

Pure functions and the normalizer that composes them:
    - Calling code tables
    - Embedded calling code detection
    - Normalization fallback chain
    - E.164 validation
    - Display formatting

Modules:
    - calling_codes: Static calling code tables
    - detector: Calling code detection from digits
    - normalizer: PhoneNormalizer and its stages
    - validator: E.164 check
    - display: Display formatting
"""

from intlphone.engine.calling_codes import (
    CALLING_CODE_RULES,
    COUNTRY_CODES,
    ISO_TO_CALLING_CODE,
    CallingCodeRule,
    calling_code_for_iso,
)
from intlphone.engine.detector import (
    detect_calling_code,
    detect_calling_code_embedded,
    digits_only,
)
from intlphone.engine.display import format_for_display
from intlphone.engine.validator import (
    is_valid_international_phone,
    require_valid_international_phone,
)

__all__ = [
    # Tables
    "CALLING_CODE_RULES",
    "COUNTRY_CODES",
    "ISO_TO_CALLING_CODE",
    "CallingCodeRule",
    "calling_code_for_iso",
    # Detection
    "detect_calling_code",
    "detect_calling_code_embedded",
    "digits_only",
    # Validation and display
    "format_for_display",
    "is_valid_international_phone",
    "require_valid_international_phone",
]
