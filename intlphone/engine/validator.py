"""E.164 grammar check.

A valid number is "+", a non-zero digit, then 1-14 more digits (2-15
digits in total). Nothing here checks that the number is assigned.
"""

import re
from typing import Any

from intlphone.core.exceptions import ValidationError

E164_PATTERN = re.compile(r"\+[1-9]\d{1,14}", re.ASCII)

INVALID_PHONE_MESSAGE = "Please enter a valid phone number"


def is_valid_international_phone(phone: Any) -> bool:
    """Return True if phone is a strict E.164 string."""
    if not isinstance(phone, str):
        return False
    return E164_PATTERN.fullmatch(phone) is not None


def require_valid_international_phone(phone: str) -> str:
    """Gate a normalized number before it is sent to the backend.

    Args:
        phone: Normalized phone number

    Returns:
        The same phone number

    Raises:
        ValidationError: If phone is not valid E.164
    """
    if not is_valid_international_phone(phone):
        raise ValidationError(INVALID_PHONE_MESSAGE)
    return phone
