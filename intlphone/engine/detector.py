"""Detect a calling code already embedded in a run of digits.

Rules are scanned in table order, so 3-digit codes get the first chance,
then 2-digit, then "1". A rule only matches when the digits after the code
have roughly the right length for that country, which keeps "1" from
claiming every number that happens to start with 1.

Usage:
    from intlphone.engine.detector import detect_calling_code

    rule = detect_calling_code("639171234567")
    rule.calling_code  # "+63"
"""

import re
from typing import Iterable, Optional

from intlphone.engine.calling_codes import CALLING_CODE_RULES, CallingCodeRule

_NON_DIGITS = re.compile(r"[^0-9]")


def digits_only(raw: str) -> str:
    """Strip everything except ASCII digits 0-9."""
    return _NON_DIGITS.sub("", raw)


def detect_calling_code(
    digits: str,
    rules: Iterable[CallingCodeRule] = CALLING_CODE_RULES,
) -> Optional[CallingCodeRule]:
    """Find the calling code rule that prefixes a digit string.

    A rule that prefix-matches but leaves a national number of the wrong
    length is skipped and the scan continues.

    Args:
        digits: Digits only, already stripped of formatting
        rules: Ordered rules to scan (defaults to the built-in table)

    Returns:
        First accepted rule, or None
    """
    for rule in rules:
        if not digits.startswith(rule.digits):
            continue
        if rule.accepts_length(len(digits) - len(rule.digits)):
            return rule
    return None


def detect_calling_code_embedded(raw: str) -> Optional[str]:
    """Detect a calling code from free-form input, without location.

    Meant for as-you-type hints such as showing a flag next to the field.

    Args:
        raw: Phone number as typed, formatting allowed

    Returns:
        Calling code such as "+63", or None
    """
    if not raw or not raw.strip():
        return None
    rule = detect_calling_code(digits_only(raw))
    return rule.calling_code if rule else None
