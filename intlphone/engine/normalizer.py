"""Phone number normalization to international format.

Turns whatever the user typed into "+<digits>" without asking for a
country. Each stage either produces a number or passes:

    1. Blank input, or input without digits     -> ""
    2. Input already starting with "+"          -> returned untouched
    3. Calling code embedded in the digits      -> "+" + digits
    4. User's country from location (async only)-> calling code + digits
    5. 10 digits starting with 9 (PH mobile)    -> "+63" + digits
       10 digits not starting with 0 (US/CA)    -> "+1" + digits
    6. Digits already start with the fallback   -> "+" + digits
    7. Anything else                            -> fallback + digits

The result is a best guess, not a verified number. Run it through
is_valid_international_phone before sending it anywhere.

normalize() and normalize_sync() run the same stage list; the async one
only slots location in after stage 3, so as-you-type hints and the final
submit cannot disagree on the others.

Usage:
    from intlphone.engine.normalizer import PhoneNormalizer

    normalizer = PhoneNormalizer(resolver)
    await normalizer.normalize("(555) 123-4567")   # "+15551234567"
    normalizer.normalize_sync("9171234567")        # "+639171234567"
"""

import inspect
from typing import Any, Awaitable, Callable, Optional, Union, cast

from intlphone.core.config import DEFAULT_FALLBACK_CALLING_CODE, get_config
from intlphone.core.exceptions import ConfigurationError
from intlphone.core.logging import get_logger
from intlphone.engine.detector import detect_calling_code, digits_only
from intlphone.integrations.location import LocationResolver

logger = get_logger(__name__)

Stage = Callable[[], Optional[str]]
AsyncStage = Callable[[], Awaitable[Optional[str]]]

PHILIPPINES_CALLING_CODE = "+63"
NORTH_AMERICA_CALLING_CODE = "+1"


def first_match(*stages: Stage) -> Optional[str]:
    """Run stages in order and return the first non-None result."""
    for stage in stages:
        result = stage()
        if result is not None:
            return result
    return None


async def first_match_async(*stages: Union[Stage, AsyncStage]) -> Optional[str]:
    """Like first_match, awaiting stages that return an awaitable."""
    for stage in stages:
        result: Any = stage()
        if inspect.isawaitable(result):
            result = await result
        if result is not None:
            return cast(str, result)
    return None


def _answered(stage: str, result: str) -> str:
    logger.debug("Normalization stage answered", extra={"context": {"stage": stage}})
    return result


def from_blank(raw: Any, digits: str) -> Optional[str]:
    """Nothing to normalize: not a string, blank, or without digits."""
    if not isinstance(raw, str) or not raw.strip() or not digits:
        return _answered("blank", "")
    return None


def from_passthrough(raw: str) -> Optional[str]:
    """Leave input starting with "+" exactly as typed, formatting included."""
    if raw.startswith("+"):
        return _answered("passthrough", raw)
    return None


def from_embedded_code(digits: str) -> Optional[str]:
    """Keep digits whose leading calling code is recognisable."""
    rule = detect_calling_code(digits)
    if rule is None:
        return None
    return _answered("embedded", rule.calling_code + digits[len(rule.digits) :])


def from_number_pattern(digits: str) -> Optional[str]:
    """Guess the country from the shape of a 10-digit national number.

    Any 10-digit number starting with 9 is read as Philippine, even though
    other countries have such numbers.
    """
    if len(digits) != 10:
        return None
    if digits.startswith("9"):
        return _answered("pattern", PHILIPPINES_CALLING_CODE + digits)
    if not digits.startswith("0"):
        return _answered("pattern", NORTH_AMERICA_CALLING_CODE + digits)
    return None


def from_fallback(digits: str, fallback_calling_code: str) -> str:
    """Prefix the fallback calling code unless the digits already carry it."""
    fallback_digits = digits_only(fallback_calling_code)
    if digits.startswith(fallback_digits):
        return "+" + digits
    return "+" + fallback_digits + digits


def _configured_fallback() -> str:
    try:
        return get_config().fallback_calling_code
    except ConfigurationError as e:
        logger.warning(
            f"Ignoring configuration for phone normalization: {e}",
            extra={"context": {"fallback": DEFAULT_FALLBACK_CALLING_CODE}},
        )
        return DEFAULT_FALLBACK_CALLING_CODE


class PhoneNormalizer:
    """Best-effort conversion of typed phone numbers to "+<digits>".

    Stateless apart from its collaborators; safe to share and to call
    concurrently. Never raises, not even on broken configuration.
    """

    def __init__(
        self,
        resolver: Optional[LocationResolver] = None,
        fallback_calling_code: Optional[str] = None,
    ):
        """Initialize normalizer.

        Args:
            resolver: Location resolver for the country stage. Defaults to
                one without a location capability (same as normalize_sync).
            fallback_calling_code: Default calling code (optional, uses config)
        """
        if fallback_calling_code is None:
            fallback_calling_code = _configured_fallback()

        self.resolver = resolver or LocationResolver()
        self.fallback_calling_code = fallback_calling_code

    async def normalize(self, raw: str, fallback_calling_code: Optional[str] = None) -> str:
        """Normalize with location-based country detection.

        Args:
            raw: Phone number as typed
            fallback_calling_code: Overrides the configured fallback

        Returns:
            "" or a string starting with "+"
        """
        digits = self._digits(raw)
        result = await first_match_async(
            *self._before_location(raw, digits),
            lambda: self._from_location(digits),
            *self._after_location(digits, fallback_calling_code),
        )
        return cast(str, result)

    def normalize_sync(self, raw: str, fallback_calling_code: Optional[str] = None) -> str:
        """Normalize without location, for immediate as-you-type results.

        Args:
            raw: Phone number as typed
            fallback_calling_code: Overrides the configured fallback

        Returns:
            "" or a string starting with "+"
        """
        digits = self._digits(raw)
        result = first_match(
            *self._before_location(raw, digits),
            *self._after_location(digits, fallback_calling_code),
        )
        return cast(str, result)

    @staticmethod
    def _digits(raw: Any) -> str:
        return digits_only(raw) if isinstance(raw, str) else ""

    def _before_location(self, raw: str, digits: str) -> list[Stage]:
        return [
            lambda: from_blank(raw, digits),
            lambda: from_passthrough(raw),
            lambda: from_embedded_code(digits),
        ]

    def _after_location(self, digits: str, fallback_calling_code: Optional[str]) -> list[Stage]:
        # The fallback stage always answers
        return [
            lambda: from_number_pattern(digits),
            lambda: self._from_fallback(digits, fallback_calling_code),
        ]

    async def _from_location(self, digits: str) -> Optional[str]:
        calling_code = await self.resolver.resolve_calling_code()
        if calling_code is None:
            return None
        logger.debug(
            "Using location-based calling code",
            extra={"context": {"stage": "location", "calling_code": calling_code}},
        )
        return calling_code + digits

    def _from_fallback(self, digits: str, fallback_calling_code: Optional[str]) -> str:
        if fallback_calling_code is None:
            fallback_calling_code = self.fallback_calling_code
        logger.debug(
            "Normalized with fallback calling code",
            extra={"context": {"stage": "fallback", "fallback": fallback_calling_code}},
        )
        return from_fallback(digits, fallback_calling_code)
