"""Location-based country detection.

LocationResolver turns "where is the user" into an ISO country code. The
host provides the actual capability as a LocationPlatform (device GPS,
IP geolocation, a fixed country, or nothing at all).

The resolver sits in the middle of the phone normalizer's fallback chain,
so it never raises: permission denied, a slow position fix, an empty
geocode result and platform bugs all come back as None.

Usage:
    from intlphone.integrations.location import LocationResolver, StaticLocationPlatform

    resolver = LocationResolver(StaticLocationPlatform("PH"))
    await resolver.resolve_calling_code()  # "+63"
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Awaitable, Optional, TypeVar

from intlphone.core.config import DEFAULT_LOCATION_TIMEOUT
from intlphone.core.exceptions import (
    GeocodeEmptyError,
    LocationError,
    PermissionDeniedError,
    PositionTimeoutError,
    UnmappedIsoCodeError,
)
from intlphone.core.logging import get_logger
from intlphone.engine.calling_codes import calling_code_for_iso

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Position:
    """A position fix in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeocodeCandidate:
    """One reverse-geocoding result.

    Attributes:
        iso_country_code: ISO 3166 alpha-2 code, if the place has one
    """

    iso_country_code: Optional[str] = None


class LocationPlatform(ABC):
    """Host location capability.

    Implementations may raise anything; LocationResolver absorbs it.
    """

    @abstractmethod
    async def request_foreground_permission(self) -> bool:
        """Ask for foreground location permission (may prompt the user).

        Returns:
            True if granted
        """
        pass

    @abstractmethod
    async def get_foreground_permission(self) -> bool:
        """Check current permission without prompting.

        Returns:
            True if already granted
        """
        pass

    @abstractmethod
    async def get_current_position(self, timeout: float) -> Position:
        """Fetch the current position, giving up after timeout seconds."""
        pass

    @abstractmethod
    async def reverse_geocode(
        self, latitude: float, longitude: float
    ) -> list[GeocodeCandidate]:
        """Resolve a coordinate to place candidates, best first."""
        pass


class NullLocationPlatform(LocationPlatform):
    """No location capability. Permission is always denied."""

    async def request_foreground_permission(self) -> bool:
        return False

    async def get_foreground_permission(self) -> bool:
        return False

    async def get_current_position(self, timeout: float) -> Position:
        raise PermissionDeniedError("No location capability")

    async def reverse_geocode(
        self, latitude: float, longitude: float
    ) -> list[GeocodeCandidate]:
        return []


class StaticLocationPlatform(LocationPlatform):
    """Always reports the same country.

    Useful for deployments that know their market and for tests.
    """

    def __init__(self, iso_country_code: Optional[str], position: Optional[Position] = None):
        self._iso_country_code = iso_country_code
        self._position = position or Position(0.0, 0.0)

    async def request_foreground_permission(self) -> bool:
        return True

    async def get_foreground_permission(self) -> bool:
        return True

    async def get_current_position(self, timeout: float) -> Position:
        return self._position

    async def reverse_geocode(
        self, latitude: float, longitude: float
    ) -> list[GeocodeCandidate]:
        if not self._iso_country_code:
            return []
        return [GeocodeCandidate(self._iso_country_code)]


class LocationResolver:
    """Resolve the user's country through a LocationPlatform.

    Holds no state between calls. Concurrent calls each do their own
    permission, position and geocode round trip.
    """

    def __init__(
        self,
        platform: Optional[LocationPlatform] = None,
        timeout: float = DEFAULT_LOCATION_TIMEOUT,
    ):
        """Initialize resolver.

        Args:
            platform: Location capability (defaults to NullLocationPlatform)
            timeout: Seconds allowed for the position fix
        """
        self.platform = platform or NullLocationPlatform()
        self.timeout = timeout

    async def resolve_iso_country(self) -> Optional[str]:
        """Return the user's ISO country code (upper-case), or None."""
        return await self._absorb(self._lookup_iso_country(), "iso_country")

    async def resolve_calling_code(self) -> Optional[str]:
        """Return the calling code for the user's country, or None."""
        return await self._absorb(self._lookup_calling_code(), "calling_code")

    async def is_available(self) -> bool:
        """True if location permission is already granted."""
        try:
            return bool(await self.platform.get_foreground_permission())
        except Exception as e:
            logger.warning(f"Error checking location availability: {e}")
            return False

    async def request_permission(self) -> bool:
        """Prompt for location permission. Errors count as denied."""
        try:
            return bool(await self.platform.request_foreground_permission())
        except Exception as e:
            logger.warning(f"Error requesting location permission: {e}")
            return False

    async def _lookup_iso_country(self) -> str:
        if not await self.platform.request_foreground_permission():
            raise PermissionDeniedError("Location permission denied")

        try:
            position = await asyncio.wait_for(
                self.platform.get_current_position(self.timeout), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise PositionTimeoutError(f"No position fix within {self.timeout}s") from e

        candidates = await self.platform.reverse_geocode(position.latitude, position.longitude)
        # Only the best candidate counts
        iso = candidates[0].iso_country_code if candidates else None
        if not iso or not iso.strip():
            raise GeocodeEmptyError("Reverse geocoding returned no country")

        iso = iso.strip().upper()
        logger.debug("Detected country", extra={"context": {"iso_country": iso}})
        return iso

    async def _lookup_calling_code(self) -> str:
        iso = await self._lookup_iso_country()
        calling_code = calling_code_for_iso(iso)
        if calling_code is None:
            raise UnmappedIsoCodeError(f"No calling code for country {iso}")
        return calling_code

    async def _absorb(self, lookup: Awaitable[T], what: str) -> Optional[T]:
        try:
            return await lookup
        except LocationError as e:
            logger.debug(
                f"Location lookup gave no {what}: {e}",
                extra={"context": {"reason": type(e).__name__}},
            )
        except Exception:
            logger.warning(f"Location platform failed while resolving {what}", exc_info=True)
        return None
