"""Network location platform for hosts without a device GPS.

Position comes from an IP-geolocation service, the country from a
Nominatim-compatible reverse geocoder. "Permission" is the user's consent
recorded in configuration (INTLPHONE_LOCATION_ENABLED); nothing is looked
up without it.

HTTP is blocking (requests) and runs in a worker thread so the event loop
stays free.

Usage:
    from intlphone.integrations.location import LocationResolver
    from intlphone.integrations.web_location import WebLocationPlatform

    resolver = LocationResolver(WebLocationPlatform(enabled=True))
    await resolver.resolve_iso_country()
"""

import asyncio
from typing import Any, Optional

import requests  # type: ignore[import-untyped]

from intlphone.core.exceptions import IntegrationError, LocationError, PositionTimeoutError
from intlphone.core.logging import get_logger
from intlphone.integrations.base import IntegrationBase, RateLimiter
from intlphone.integrations.location import GeocodeCandidate, LocationPlatform, Position

logger = get_logger(__name__)

GEOCODE_TIMEOUT = 10


class WebLocationPlatform(IntegrationBase, LocationPlatform):
    """IP geolocation plus reverse geocoding over HTTP."""

    def __init__(
        self,
        enabled: Optional[bool] = None,
        geoip_url: Optional[str] = None,
        reverse_geocode_url: Optional[str] = None,
        user_agent: Optional[str] = None,
    ):
        """Initialize web location platform.

        Args:
            enabled: User consent (optional, uses config if not provided)
            geoip_url: IP geolocation endpoint (optional, uses config)
            reverse_geocode_url: Reverse geocoding endpoint (optional, uses config)
            user_agent: User-Agent header (optional, uses config)
        """
        from intlphone.core.config import get_config

        if None in (enabled, geoip_url, reverse_geocode_url, user_agent):
            config = get_config()
            enabled = config.location_enabled if enabled is None else enabled
            geoip_url = geoip_url or config.geoip_url
            reverse_geocode_url = reverse_geocode_url or config.reverse_geocode_url
            user_agent = user_agent or config.user_agent

        self._enabled = bool(enabled)
        self._geoip_url = geoip_url
        self._reverse_geocode_url = reverse_geocode_url
        self._user_agent = user_agent
        self._geocode_limiter = RateLimiter(calls_per_second=1.0)

    def is_configured(self) -> bool:
        """Check if both endpoints and a User-Agent are set."""
        return bool(self._geoip_url and self._reverse_geocode_url and self._user_agent)

    def health_check(self) -> bool:
        """Check if the IP geolocation endpoint answers.

        Returns:
            True if configured, consented and reachable
        """
        if not (self._enabled and self.is_configured()):
            return False

        try:
            response = requests.get(
                self._geoip_url, headers=self._headers(), timeout=GEOCODE_TIMEOUT
            )
            return bool(response.status_code == 200)
        except requests.RequestException:
            return False

    async def request_foreground_permission(self) -> bool:
        return self._enabled

    async def get_foreground_permission(self) -> bool:
        return self._enabled

    async def get_current_position(self, timeout: float) -> Position:
        return await asyncio.to_thread(self._fetch_position, timeout)

    async def reverse_geocode(
        self, latitude: float, longitude: float
    ) -> list[GeocodeCandidate]:
        return await asyncio.to_thread(self._fetch_places, latitude, longitude)

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self._user_agent, "Accept": "application/json"}

    def _fetch_position(self, timeout: float) -> Position:
        """Look up the caller's approximate coordinates.

        Raises:
            PositionTimeoutError: If the service does not answer in time
            LocationError: If the response has no usable coordinates
            IntegrationError: On other HTTP failures
        """
        try:
            response = requests.get(self._geoip_url, headers=self._headers(), timeout=timeout)
        except requests.Timeout as e:
            raise PositionTimeoutError(f"IP geolocation timed out after {timeout}s") from e
        except requests.RequestException as e:
            raise IntegrationError(f"IP geolocation error: {e}") from e

        if response.status_code != 200:
            raise IntegrationError(
                f"IP geolocation failed ({response.status_code}): {response.text[:200]}"
            )

        data = response.json()
        latitude = _as_float(data.get("latitude", data.get("lat")))
        longitude = _as_float(data.get("longitude", data.get("lon")))
        if latitude is None or longitude is None:
            raise LocationError("IP geolocation returned no coordinates")

        return Position(latitude, longitude)

    def _fetch_places(self, latitude: float, longitude: float) -> list[GeocodeCandidate]:
        """Reverse geocode a coordinate to at most one country candidate.

        Raises:
            IntegrationError: If the geocoder keeps failing or rejects the call
        """
        self._geocode_limiter.wait_if_needed()

        response = self.with_retry(
            lambda: requests.get(
                self._reverse_geocode_url,
                params={
                    "format": "jsonv2",
                    "lat": latitude,
                    "lon": longitude,
                    "zoom": 3,  # country level
                },
                headers=self._headers(),
                timeout=GEOCODE_TIMEOUT,
            ),
            max_retries=1,
            exceptions=(requests.ConnectionError,),
        )

        if response.status_code == 429:
            raise IntegrationError("Reverse geocoding rate limit exceeded")
        if response.status_code != 200:
            raise IntegrationError(
                f"Reverse geocoding failed ({response.status_code}): {response.text[:200]}"
            )

        data = response.json()
        if "error" in data:
            logger.debug(f"Reverse geocoding found nothing: {data['error']}")
            return []

        country_code = (data.get("address") or {}).get("country_code")
        if not country_code:
            return []
        return [GeocodeCandidate(iso_country_code=country_code.upper())]


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
