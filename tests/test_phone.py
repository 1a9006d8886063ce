"""Tests for the functions exposed to the app layer (intlphone/phone.py)."""

import asyncio
import logging

import pytest

import intlphone
from intlphone.core.config import Config
from intlphone.integrations.location import LocationResolver, NullLocationPlatform
from intlphone.integrations.web_location import WebLocationPlatform
from intlphone.phone import (
    build_location_resolver,
    get_location_based_calling_code,
    normalize_to_international,
    normalize_to_international_sync,
)


class TestNormalizeToInternational:
    """Primary async entry point."""

    def test_empty(self):
        assert asyncio.run(normalize_to_international("")) == ""
        assert asyncio.run(normalize_to_international("   ")) == ""

    def test_passthrough(self):
        assert asyncio.run(normalize_to_international("+15551234567")) == "+15551234567"
        assert asyncio.run(normalize_to_international("+44 20 7946 0958")) == "+44 20 7946 0958"

    def test_us_heuristic_without_location(self):
        """Location is off by default, so the US heuristic applies."""
        assert asyncio.run(normalize_to_international("(555) 123-4567")) == "+15551234567"

    def test_philippine_heuristic_without_location(self):
        assert asyncio.run(normalize_to_international("9171234567")) == "+639171234567"

    def test_injected_resolver(self, make_platform):
        resolver = LocationResolver(make_platform("MX"))
        result = asyncio.run(normalize_to_international("55 1234 5678", resolver=resolver))
        assert result == "+525512345678"

    def test_fallback_override(self):
        assert asyncio.run(normalize_to_international("12345", "+81")) == "+8112345"


class TestNormalizeToInternationalSync:
    """As-you-type variant."""

    def test_matches_async_without_location(self):
        for raw in ["(555) 123-4567", "9171234567", "0171234567", "+1 555"]:
            assert normalize_to_international_sync(raw) == asyncio.run(
                normalize_to_international(raw)
            )

    def test_never_uses_location(self, monkeypatch):
        monkeypatch.setenv("INTLPHONE_LOCATION_ENABLED", "true")
        # Would be "+63..." if the configured location were consulted
        assert normalize_to_international_sync("555-1234") == "+15551234"


class TestBuildLocationResolver:
    """Resolver chosen from configuration."""

    def test_disabled_uses_null_platform(self, mock_config: Config):
        resolver = build_location_resolver(mock_config)
        assert isinstance(resolver.platform, NullLocationPlatform)

    def test_enabled_uses_web_platform(self, mock_config: Config):
        mock_config.location_enabled = True
        mock_config.location_timeout = 3.0
        resolver = build_location_resolver(mock_config)
        assert isinstance(resolver.platform, WebLocationPlatform)
        assert resolver.timeout == 3.0

    def test_defaults_to_loaded_config(self, monkeypatch):
        monkeypatch.setenv("INTLPHONE_LOCATION_TIMEOUT", "4")
        assert build_location_resolver().timeout == 4.0

    def test_broken_configuration_disables_location(self, monkeypatch):
        monkeypatch.setenv("INTLPHONE_LOCATION_ENABLED", "true")
        monkeypatch.setenv("INTLPHONE_LOCATION_TIMEOUT", "ten")
        resolver = build_location_resolver()
        assert isinstance(resolver.platform, NullLocationPlatform)


class TestBrokenConfiguration:
    """A malformed setting unrelated to the number never breaks normalization."""

    @pytest.fixture(autouse=True)
    def bad_timeout(self, monkeypatch):
        monkeypatch.setenv("INTLPHONE_LOCATION_TIMEOUT", "ten")

    def test_sync_entry_point(self):
        assert normalize_to_international_sync("(555) 123-4567") == "+15551234567"

    def test_async_entry_point(self):
        assert asyncio.run(normalize_to_international("(555) 123-4567")) == "+15551234567"

    def test_explicit_fallback_still_applies(self):
        assert normalize_to_international_sync("12345", "+81") == "+8112345"
        assert asyncio.run(normalize_to_international("12345", "+81")) == "+8112345"

    def test_location_hint_is_none(self):
        assert asyncio.run(get_location_based_calling_code()) is None

    def test_warning_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="intlphone"):
            normalize_to_international_sync("555-1234")
        assert any("INTLPHONE_LOCATION_TIMEOUT" in r.getMessage() for r in caplog.records)


class TestLocationBasedCallingCode:
    """Placeholder-hint helper."""

    def test_with_resolver(self, fake_platform):
        resolver = LocationResolver(fake_platform)
        assert asyncio.run(get_location_based_calling_code(resolver)) == "+63"

    def test_default_is_none_without_consent(self):
        assert asyncio.run(get_location_based_calling_code()) is None


class TestPackageExports:
    """Top-level package surface."""

    @pytest.mark.parametrize(
        "name",
        [
            "normalize_to_international",
            "normalize_to_international_sync",
            "is_valid_international_phone",
            "require_valid_international_phone",
            "detect_calling_code_embedded",
            "format_for_display",
            "get_location_based_calling_code",
            "COUNTRY_CODES",
        ],
    )
    def test_exported(self, name):
        assert hasattr(intlphone, name)

    def test_signin_flow(self):
        """Normalize, gate, then render, the way the sign-in screen does."""
        phone = asyncio.run(intlphone.normalize_to_international("(212) 555-0199"))
        assert intlphone.is_valid_international_phone(phone)
        assert intlphone.format_for_display(phone) == "+1 (212) 555-0199"
        assert intlphone.detect_calling_code_embedded("(212) 555-0199") is None
