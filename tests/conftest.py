"""Shared pytest fixtures for intlphone tests.

Fixtures:
    - clean_config: Isolates every test from INTLPHONE_* env vars and .env
    - mock_config: Test configuration with temp paths
    - fake_platform / make_platform: Scriptable location capability
    - null_normalizer: Normalizer with no location capability
"""

import asyncio
import os
from pathlib import Path
from typing import Optional

import pytest

from intlphone.core.config import Config, reset_config
from intlphone.engine.normalizer import PhoneNormalizer
from intlphone.integrations.location import (
    GeocodeCandidate,
    LocationPlatform,
    LocationResolver,
    Position,
)


class FakeLocationPlatform(LocationPlatform):
    """Location capability with canned answers.

    Attributes:
        calls: Names of the platform methods called, in order
    """

    def __init__(
        self,
        iso_country_code: Optional[str] = "PH",
        granted: bool = True,
        position_delay: float = 0.0,
        candidates: Optional[list[GeocodeCandidate]] = None,
        error: Optional[BaseException] = None,
        error_on: str = "reverse_geocode",
    ):
        self.iso_country_code = iso_country_code
        self.granted = granted
        self.position_delay = position_delay
        self.candidates = candidates
        self.error = error
        self.error_on = error_on
        self.calls: list[str] = []

    def _maybe_raise(self, name: str) -> None:
        self.calls.append(name)
        if self.error is not None and self.error_on == name:
            raise self.error

    async def request_foreground_permission(self) -> bool:
        self._maybe_raise("request_foreground_permission")
        return self.granted

    async def get_foreground_permission(self) -> bool:
        self._maybe_raise("get_foreground_permission")
        return self.granted

    async def get_current_position(self, timeout: float) -> Position:
        self._maybe_raise("get_current_position")
        if self.position_delay:
            await asyncio.sleep(self.position_delay)
        return Position(14.5995, 120.9842)

    async def reverse_geocode(self, latitude: float, longitude: float) -> list[GeocodeCandidate]:
        self._maybe_raise("reverse_geocode")
        if self.candidates is not None:
            return self.candidates
        if self.iso_country_code is None:
            return []
        return [GeocodeCandidate(self.iso_country_code)]


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep host environment and stray .env files out of every test."""
    for key in list(os.environ):
        if key.startswith("INTLPHONE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def mock_config(tmp_path: Path) -> Config:
    """Test configuration with temp paths."""
    return Config(log_path=tmp_path / "logs", debug=True)


@pytest.fixture
def fake_platform() -> FakeLocationPlatform:
    """Platform that grants permission and reports the Philippines."""
    return FakeLocationPlatform()


@pytest.fixture
def make_platform():
    """Factory for FakeLocationPlatform with custom answers."""
    return FakeLocationPlatform


@pytest.fixture
def null_normalizer() -> PhoneNormalizer:
    """Normalizer with no location capability and a +1 fallback."""
    return PhoneNormalizer(LocationResolver(), fallback_calling_code="+1")


# Markers for different test types
def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests requiring external services")
