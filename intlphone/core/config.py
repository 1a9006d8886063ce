"""Configuration management for intlphone.

Loads configuration from environment variables and .env file.
Provides validation and sensible defaults.

Usage:
    from intlphone.core.config import get_config, validate_config

    config = get_config()
    issues = validate_config(config)
    if issues:
        for issue in issues:
            print(f"Config issue: {issue}")
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from intlphone.core.exceptions import ConfigurationError

# Default values (defined once, used by both Config and load_config)
DEFAULT_FALLBACK_CALLING_CODE = "+1"
DEFAULT_LOCATION_TIMEOUT = 10.0
DEFAULT_GEOIP_URL = "https://ipapi.co/json/"
DEFAULT_REVERSE_GEOCODE_URL = "https://nominatim.openstreetmap.org/reverse"
DEFAULT_USER_AGENT = "intlphone/0.1.0"
DEFAULT_LOG_PATH = Path.home() / ".intlphone" / "logs"

_CALLING_CODE_RE = re.compile(r"^\+[1-9]\d{0,2}$", re.ASCII)


@dataclass
class Config:
    """Application configuration.

    Attributes:
        fallback_calling_code: Calling code used when nothing else detects one
        location_enabled: User consented to location-based country detection
        location_timeout: Seconds allowed for a position fix
        geoip_url: IP-geolocation endpoint returning latitude/longitude JSON
        reverse_geocode_url: Nominatim-compatible reverse geocoding endpoint
        user_agent: User-Agent sent to the geolocation services
        log_path: Directory for log files
        debug: Enable debug logging on the console
    """

    fallback_calling_code: str = DEFAULT_FALLBACK_CALLING_CODE
    location_enabled: bool = False
    location_timeout: float = DEFAULT_LOCATION_TIMEOUT
    geoip_url: str = DEFAULT_GEOIP_URL
    reverse_geocode_url: str = DEFAULT_REVERSE_GEOCODE_URL
    user_agent: str = DEFAULT_USER_AGENT
    log_path: Path = field(default_factory=lambda: DEFAULT_LOG_PATH)
    debug: bool = False


def load_env_file(path: Path) -> dict[str, str]:
    """Parse .env file.

    Handles:
        - KEY=VALUE format
        - Comments (lines starting with #)
        - Blank lines
        - Quoted values

    Args:
        path: Path to .env file

    Returns:
        Dictionary of environment variables
    """
    env_vars: dict[str, str] = {}

    if not path.exists():
        return env_vars

    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()

                if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
                    value = value[1:-1]

                if key:
                    env_vars[key] = value

    return env_vars


def _get_path(key: str, default: Path, env_vars: dict[str, str]) -> Path:
    """Get path from environment, expanding ~ and resolving."""
    value = os.environ.get(key) or env_vars.get(key)
    if value:
        return Path(value).expanduser().resolve()
    return default


def _get_str(key: str, default: str, env_vars: dict[str, str]) -> str:
    """Get string from environment."""
    return os.environ.get(key) or env_vars.get(key) or default


def _get_bool(key: str, default: bool, env_vars: dict[str, str]) -> bool:
    """Get boolean from environment."""
    value = os.environ.get(key) or env_vars.get(key)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")


def _get_float(key: str, default: float, env_vars: dict[str, str]) -> float:
    """Get float from environment.

    Raises:
        ConfigurationError: If the value is not a number
    """
    value = os.environ.get(key) or env_vars.get(key)
    if not value:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number, got {value!r}") from e


def load_config(env_file: Optional[Path] = None) -> Config:
    """Load configuration from environment and .env file.

    Priority:
        1. Environment variables (highest)
        2. .env file
        3. Default values (lowest)

    Args:
        env_file: Path to .env file. Defaults to .env in current directory.

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If a numeric setting is malformed
    """
    if env_file is None:
        env_file = Path.cwd() / ".env"

    env_vars = load_env_file(env_file)

    return Config(
        fallback_calling_code=_get_str(
            "INTLPHONE_FALLBACK_CALLING_CODE", DEFAULT_FALLBACK_CALLING_CODE, env_vars
        ).strip(),
        location_enabled=_get_bool("INTLPHONE_LOCATION_ENABLED", False, env_vars),
        location_timeout=_get_float(
            "INTLPHONE_LOCATION_TIMEOUT", DEFAULT_LOCATION_TIMEOUT, env_vars
        ),
        geoip_url=_get_str("INTLPHONE_GEOIP_URL", DEFAULT_GEOIP_URL, env_vars),
        reverse_geocode_url=_get_str(
            "INTLPHONE_REVERSE_GEOCODE_URL", DEFAULT_REVERSE_GEOCODE_URL, env_vars
        ),
        user_agent=_get_str("INTLPHONE_USER_AGENT", DEFAULT_USER_AGENT, env_vars),
        log_path=_get_path("INTLPHONE_LOG_PATH", DEFAULT_LOG_PATH, env_vars),
        debug=_get_bool("INTLPHONE_DEBUG", False, env_vars),
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration.

    Checks:
        - Fallback calling code is "+" and 1-3 digits, no leading zero
        - Location timeout is positive
        - Service URLs are http(s)
        - Log directory exists or can be created

    Args:
        config: Configuration to validate

    Returns:
        List of issues (empty if valid)
    """
    issues: list[str] = []

    if not _CALLING_CODE_RE.match(config.fallback_calling_code):
        issues.append(
            f"Fallback calling code must look like '+1' or '+63', "
            f"got {config.fallback_calling_code!r}"
        )

    if config.location_timeout <= 0:
        issues.append(f"Location timeout must be positive, got {config.location_timeout}")

    for name, url in (
        ("INTLPHONE_GEOIP_URL", config.geoip_url),
        ("INTLPHONE_REVERSE_GEOCODE_URL", config.reverse_geocode_url),
    ):
        if not url.startswith(("http://", "https://")):
            issues.append(f"{name} must be an http(s) URL, got {url!r}")

    if config.location_enabled and not config.user_agent:
        issues.append("Location lookups need INTLPHONE_USER_AGENT (geocoder usage policy)")

    try:
        config.log_path.mkdir(parents=True, exist_ok=True)
        if not os.access(config.log_path, os.W_OK):
            issues.append(f"Log directory not writable: {config.log_path}")
    except OSError as e:
        issues.append(f"Cannot create log directory {config.log_path}: {e}")

    return issues


# Singleton config
_config: Optional[Config] = None


def get_config() -> Config:
    """Return cached configuration singleton.

    Loads configuration on first call, returns cached version thereafter.

    Returns:
        Application configuration
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset cached configuration.

    Used primarily for testing.
    """
    global _config
    _config = None
