"""intlphone command line.

Usage:
    intlphone "(555) 123-4567" 9171234567    # Normalize (location if enabled)
    intlphone --no-location 9171234567       # Skip location lookup
    intlphone --display "+15551234567"       # Also print display form
    intlphone --detect 639171234567          # Embedded calling code only
    intlphone --status                       # Config and location readiness
    intlphone --version                      # Show version

Exit codes: 0 all numbers valid, 1 any number invalid, 2 bad configuration.
"""

import argparse
import asyncio
import logging
from typing import Optional, Sequence

from intlphone import __version__
from intlphone.core.config import get_config, validate_config
from intlphone.core.exceptions import ConfigurationError
from intlphone.core.logging import get_logger, setup_logging
from intlphone.engine.detector import detect_calling_code_embedded
from intlphone.engine.display import format_for_display
from intlphone.engine.normalizer import PhoneNormalizer
from intlphone.engine.validator import is_valid_international_phone
from intlphone.integrations.base import IntegrationBase
from intlphone.phone import build_location_resolver

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="intlphone",
        description="Normalize typed phone numbers to E.164 international format",
    )
    parser.add_argument("numbers", nargs="*", help="Phone numbers as typed")
    parser.add_argument(
        "--no-location",
        action="store_true",
        help="Skip location-based country detection",
    )
    parser.add_argument(
        "--fallback",
        default=None,
        help="Fallback calling code (default: INTLPHONE_FALLBACK_CALLING_CODE or +1)",
    )
    parser.add_argument("--display", action="store_true", help="Also print display format")
    parser.add_argument(
        "--detect",
        action="store_true",
        help="Only report the calling code embedded in each number",
    )
    parser.add_argument("--status", action="store_true", help="Show readiness report and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    return parser


async def _normalize_all(
    normalizer: PhoneNormalizer,
    numbers: Sequence[str],
    fallback: Optional[str],
    use_location: bool,
) -> list[str]:
    if not use_location:
        return [normalizer.normalize_sync(n, fallback) for n in numbers]
    return list(await asyncio.gather(*(normalizer.normalize(n, fallback) for n in numbers)))


def _print_status(issues: list[str]) -> None:
    config = get_config()
    resolver = build_location_resolver(config)
    available = asyncio.run(resolver.is_available())

    print(f"\nintlphone v{__version__} - Readiness\n")
    print(f"  Fallback calling code: {config.fallback_calling_code}")
    print(f"  Location lookups:      {'enabled' if config.location_enabled else 'disabled'}")
    print(f"  Location available:    {'yes' if available else 'no'}")
    print(f"  Position timeout:      {config.location_timeout}s")
    if isinstance(resolver.platform, IntegrationBase):
        reachable = resolver.platform.health_check()
        print(f"  Location service:      {'reachable' if reachable else 'unreachable'}")
    if issues:
        print(f"\nConfiguration issues ({len(issues)}):")
        for issue in issues:
            print(f"  ! {issue}")
    print()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for intlphone.

    Returns:
        Exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"intlphone v{__version__}")
        return EXIT_OK

    if not args.numbers and not args.status:
        parser.print_help()
        return EXIT_OK

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return EXIT_CONFIG

    setup_logging(
        log_dir=config.log_path,
        console_level=logging.DEBUG if (args.debug or config.debug) else logging.WARNING,
    )
    logger = get_logger("cli")

    issues = validate_config(config)
    for issue in issues:
        logger.warning(f"Configuration issue: {issue}")

    if args.status:
        _print_status(issues)
        return EXIT_CONFIG if issues else EXIT_OK

    if args.detect:
        for number in args.numbers:
            print(f"{number}\t{detect_calling_code_embedded(number) or '-'}")
        return EXIT_OK

    use_location = not args.no_location
    resolver = build_location_resolver(config) if use_location else None
    normalizer = PhoneNormalizer(resolver, config.fallback_calling_code)
    results = asyncio.run(_normalize_all(normalizer, args.numbers, args.fallback, use_location))

    exit_code = EXIT_OK
    for raw, normalized in zip(args.numbers, results):
        valid = is_valid_international_phone(normalized)
        if not valid:
            exit_code = EXIT_INVALID
        columns = [raw, normalized, "valid" if valid else "invalid"]
        if args.display:
            columns.append(format_for_display(normalized))
        print("\t".join(columns))

    logger.debug(
        "Normalized numbers",
        extra={"context": {"count": len(results), "location": use_location}},
    )
    return exit_code
