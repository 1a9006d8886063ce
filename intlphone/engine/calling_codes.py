"""Static calling code tables.

Two tables with different jobs:
    - CALLING_CODE_RULES: ordered rules used to recognise a calling code
      already embedded in a run of digits. Longer codes come first so
      "971..." is never read as a 1-digit code.
    - ISO_TO_CALLING_CODE: ISO 3166 alpha-2 country -> calling code, used
      only when the country comes from a location lookup.

Only a small set of major countries is covered. This is not the full
ITU allocation.

Usage:
    from intlphone.engine.calling_codes import CALLING_CODE_RULES, calling_code_for_iso

    calling_code_for_iso("ph")  # "+63"
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class CallingCodeRule:
    """One recognisable calling code.

    Attributes:
        digits: Calling code digits without "+" (1-3 digits)
        expected_national_length: Typical length of the national number
        name: Country or region label
    """

    digits: str
    expected_national_length: int
    name: str

    @property
    def calling_code(self) -> str:
        """Calling code with its "+" prefix."""
        return f"+{self.digits}"

    def accepts_length(self, national_length: int) -> bool:
        """National number length within one digit of the expected length."""
        return (
            self.expected_national_length - 1
            <= national_length
            <= self.expected_national_length + 1
        )


# =============================================================================
# DIGIT PREFIX RULES (order matters: 3-digit, then 2-digit, then 1-digit)
# =============================================================================

CALLING_CODE_RULES: tuple[CallingCodeRule, ...] = (
    # 3-digit
    CallingCodeRule("971", 9, "UAE"),
    CallingCodeRule("966", 9, "Saudi Arabia"),
    CallingCodeRule("234", 10, "Nigeria"),
    CallingCodeRule("254", 9, "Kenya"),
    # 2-digit
    CallingCodeRule("63", 10, "Philippines"),
    CallingCodeRule("86", 11, "China"),
    CallingCodeRule("81", 10, "Japan"),
    CallingCodeRule("82", 10, "South Korea"),
    CallingCodeRule("91", 10, "India"),
    CallingCodeRule("61", 9, "Australia"),
    CallingCodeRule("65", 8, "Singapore"),
    CallingCodeRule("60", 9, "Malaysia"),
    CallingCodeRule("66", 9, "Thailand"),
    CallingCodeRule("84", 9, "Vietnam"),
    CallingCodeRule("62", 10, "Indonesia"),
    CallingCodeRule("44", 10, "UK"),
    CallingCodeRule("49", 10, "Germany"),
    CallingCodeRule("33", 9, "France"),
    CallingCodeRule("39", 10, "Italy"),
    CallingCodeRule("34", 9, "Spain"),
    CallingCodeRule("31", 9, "Netherlands"),
    CallingCodeRule("46", 9, "Sweden"),
    CallingCodeRule("47", 8, "Norway"),
    CallingCodeRule("45", 8, "Denmark"),
    CallingCodeRule("41", 9, "Switzerland"),
    CallingCodeRule("43", 10, "Austria"),
    CallingCodeRule("20", 10, "Egypt"),
    CallingCodeRule("27", 9, "South Africa"),
    CallingCodeRule("55", 11, "Brazil"),
    CallingCodeRule("52", 10, "Mexico"),
    CallingCodeRule("54", 10, "Argentina"),
    CallingCodeRule("56", 9, "Chile"),
    CallingCodeRule("57", 10, "Colombia"),
    # 1-digit
    CallingCodeRule("1", 10, "US/Canada"),
)


# =============================================================================
# ISO COUNTRY -> CALLING CODE (location path only)
# =============================================================================

ISO_TO_CALLING_CODE: Mapping[str, str] = MappingProxyType(
    {
        # North America
        "US": "+1",
        "CA": "+1",
        # Asia Pacific
        "PH": "+63",
        "CN": "+86",
        "JP": "+81",
        "KR": "+82",
        "IN": "+91",
        "AU": "+61",
        "SG": "+65",
        "MY": "+60",
        "TH": "+66",
        "VN": "+84",
        "ID": "+62",
        # Europe
        "GB": "+44",
        "DE": "+49",
        "FR": "+33",
        "IT": "+39",
        "ES": "+34",
        "NL": "+31",
        "SE": "+46",
        "NO": "+47",
        "DK": "+45",
        "CH": "+41",
        "AT": "+43",
        # Middle East & Africa
        "AE": "+971",
        "SA": "+966",
        "EG": "+20",
        "ZA": "+27",
        "NG": "+234",
        "KE": "+254",
        # South America
        "BR": "+55",
        "MX": "+52",
        "AR": "+54",
        "CL": "+56",
        "CO": "+57",
    }
)

# Short list for country pickers. "UK" is the label the app shows, not ISO.
COUNTRY_CODES: Mapping[str, str] = MappingProxyType(
    {
        "US": "+1",
        "CA": "+1",
        "UK": "+44",
        "AU": "+61",
        "DE": "+49",
        "FR": "+33",
        "IT": "+39",
        "ES": "+34",
        "BR": "+55",
        "IN": "+91",
        "CN": "+86",
        "JP": "+81",
        "KR": "+82",
        "MX": "+52",
        "PH": "+63",
    }
)


def calling_code_for_iso(iso_country: Optional[str]) -> Optional[str]:
    """Map an ISO country code to its calling code.

    Args:
        iso_country: Two-letter ISO code in any case, or None

    Returns:
        Calling code such as "+63", or None if missing or not in the table
    """
    if not iso_country:
        return None
    return ISO_TO_CALLING_CODE.get(iso_country.strip().upper())
