"""Cosmetic grouping of normalized numbers for display.

No detection happens here. North American numbers get the familiar
"+1 (XXX) XXX-XXXX" layout; everything else is split after the first two
characters ("+" and one digit), which mis-groups 2- and 3-digit codes
such as +44 and +971. That split is what the app has always shown.
"""


def format_for_display(phone: str) -> str:
    """Format a normalized phone number for display.

    Args:
        phone: Normalized phone number, e.g. "+15551234567"

    Returns:
        Display string, e.g. "+1 (555) 123-4567"

    Examples:
        >>> format_for_display("+15551234567")
        '+1 (555) 123-4567'
        >>> format_for_display("+639171234567")
        '+6 39171234567'
        >>> format_for_display("+44 20 7946 0958")
        '+44 20 7946 0958'
    """
    if not phone:
        return ""

    # Already formatted
    if " " in phone:
        return phone

    if not phone.startswith("+"):
        return phone

    country_code = phone[:2]
    number = phone[2:]

    if country_code == "+1" and len(number) == 10:
        return f"+1 ({number[:3]}) {number[3:6]}-{number[6:]}"

    return f"{country_code} {number}"
