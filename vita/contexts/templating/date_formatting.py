"""
Date formatting for rendered resume entries.

Stored dates come from month pickers ("2021-06") or full dates ("2021-06-15").
Month names are a fixed English table rather than strftime("%b"), so output does
not depend on the process locale.
"""

import re

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

DATE_PATTERN = re.compile(r"^\s*(\d{4})-(\d{1,2})(?:-(\d{1,2}))?(?:[T ].*)?\s*$")

RANGE_SEPARATOR = " - "
PRESENT = "Present"
NO_EXPIRATION = "(No Expiration)"
EXPIRES = "Expires:"


def format_month(value: str) -> str:
    """
    Format a stored date as "Mon YYYY".

    Examples:
        >>> format_month("2021-06")
        'Jun 2021'
        >>> format_month("2021-06-30")
        'Jun 2021'
        >>> format_month("")
        ''

    Unrecognised values are returned stripped but otherwise unchanged.
    """
    if not value:
        return ""
    match = DATE_PATTERN.match(value)
    if not match:
        return value.strip()
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return value.strip()
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year}"


def format_date_range(start_date: str, end_date: str = "", current: bool = False) -> str:
    """
    Format an experience/education/project date range.

    Examples:
        >>> format_date_range("2021-06", "2022-01")
        'Jun 2021 - Jan 2022'
        >>> format_date_range("2021-06", current=True)
        'Jun 2021 - Present'
        >>> format_date_range("2021-06")
        'Jun 2021'
    """
    start = format_month(start_date)
    if current:
        end = PRESENT
    else:
        end = format_month(end_date)

    if start and end:
        return f"{start}{RANGE_SEPARATOR}{end}"
    return start


def format_certification_dates(
    issue_date: str, expiration_date: str = "", no_expiration: bool = False
) -> str:
    """
    Format a certification's issue date with its expiry suffix.

    Examples:
        >>> format_certification_dates("2021-06", "2024-06")
        'Jun 2021 - Expires: Jun 2024'
        >>> format_certification_dates("2021-06", no_expiration=True)
        'Jun 2021 (No Expiration)'
    """
    issued = format_month(issue_date)
    if no_expiration:
        suffix = f" {NO_EXPIRATION}"
    elif expiration_date:
        suffix = f"{RANGE_SEPARATOR}{EXPIRES} {format_month(expiration_date)}"
    else:
        suffix = ""
    return f"{issued}{suffix}".strip()
