# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for SchoolsHub.

All timestamps are stored in UTC and every Python datetime handled by the
services is timezone-aware.

Usage:
    from src.utils.datetime import utc_now

    created_on = mapped_column(DateTime(timezone=True), default=utc_now)
"""

from datetime import date, datetime, timedelta, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.
    """
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Get the current UTC calendar date."""
    return utc_now().date()


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Naive datetimes are assumed to already be in UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def days_from_now(days: int, start: datetime | None = None) -> datetime:
    """Get UTC datetime N days after ``start``, or after now when omitted."""
    return (ensure_utc(start) or utc_now()) + timedelta(days=days)


def date_of_birth_from_id_number(id_number: str | None, today: date | None = None) -> date | None:
    """Extract the date of birth from a South African identity number.

    The first six digits encode ``YYMMDD``. Two-digit years greater than the
    current year are treated as 19xx.

    Args:
        id_number: The 13 digit identity number.
        today: Reference date, defaults to the current UTC date.

    Returns:
        The date of birth, or None when the number cannot be parsed.
    """
    if not id_number or len(id_number) < 6 or not id_number[:6].isdigit():
        return None

    today = today or utc_today()
    yy, mm, dd = int(id_number[0:2]), int(id_number[2:4]), int(id_number[4:6])
    century = 1900 if yy > today.year % 100 else 2000

    try:
        return date(century + yy, mm, dd)
    except ValueError:
        return None


def age_from_id_number(id_number: str | None, today: date | None = None) -> int:
    """Age in years derived from an identity number.

    Only the year difference is used. Unparseable numbers yield 0.

    Example:
        >>> age_from_id_number("1501015800086", today=date(2025, 6, 1))
        10
    """
    today = today or utc_today()
    dob = date_of_birth_from_id_number(id_number, today)
    if dob is None:
        return 0
    return today.year - dob.year
