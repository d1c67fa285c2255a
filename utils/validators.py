"""
Stateless format predicates for intake fields.

Every function returns a bool and never raises; reporting a failure (and the
message shown to the client) is the caller's job.
"""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Any

ZIP_REGEX_5 = re.compile(r"^\d{5}$")
ZIP_REGEX_9 = re.compile(r"^\d{5}(?:-\d{4})?$")
EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_CHARS_REGEX = re.compile(r"^[\d\-. ]+$")
ISO_DATE_REGEX = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Trailing ZIP-like token (5+ digits, optional hyphenated suffix) of a free-text address.
_TRAILING_ZIP_REGEX = re.compile(r"(?<![\w-])(\d{5}[\d-]*)\s*$")


def validate_zip5(value: Any) -> bool:
    return isinstance(value, str) and bool(ZIP_REGEX_5.match(value.strip()))


def validate_zip9(value: Any) -> bool:
    """ZIP5 or ZIP+4."""
    return isinstance(value, str) and bool(ZIP_REGEX_9.match(value.strip()))


def validate_email(value: Any) -> bool:
    return isinstance(value, str) and bool(EMAIL_REGEX.match(value.strip()))


def validate_phone(value: Any) -> bool:
    """Digits with optional '-', '.' or space separators; 10 or 11 digits in total."""
    if not isinstance(value, str):
        return False
    candidate = value.strip()
    if not candidate or not PHONE_CHARS_REGEX.match(candidate):
        return False
    digits = sum(ch.isdigit() for ch in candidate)
    return 10 <= digits <= 11


def extract_zip_from_address(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    match = _TRAILING_ZIP_REGEX.search(value.strip())
    return match.group(1) if match else None


def validate_address(value: Any) -> bool:
    """Free-text address that ends in a valid ZIP."""
    zip_code = extract_zip_from_address(value)
    return zip_code is not None and validate_zip9(zip_code)


def validate_loose_address(value: Any) -> bool:
    """Free-text address; a trailing ZIP is optional but must be valid if given."""
    if not isinstance(value, str) or not value.strip():
        return False
    zip_code = extract_zip_from_address(value)
    return zip_code is None or validate_zip9(zip_code)


def validate_iso_date(value: Any) -> bool:
    """Calendar date written as YYYY-MM-DD; no time part and no compact form."""
    if isinstance(value, date):
        return True
    if not isinstance(value, str):
        return False
    candidate = value.strip()
    if not ISO_DATE_REGEX.match(candidate):
        return False
    try:
        date.fromisoformat(candidate)
    except ValueError:
        return False
    return True


def validate_definite_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def validate_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def validate_count(value: Any, minimum: int = 0, maximum: int | None = None) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return value >= minimum and (maximum is None or value <= maximum)
