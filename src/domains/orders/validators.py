"""Field-level checks composed by each entity's ``validate`` method.

Every check takes the value and a human-readable field label, returns
``None`` when the value is acceptable and raises a ``ValidationError``
subclass otherwise. Checks are pure; they never mutate the value.
"""

import ipaddress
import math
import re
from collections.abc import Sized
from datetime import datetime
from typing import Any

from email_validator import EmailNotValidError, validate_email

from src.shared.errors import FieldBadFormatError, FieldMissingError, FieldOutOfRangeError

from .constants import ISO_4217_CURRENCIES, ZERO_DATE

_DIGITS = re.compile(r"^\d+$")
_COUNTRY_CODE = re.compile(r"^[A-Za-z]{2}$")


def check_presence(value: Any, field: str, required: bool) -> bool:
    """Return True when ``value`` is present and should be checked further.

    Absent values raise only when ``required``; this is how weak validation
    relaxes presence without relaxing the format of values that are set.
    """
    if value is None:
        if required:
            raise FieldMissingError(field, "is required")
        return False
    return True


def validate_object_not_null(value: Any, field: str) -> None:
    if value is None:
        raise FieldMissingError(field, "is required")


def validate_valued_string(value: str | None, field: str) -> None:
    """Reject ``None``, empty and whitespace-only strings."""
    validate_object_not_null(value, field)
    if not isinstance(value, str):
        raise FieldBadFormatError(field, f"must be a string, got {type(value).__name__}")
    if not value.strip():
        raise FieldMissingError(field, "must not be empty")


def validate_non_empty(value: Sized | None, field: str) -> None:
    validate_object_not_null(value, field)
    if len(value) == 0:
        raise FieldMissingError(field, "must contain at least one entry")


def validate_date_not_default(value: datetime | None, field: str) -> None:
    validate_object_not_null(value, field)
    if value.replace(tzinfo=None) == ZERO_DATE:
        raise FieldBadFormatError(field, "must not be the default date")


def validate_zero_or_positive(value: float | int | None, field: str) -> None:
    validate_object_not_null(value, field)
    if not math.isfinite(value):
        raise FieldBadFormatError(field, f"must be a finite number, got {value}")
    if value < 0:
        raise FieldOutOfRangeError(field, f"must be zero or positive, got {value}")


def validate_email_address(value: str | None, field: str = "Email") -> None:
    validate_valued_string(value, field)
    try:
        validate_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError as exc:
        raise FieldBadFormatError(field, f"is not a valid email address ({exc})") from exc


def validate_ip(value: str | None, field: str = "Browser IP") -> None:
    """Accept any syntactically valid IPv4 or IPv6 address."""
    validate_valued_string(value, field)
    try:
        ipaddress.ip_address(value.strip())
    except ValueError as exc:
        raise FieldBadFormatError(field, f"is not a valid IP address: {value!r}") from exc


def validate_currency(value: str | None, field: str = "Currency") -> None:
    validate_valued_string(value, field)
    if value not in ISO_4217_CURRENCIES:
        raise FieldBadFormatError(field, f"is not a recognized ISO 4217 code: {value!r}")


def validate_digits(value: str | None, field: str, length: int | None = None) -> None:
    validate_valued_string(value, field)
    if not _DIGITS.match(value):
        raise FieldBadFormatError(field, "must contain digits only")
    if length is not None and len(value) != length:
        raise FieldBadFormatError(field, f"must be exactly {length} digits long")


def validate_country_code(value: str | None, field: str = "Country Code") -> None:
    validate_valued_string(value, field)
    if not _COUNTRY_CODE.match(value):
        raise FieldBadFormatError(field, f"must be a two-letter country code, got {value!r}")
