# sentinela/utils.py
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional
from urllib.parse import urlparse

CENTS = Decimal("0.01")
# Numeric(10, 2) and a signed 32-bit Integer column
MAX_MONEY = Decimal("99999999.99")
MAX_INT = 2 ** 31 - 1

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_RE = re.compile(r"^(?!0000)\d{4}-(0[1-9]|1[0-2])$")
_INT_RE = re.compile(r"-?\d+", re.ASCII)
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


# ------------------------------
# Input parsing
# Each helper returns (value, error); error is None when the value is valid.
# ------------------------------
def pick(data: dict, *keys: str, default: Any = None) -> Any:
    """First present key wins, so clients may send snake_case or camelCase."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def parse_iso_date(value: Any):
    if isinstance(value, date):
        return value, None
    if not isinstance(value, str) or not _DATE_RE.match(value):
        return None, "date must be in YYYY-MM-DD format"
    try:
        return datetime.strptime(value, "%Y-%m-%d").date(), None
    except ValueError:
        return None, "date is not a valid calendar date"


def utc_today() -> date:
    return datetime.utcnow().date()


def is_month_key(value: Any) -> bool:
    return isinstance(value, str) and bool(_MONTH_RE.match(value))


def parse_non_negative_int(value: Any, field: str):
    # bool is an int subclass; "true" is not a ride count
    if isinstance(value, bool):
        return None, f"{field} must be an integer"
    if isinstance(value, int):
        n = value
    elif isinstance(value, str) and _INT_RE.fullmatch(value.strip()):
        n = int(value.strip())
    else:
        return None, f"{field} must be an integer"
    if n < 0:
        return None, f"{field} must be non-negative"
    if n > MAX_INT:
        return None, f"{field} is too large"
    return n, None


def parse_money(value: Any, field: str):
    if value is None or isinstance(value, bool):
        return None, f"{field} is required"
    if isinstance(value, str) and not value.strip():
        return None, f"{field} is required"
    try:
        # go through str() so floats like 0.1 keep their printed value
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None, f"{field} must be a decimal number"
    if not amount.is_finite():
        return None, f"{field} must be a decimal number"
    if amount < 0:
        return None, f"{field} must be non-negative"
    if amount > MAX_MONEY:
        return None, f"{field} is too large"
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP), None


def is_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value or ""))


def is_http_url(value: str) -> bool:
    parsed = urlparse(value or "")
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


# ------------------------------
# Output formatting
# ------------------------------
def money_str(value: Optional[Decimal]) -> str:
    return str(Decimal(value or 0).quantize(CENTS, rounding=ROUND_HALF_UP))
