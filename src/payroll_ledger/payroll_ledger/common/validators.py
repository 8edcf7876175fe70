from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.constants import MAX_PAYMENT_AMOUNT, MAX_TEXT_LENGTH
from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")
_CENT = Decimal("0.01")
_MAX_AMOUNT = Decimal(MAX_PAYMENT_AMOUNT)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    """Trim a free-text field; blank becomes None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def optional_email(value: Optional[str]) -> Optional[str]:
    email = optional_text(value)
    if email is None:
        return None
    if not _EMAIL_RE.match(email):
        raise ValidationError("Email is not valid")
    require_max_length(email, "Email", MAX_TEXT_LENGTH)
    return email.lower()


def require_email(value: Optional[str]) -> str:
    email = optional_email(value)
    if email is None:
        raise ValidationError("Email is required")
    return email


def require_month(value: Optional[str], field_name: str = "Month earned") -> str:
    """Validate a YYYY-MM month string."""
    month = require_non_empty(value, field_name)
    m = _MONTH_RE.match(month)
    if not m or not 1 <= int(m.group(2)) <= 12:
        raise ValidationError(f"{field_name} must be in YYYY-MM format")
    return month


def require_max_length(value: Optional[str], field_name: str, max_len: int) -> Optional[str]:
    if value is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_text(value: Optional[str], field_name: str, max_len: int) -> str:
    """Required, trimmed and no wider than its column."""
    return require_max_length(require_non_empty(value, field_name), field_name, max_len)


def require_amount(value: Any, field_name: str = "Amount") -> Decimal:
    """Parse a positive money amount, rounded to cents."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} is not a number")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} is not a number")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} is not a number")
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    if amount > _MAX_AMOUNT:
        raise ValidationError(f"{field_name} must be at most {_MAX_AMOUNT}")

    # 0.001 rounds to 0.00
    amount = amount.quantize(_CENT, rounding=ROUND_HALF_UP)
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return amount


def require_choice(value: Any, enum_cls: Type[E], field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(str(e.value) for e in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def require_positive_id(value: Any, field_name: str) -> int:
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not valid")
    if ident <= 0:
        raise ValidationError(f"{field_name} is not valid")
    return ident
