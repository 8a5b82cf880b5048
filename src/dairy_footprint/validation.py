from __future__ import annotations

import math
from typing import Iterable

from .exceptions import ValidationError


def check_non_negative(name: str, value: float | None) -> float | None:
    """Return ``value`` as float, rejecting negatives and non-numbers."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number >= 0 (got {value!r})") from None
    if math.isnan(number) or number < 0:
        raise ValidationError(f"{name} must be >= 0 (got {value!r})")
    if math.isinf(number):
        raise ValidationError(f"{name} must be finite (got {value!r})")
    return number


def check_quantity(name: str, value: float | None) -> float:
    """Like :func:`check_non_negative`, but the value is required."""
    if value is None:
        raise ValidationError(f"{name} is required")
    return check_non_negative(name, value)


def check_number(name: str, value: float | None) -> float | None:
    """Return ``value`` as a finite float of any sign."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number (got {value!r})") from None
    if not math.isfinite(number):
        raise ValidationError(f"{name} must be finite (got {value!r})")
    return number


def check_positive(name: str, value: float | None) -> float | None:
    number = check_non_negative(name, value)
    if number is not None and number == 0:
        raise ValidationError(f"{name} must be > 0 (got {value!r})")
    return number


def check_fraction(name: str, value: float | None, *, allow_zero: bool = True) -> float | None:
    number = check_non_negative(name, value)
    if number is None:
        return None
    if number > 1 or (not allow_zero and number == 0):
        bound = "[0, 1]" if allow_zero else "(0, 1]"
        raise ValidationError(f"{name} must be within {bound} (got {value!r})")
    return number


def check_choice(name: str, value: str, allowed: Iterable[str]) -> str:
    options = tuple(allowed)
    if value not in options:
        raise ValidationError(f"{name} must be one of: {', '.join(options)} (got {value!r})")
    return value


def check_tier(tier: int) -> int:
    if tier not in (1, 2) or isinstance(tier, bool):
        raise ValidationError(f"tier must be 1 or 2 (got {tier!r})")
    return int(tier)


def check_result_total(source: str, value: float) -> float:
    """Reject NaN, infinite or negative totals coming out of a calculator."""
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"{source} emissions are not a finite non-negative number ({value!r})")
    return value
