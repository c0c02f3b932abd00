from __future__ import annotations

import math
import numbers
from enum import IntEnum
from typing import Optional, Union

from .errors import InvalidParameter


class CompoundingFrequency(IntEnum):
    """Compounding/coupon periods per year."""
    ANNUAL = 1
    SEMIANNUAL = 2
    QUARTERLY = 4
    MONTHLY = 12


FrequencyLike = Union[CompoundingFrequency, int, str]


def to_frequency(value: FrequencyLike) -> CompoundingFrequency:
    """
    Coerce an enum member, its integer value or its name ("semiannual",
    "SEMIANNUAL") into a CompoundingFrequency.
    """
    if isinstance(value, CompoundingFrequency):
        return value

    if isinstance(value, str):
        key = value.strip().upper().replace("-", "").replace("_", "")
        try:
            return CompoundingFrequency[key]
        except KeyError:
            raise InvalidParameter(f"Unsupported compounding frequency: {value!r}") from None

    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameter(f"Unsupported compounding frequency: {value!r}")

    try:
        return CompoundingFrequency(value)
    except ValueError:
        raise InvalidParameter(
            f"Unsupported compounding frequency: {value!r} (supported: 1, 2, 4, 12)"
        ) from None


def periods_per_year(freq: FrequencyLike) -> int:
    return int(to_frequency(freq))


def effective_annual_rate(rate_pct: float, freq: FrequencyLike) -> float:
    """
    Annually compounded rate (decimal) equivalent to a nominal annual rate
    quoted in percent and compounded `freq` times a year.

    Annual compounding returns rate/100 unchanged.
    """
    n = periods_per_year(freq)
    if n == 1:
        return rate_pct / 100.0
    try:
        return (1.0 + rate_pct / 100.0 / n) ** n - 1.0
    except OverflowError:
        raise InvalidParameter(
            f"Effective annual rate overflows for rate {rate_pct}% compounded {n} times a year"
        ) from None


# ---- validation helpers ----

def check_positive(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameter(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidParameter(f"{name} must be finite and positive, got {value}")
    return value


def check_non_negative(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameter(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value) or value < 0.0:
        raise InvalidParameter(f"{name} must be finite and non-negative, got {value}")
    return value


def check_maturity(value: int) -> int:
    # whole years only
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameter(f"maturity must be a whole number of years, got {value!r}")
    if value <= 0:
        raise InvalidParameter(f"maturity must be positive, got {value}")
    return int(value)


def check_optional_price(name: str, value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return check_positive(name, value)
