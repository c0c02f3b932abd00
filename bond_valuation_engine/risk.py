from __future__ import annotations

from dataclasses import replace
from typing import Tuple

import pandas as pd

from .bonds import Bond
from .errors import InvalidParameter

DEFAULT_BUMP_BP = 1.0


def shocked_bond(bond: Bond, shift_bp: float) -> Bond:
    """Same bond with discount_rate moved by shift_bp (1bp = 0.01 percentage points)."""
    new_rate = bond.discount_rate + shift_bp / 100.0
    if new_rate < 0.0:
        raise InvalidParameter(
            f"Shock of {shift_bp}bp takes discount_rate {bond.discount_rate}% below zero."
        )
    return replace(bond, discount_rate=new_rate)


def dv01(bond: Bond, bump_bp: float = DEFAULT_BUMP_BP) -> float:
    """PV change for an upward discount-rate bump (negative for a long bond)."""
    return shocked_bond(bond, bump_bp).present_value() - bond.present_value()


def _central_prices(bond: Bond, bump_bp: float) -> Tuple[float, float, float]:
    if bump_bp <= 0:
        raise InvalidParameter("bump_bp must be positive")
    base = bond.present_value()
    up = shocked_bond(bond, bump_bp).present_value()
    down = shocked_bond(bond, -bump_bp).present_value()
    return base, up, down


def modified_duration(bond: Bond, bump_bp: float = DEFAULT_BUMP_BP) -> float:
    base, up, down = _central_prices(bond, bump_bp)
    h = bump_bp / 10000.0
    return (down - up) / (2.0 * base * h)


def convexity(bond: Bond, bump_bp: float = DEFAULT_BUMP_BP) -> float:
    base, up, down = _central_prices(bond, bump_bp)
    h = bump_bp / 10000.0
    return (up + down - 2.0 * base) / (base * h**2)


def risk_summary(bond: Bond, bump_bp: float = DEFAULT_BUMP_BP) -> pd.Series:
    return pd.Series(
        {
            "present_value": bond.present_value(),
            "dv01": dv01(bond, bump_bp),
            "mod_duration": modified_duration(bond, bump_bp),
            "convexity": convexity(bond, bump_bp),
        }
    )
