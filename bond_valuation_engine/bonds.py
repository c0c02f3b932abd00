from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Optional

import numpy as np
from scipy.optimize import brentq
from scipy.special import logsumexp

from .errors import BondValuationError, InvalidParameter, MissingInput
from .utils import (
    CompoundingFrequency,
    FrequencyLike,
    check_maturity,
    check_non_negative,
    check_optional_price,
    check_positive,
    effective_annual_rate,
    to_frequency,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class Bond(ABC):
    """
    Immutable bond description plus the valuation operations every variant
    provides: coupon_payment, present_value, yield_to_maturity and
    holding_period_return.

    Rates are nominal annual percentages (5.0 = 5%). The effective annual
    discount rate is derived once at construction and cached on the instance.
    """
    discount_rate: float
    maturity: int
    face_value: float
    compounding_frequency: CompoundingFrequency
    buying_price: Optional[float] = None
    current_selling_price: Optional[float] = None

    effective_annual_rate: float = field(init=False, compare=False)

    def __post_init__(self) -> None:
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "discount_rate", check_non_negative("discount_rate", self.discount_rate))
        object.__setattr__(self, "maturity", check_maturity(self.maturity))
        object.__setattr__(self, "face_value", check_positive("face_value", self.face_value))
        object.__setattr__(self, "compounding_frequency", to_frequency(self.compounding_frequency))
        object.__setattr__(self, "buying_price", check_optional_price("buying_price", self.buying_price))
        object.__setattr__(
            self,
            "current_selling_price",
            check_optional_price("current_selling_price", self.current_selling_price),
        )

        ear = effective_annual_rate(self.discount_rate, self.compounding_frequency)
        object.__setattr__(self, "effective_annual_rate", ear)

        LOGGER.debug(
            "Created %s: coupon=%s%% discount=%s%% maturity=%dy freq=%s ear=%.10f",
            type(self).__name__,
            self.coupon_rate,
            self.discount_rate,
            self.maturity,
            self.compounding_frequency.name,
            ear,
        )

    # ---- schedule shape ----

    @property
    def periods_per_year(self) -> int:
        return int(self.compounding_frequency)

    @property
    def n_periods(self) -> int:
        return self.periods_per_year * self.maturity

    @property
    def periodic_coupon(self) -> float:
        """Coupon cash flow paid each period."""
        return self.face_value * self.coupon_rate / 100.0 / self.periods_per_year

    @property
    def periodic_discount_rate(self) -> float:
        return self.discount_rate / 100.0 / self.periods_per_year

    def discounted_face_value(self) -> float:
        """Face value discounted at the effective annual rate over the whole maturity."""
        # very long maturities overflow the growth factor; the PV tends to 0.0
        with np.errstate(over="ignore"):
            return float(self.face_value / np.power(1.0 + self.effective_annual_rate, self.maturity))

    def _require(self, *names: str) -> None:
        missing = [n for n in names if getattr(self, n) is None]
        if missing:
            raise MissingInput(f"{type(self).__name__}: missing required input(s): {', '.join(missing)}")

    # ---- valuation ----

    @abstractmethod
    def coupon_payment(self) -> float:
        """Present value of the coupon stream alone."""

    @abstractmethod
    def present_value(self) -> float:
        """Fair price: coupon stream plus discounted face value."""

    def yield_to_maturity(self) -> float:
        """
        Closed-form yield proxy in percent:
            100 * ((face / current_selling_price) ** (1 / maturity) - 1)

        Coupons are ignored. See yield_to_maturity_iterative for the solved yield.
        """
        self._require("current_selling_price")
        return 100.0 * ((self.face_value / self.current_selling_price) ** (1.0 / self.maturity) - 1.0)

    def holding_period_return(self) -> float:
        """
        Flat (non-annualised) total return in percent, coupons included at
        their present value:
            100 * ((current_selling_price + coupon_payment()) / buying_price - 1)
        """
        self._require("buying_price", "current_selling_price")
        return 100.0 * ((self.current_selling_price + self.coupon_payment()) / self.buying_price - 1.0)

    def yield_to_maturity_iterative(self, lower: float = -0.99, upper: float = 10.0) -> float:
        """
        Nominal annual yield in percent, compounded periods_per_year times,
        that prices every coupon and the face value back to current_selling_price.
        Brent root-find on [lower, upper] (decimal rates).

        The pricing error is taken in log space, log(PV(y)) - log(price), so
        long schedules stay finite across the whole bracket.
        """
        self._require("current_selling_price")
        n = self.periods_per_year
        if 1.0 + lower / n <= 0.0:
            raise InvalidParameter(f"lower={lower} implies a non-positive periodic growth factor.")

        t = np.arange(1, self.n_periods + 1, dtype=float)
        cashflows = np.full(self.n_periods, self.periodic_coupon, dtype=float)
        cashflows[-1] += self.face_value
        price = self.current_selling_price
        log_price = np.log(price)

        def pricing_error(y: float) -> float:
            log_growth = np.log1p(y / n)
            return float(logsumexp(-t * log_growth, b=cashflows) - log_price)

        f_lo, f_hi = pricing_error(lower), pricing_error(upper)
        if f_lo * f_hi > 0:
            raise BondValuationError(
                f"No yield in [{lower}, {upper}] reproduces price {price} (log errors {f_lo:.6g}, {f_hi:.6g})."
            )

        y, res = brentq(pricing_error, lower, upper, xtol=1e-14, full_output=True)
        LOGGER.debug("Iterative yield converged in %d iterations: %.12f", res.iterations, y)
        return 100.0 * y


@dataclass(frozen=True, kw_only=True)
class CouponBond(Bond):
    coupon_rate: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "coupon_rate", check_non_negative("coupon_rate", self.coupon_rate))
        super().__post_init__()

    def coupon_payment(self) -> float:
        # ordinary annuity at the periodic nominal rate
        t = np.arange(1, self.n_periods + 1, dtype=float)
        with np.errstate(over="ignore"):
            return float(np.sum(self.periodic_coupon / np.power(1.0 + self.periodic_discount_rate, t)))

    def present_value(self) -> float:
        return self.coupon_payment() + self.discounted_face_value()


@dataclass(frozen=True, kw_only=True)
class ZeroCouponBond(Bond):
    coupon_rate: ClassVar[float] = 0.0

    def coupon_payment(self) -> float:
        return 0.0

    def present_value(self) -> float:
        return self.discounted_face_value()


def create_bond(
    coupon_rate: float,
    discount_rate: float,
    maturity: int,
    face_value: float,
    compounding_frequency: FrequencyLike,
    buying_price: Optional[float] = None,
    current_selling_price: Optional[float] = None,
) -> Bond:
    """
    Build and validate a bond. A zero coupon rate yields a ZeroCouponBond,
    anything else a CouponBond. Raises InvalidParameter on bad terms.
    """
    coupon_rate = check_non_negative("coupon_rate", coupon_rate)
    common = dict(
        discount_rate=discount_rate,
        maturity=maturity,
        face_value=face_value,
        compounding_frequency=compounding_frequency,
        buying_price=buying_price,
        current_selling_price=current_selling_price,
    )
    if coupon_rate == 0.0:
        return ZeroCouponBond(**common)
    return CouponBond(coupon_rate=coupon_rate, **common)
