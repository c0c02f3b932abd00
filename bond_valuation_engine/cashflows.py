from __future__ import annotations

import numpy as np
import pandas as pd

from .bonds import Bond


def cashflow_table(bond: Bond) -> pd.DataFrame:
    """
    Per-period cash flows of a bond with their discount factors and PVs.

    Coupons are discounted at the periodic nominal rate, the face value at the
    effective annual rate over the full maturity, matching present_value():
      pv.sum() == bond.present_value()
    """
    n = bond.periods_per_year
    periods = np.arange(1, bond.n_periods + 1)

    coupon = np.full(len(periods), bond.periodic_coupon, dtype=float)
    principal = np.zeros(len(periods), dtype=float)
    principal[-1] = bond.face_value

    coupon_df = 1.0 / (1.0 + bond.periodic_discount_rate) ** periods.astype(float)
    principal_df = np.zeros(len(periods), dtype=float)
    principal_df[-1] = 1.0 / (1.0 + bond.effective_annual_rate) ** bond.maturity

    return pd.DataFrame(
        {
            "period": periods,
            "time_years": periods / n,
            "coupon": coupon,
            "principal": principal,
            "cashflow": coupon + principal,
            "coupon_df": coupon_df,
            "principal_df": principal_df,
            "pv": coupon * coupon_df + principal * principal_df,
        }
    )
