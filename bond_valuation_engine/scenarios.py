from __future__ import annotations

from typing import Iterable, Tuple

import pandas as pd

from .bonds import Bond
from .risk import shocked_bond

DEFAULT_RATE_SHOCKS_BP = (-50, -25, 25, 50)


def scenario_name(shock_bp: float) -> str:
    return f"PAR_{shock_bp:+g}bp"


def run_rate_scenarios(
    bond: Bond,
    shocks_bp: Iterable[float] = DEFAULT_RATE_SHOCKS_BP,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Reprice the bond under parallel discount-rate shocks.

    Returns (per_scenario, summary): per_scenario has a BASE row followed by one
    row per shock; summary lists the PnL of each shocked scenario.
    """
    base_pv = bond.present_value()
    rows = [
        {
            "scenario": "BASE",
            "shock_bp": 0.0,
            "discount_rate": bond.discount_rate,
            "present_value": base_pv,
            "pnl": 0.0,
        }
    ]

    for shock in shocks_bp:
        shocked = shocked_bond(bond, shock)
        pv = shocked.present_value()
        rows.append(
            {
                "scenario": scenario_name(shock),
                "shock_bp": float(shock),
                "discount_rate": shocked.discount_rate,
                "present_value": pv,
                "pnl": pv - base_pv,
            }
        )

    per_scenario = pd.DataFrame(rows)
    summary = per_scenario.loc[per_scenario["scenario"] != "BASE", ["scenario", "pnl"]].reset_index(drop=True)
    return per_scenario, summary
