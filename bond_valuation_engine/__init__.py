"""
Bond Valuation Engine

Modules:
- bonds: Bond interface, CouponBond / ZeroCouponBond, create_bond
  (coupon PV, present value, yield to maturity, holding-period return)
- cashflows: per-period cash-flow / discount-factor table
- risk: DV01, modified duration, convexity by bump-and-reprice
- scenarios: discount-rate shock runner
- utils: compounding frequencies, effective annual rate, input checks
- errors: InvalidParameter, MissingInput

Rates and yields are in percent throughout (5.0 means 5%).
"""
