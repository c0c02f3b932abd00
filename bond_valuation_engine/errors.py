from __future__ import annotations


class BondValuationError(ValueError):
    """Base class for errors raised by the valuation engine."""


class InvalidParameter(BondValuationError):
    """A bond term violates a structural invariant (raised at construction)."""


class MissingInput(BondValuationError):
    """An operation needs a market price that was not supplied."""
