"""Pricing data layer for the Nirman estimator."""

from nirman.data.fsi_rules import FsiRule
from nirman.data.repository import PricingRepository

__all__ = [
    "FsiRule",
    "PricingRepository",
]
