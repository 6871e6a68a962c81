"""Architect fee calculator.

The design fee is a typology's raw fee (a share of construction cost, or
a per-m2 rate) scaled by client, complexity, involvement and rush
multipliers, floored at the typology and studio minimums. Optional FF&E
and landscape services, a visualisation package and a fixed overhead
allocation are added before profit and tax.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from nirman.data.fee_rates import DEFAULT_FEE_RATES, FeeRates
from nirman.engine import round_currency
from nirman.models.enums import (
    ClientInvolvement,
    ClientType,
    Currency,
    DesignComplexity,
    FeeModel,
    FeeTypology,
    VisualizationPackage,
)

logger = logging.getLogger(__name__)


class ArchitectFeeRequest(BaseModel):
    """Inputs to the fee calculator. Money in INR, area in m2."""

    typology: FeeTypology = FeeTypology.INDIVIDUAL_HOUSE
    construction_cost: float = Field(ge=0)
    area: float = Field(default=0.0, ge=0)
    client_type: ClientType = ClientType.INDIVIDUAL
    complexity: DesignComplexity = DesignComplexity.STANDARD
    include_ffe: bool = False
    include_landscape: bool = False
    visualization: VisualizationPackage = VisualizationPackage.STANDARD
    is_rush: bool = False
    currency: Currency = Currency.INR
    client_involvement: ClientInvolvement = ClientInvolvement.MODERATE


class ArchitectFee(BaseModel):
    """Fee build-up. Components are INR; ``total_fee`` is in ``currency``."""

    base_fee: float
    ffe_fee: float
    landscape_fee: float
    visualization_fee: float
    overhead_allocation: float
    involvement_adjustment: int
    involvement_multiplier: float
    profit: int
    tax: int
    total_fee_inr: float
    total_fee: float
    currency: Currency


def calculate_architect_fee(
    request: ArchitectFeeRequest,
    rates: FeeRates = DEFAULT_FEE_RATES,
) -> ArchitectFee:
    """Compute the full fee for a design engagement."""
    typology = rates.typologies[request.typology]
    client_mult = rates.client_multipliers[request.client_type]
    complexity_mult = rates.complexity_multipliers[request.complexity]
    involvement_mult = rates.involvement_multipliers[request.client_involvement]
    rush_mult = rates.rush_multiplier if request.is_rush else 1.0

    if typology.model == FeeModel.PERCENT:
        raw_fee = request.construction_cost * typology.rate
    else:
        raw_fee = request.area * typology.rate

    fee_before_involvement = raw_fee * client_mult * complexity_mult * rush_mult
    base_fee = max(
        typology.minimum,
        rates.minimum_studio_fee,
        fee_before_involvement * involvement_mult,
    )

    ffe_fee = 0.0
    if request.include_ffe:
        ffe = rates.typologies[FeeTypology.FFE_PROCUREMENT]
        ffe_fee = max(ffe.minimum, request.construction_cost * rates.ffe_cost_share * ffe.rate)

    landscape_fee = 0.0
    if request.include_landscape:
        landscape = rates.typologies[FeeTypology.LANDSCAPE_DETAILED]
        landscape_fee = max(landscape.minimum, request.area * landscape.rate)

    visualization_fee = rates.visualization_prices[request.visualization]
    subtotal = base_fee + ffe_fee + landscape_fee + visualization_fee + rates.overhead_allocation
    profit = round_currency(subtotal * rates.profit_margin)
    tax = round_currency((subtotal + profit) * rates.tax_rate)
    total_inr = subtotal + profit + tax

    fx = rates.conversion_rates[request.currency]
    involvement_adjustment = fee_before_involvement * (involvement_mult - 1)

    logger.debug(
        "Architect fee for %s: base %.0f, total %.0f INR",
        request.typology.value,
        base_fee,
        total_inr,
    )

    return ArchitectFee(
        base_fee=base_fee,
        ffe_fee=ffe_fee,
        landscape_fee=landscape_fee,
        visualization_fee=visualization_fee,
        overhead_allocation=rates.overhead_allocation,
        involvement_adjustment=round_currency(involvement_adjustment / fx),
        involvement_multiplier=involvement_mult,
        profit=profit,
        tax=tax,
        total_fee_inr=total_inr,
        total_fee=round(total_inr / fx, 2),
        currency=request.currency,
    )
