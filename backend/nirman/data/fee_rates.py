"""Default rate card for the architect fee calculator (INR)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from nirman.models.enums import (
    ClientInvolvement,
    ClientType,
    Currency,
    DesignComplexity,
    FeeModel,
    FeeTypology,
    VisualizationPackage,
)


class TypologyRate(BaseModel):
    """Raw fee model for one typology with its minimum fee."""

    model_config = ConfigDict(frozen=True)

    model: FeeModel
    rate: float = Field(gt=0)
    minimum: float = Field(ge=0)


class FeeRates(BaseModel):
    """A complete, swappable fee rate card."""

    model_config = ConfigDict(frozen=True)

    typologies: dict[FeeTypology, TypologyRate]
    client_multipliers: dict[ClientType, float]
    complexity_multipliers: dict[DesignComplexity, float]
    involvement_multipliers: dict[ClientInvolvement, float]
    visualization_prices: dict[VisualizationPackage, float]
    conversion_rates: dict[Currency, float]
    rush_multiplier: float = 1.25
    ffe_cost_share: float = 0.15
    overhead_allocation: float = 80_000 / 3
    profit_margin: float = 0.15
    tax_rate: float = 0.18
    minimum_studio_fee: float = 50_000


DEFAULT_FEE_RATES = FeeRates(
    typologies={
        FeeTypology.INDIVIDUAL_HOUSE: TypologyRate(model=FeeModel.PERCENT, rate=0.08, minimum=20_000),
        FeeTypology.RESIDENTIAL_BLOCK: TypologyRate(model=FeeModel.PERCENT, rate=0.05, minimum=50_000),
        FeeTypology.COMMERCIAL: TypologyRate(model=FeeModel.PERCENT, rate=0.04, minimum=80_000),
        FeeTypology.FFE_PROCUREMENT: TypologyRate(model=FeeModel.PERCENT, rate=0.10, minimum=30_000),
        FeeTypology.LANDSCAPE_DETAILED: TypologyRate(model=FeeModel.SQM, rate=150, minimum=25_000),
    },
    client_multipliers={
        ClientType.FRIEND_FAMILY: 0.85,
        ClientType.INDIVIDUAL: 1.0,
        ClientType.CORPORATE: 1.15,
        ClientType.DEVELOPER: 1.10,
    },
    complexity_multipliers={
        DesignComplexity.SIMPLE: 0.9,
        DesignComplexity.STANDARD: 1.0,
        DesignComplexity.PREMIUM: 1.2,
        DesignComplexity.LUXURY: 1.5,
    },
    # Midpoints of the quoted involvement surcharges (e.g. Low is +5-10%).
    involvement_multipliers={
        ClientInvolvement.MINIMAL: 1.035,
        ClientInvolvement.LOW: 1.075,
        ClientInvolvement.MODERATE: 1.125,
        ClientInvolvement.HIGH: 1.175,
        ClientInvolvement.FLEXIBLE: 1.10,
    },
    visualization_prices={
        VisualizationPackage.NONE: 0,
        VisualizationPackage.STANDARD: 25_000,
        VisualizationPackage.PREMIUM: 50_000,
        VisualizationPackage.LUXURY: 100_000,
    },
    conversion_rates={
        Currency.INR: 1,
        Currency.USD: 83,
        Currency.EUR: 90,
    },
)
