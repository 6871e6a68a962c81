"""Tunable percentage add-ons applied on top of the priced subtotal."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PricingParameters(BaseModel):
    """Fee, contingency and tax rates used by the engine.

    ``gst_rate`` is a flat effective rate standing in for India's tiered
    construction GST; override it per engine when a project needs the
    statutory treatment.
    """

    model_config = ConfigDict(frozen=True)

    professional_fee_rate: float = Field(default=0.13, ge=0, le=1)
    contingency_rate: float = Field(default=0.09, ge=0, le=1)
    gst_rate: float = Field(default=0.12, ge=0, le=1)
    planning_phase_share: float = Field(default=0.08, ge=0, lt=1)
