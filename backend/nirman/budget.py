"""Budget matching: suggest component selections that fit a target budget.

The minimum viable budget is the price of a bare-essentials selection set.
The ratio ``budget / minimum`` picks one of five selection packages, and
the suggestion is priced through the same engine as any other estimate.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel

from nirman.exceptions import InvalidConfigurationError
from nirman.models.enums import BudgetStatus, BudgetTier, ComponentKey, QualityLevel
from nirman.models.estimate import ProjectEstimate  # noqa: TCH001 (pydantic resolves at runtime)
from nirman.selections import applicable_components

if TYPE_CHECKING:
    from collections.abc import Mapping

    from nirman.engine import EstimateEngine
    from nirman.models.project import ProjectConfiguration

logger = logging.getLogger(__name__)

_N, _S, _P, _L = (
    QualityLevel.NONE,
    QualityLevel.STANDARD,
    QualityLevel.PREMIUM,
    QualityLevel.LUXURY,
)

_MINIMAL: dict[ComponentKey, QualityLevel] = {
    ComponentKey.CIVIL_QUALITY: _S,
    ComponentKey.PLUMBING: _S,
    ComponentKey.ELECTRICAL: _S,
    ComponentKey.AC: _N,
    ComponentKey.ELEVATOR: _N,
    ComponentKey.BUILDING_ENVELOPE: _S,
    ComponentKey.LIGHTING: _S,
    ComponentKey.WINDOWS: _S,
    ComponentKey.CEILING: _S,
    ComponentKey.SURFACES: _S,
    ComponentKey.FIXED_FURNITURE: _S,
    ComponentKey.LOOSE_FURNITURE: _N,
    ComponentKey.FURNISHINGS: _N,
    ComponentKey.APPLIANCES: _N,
    ComponentKey.ARTEFACTS: _N,
}

# Upgrades over the minimal set, per tier.
_TIER_UPGRADES: dict[BudgetTier, dict[ComponentKey, QualityLevel]] = {
    BudgetTier.MINIMAL: {},
    BudgetTier.MODERATE: {ComponentKey.AC: _S},
    BudgetTier.GOOD: {
        ComponentKey.AC: _S,
        ComponentKey.PLUMBING: _P,
        ComponentKey.ELECTRICAL: _P,
        ComponentKey.LIGHTING: _P,
        ComponentKey.SURFACES: _P,
    },
    BudgetTier.PREMIUM: {
        ComponentKey.CIVIL_QUALITY: _P,
        ComponentKey.PLUMBING: _P,
        ComponentKey.ELECTRICAL: _P,
        ComponentKey.AC: _P,
        ComponentKey.ELEVATOR: _S,
        ComponentKey.BUILDING_ENVELOPE: _P,
        ComponentKey.LIGHTING: _P,
        ComponentKey.WINDOWS: _P,
        ComponentKey.CEILING: _P,
        ComponentKey.SURFACES: _P,
        ComponentKey.FIXED_FURNITURE: _P,
        ComponentKey.LOOSE_FURNITURE: _S,
        ComponentKey.FURNISHINGS: _S,
        ComponentKey.APPLIANCES: _S,
    },
    BudgetTier.LUXURY: {
        ComponentKey.CIVIL_QUALITY: _L,
        ComponentKey.PLUMBING: _L,
        ComponentKey.ELECTRICAL: _L,
        ComponentKey.AC: _L,
        ComponentKey.ELEVATOR: _P,
        ComponentKey.BUILDING_ENVELOPE: _L,
        ComponentKey.LIGHTING: _L,
        ComponentKey.WINDOWS: _L,
        ComponentKey.CEILING: _L,
        ComponentKey.SURFACES: _L,
        ComponentKey.FIXED_FURNITURE: _L,
        ComponentKey.LOOSE_FURNITURE: _L,
        ComponentKey.FURNISHINGS: _P,
        ComponentKey.APPLIANCES: _P,
        ComponentKey.ARTEFACTS: _S,
    },
}

# Lowest budget/minimum ratio for each tier, highest first.
_TIER_THRESHOLDS: tuple[tuple[float, BudgetTier], ...] = (
    (2.5, BudgetTier.LUXURY),
    (1.8, BudgetTier.PREMIUM),
    (1.3, BudgetTier.GOOD),
    (1.1, BudgetTier.MODERATE),
)

# Upper (exclusive) ratio bound for each status, lowest first.
_STATUS_THRESHOLDS: tuple[tuple[float, BudgetStatus], ...] = (
    (0.9, BudgetStatus.LOW),
    (1.3, BudgetStatus.MODERATE),
    (1.8, BudgetStatus.GOOD),
)

_STATUS_MESSAGES: Mapping[BudgetStatus, str] = {
    BudgetStatus.LOW: (
        "Your budget is below the minimum we'd recommend for a project of this size. "
        "Consider phasing the project or reducing its scope."
    ),
    BudgetStatus.MODERATE: (
        "Your budget covers the essentials with room for a few upgrades where they matter most."
    ),
    BudgetStatus.GOOD: (
        "Your budget allows a well-rounded project with quality materials and some premium elements."
    ),
    BudgetStatus.EXCELLENT: (
        "Your budget allows premium materials and luxury finishes throughout."
    ),
}


class BudgetMatch(BaseModel):
    """A budget analysed against the minimum viable budget."""

    budget: float
    minimum_budget: int
    ratio: float
    status: BudgetStatus
    tier: BudgetTier
    message: str
    suggested_selections: dict[str, str]
    suggested_estimate: ProjectEstimate
    within_budget: bool


def _tier_selections(config: ProjectConfiguration, tier: BudgetTier) -> dict[ComponentKey, QualityLevel]:
    applicable = set(applicable_components(config.work_types))
    selections = {**_MINIMAL, **_TIER_UPGRADES[tier]}
    return {
        key: (level if key in applicable else QualityLevel.NONE)
        for key, level in selections.items()
    }


def minimum_budget(engine: EstimateEngine, config: ProjectConfiguration) -> int:
    """Total cost of the project with the bare-essentials selection set."""
    minimal = config.with_changes(component_selections=_tier_selections(config, BudgetTier.MINIMAL))
    return engine.estimate(minimal).total_cost


def budget_tier(ratio: float) -> BudgetTier:
    for threshold, tier in _TIER_THRESHOLDS:
        if ratio >= threshold:
            return tier
    return BudgetTier.MINIMAL


def budget_status(ratio: float) -> BudgetStatus:
    for upper, status in _STATUS_THRESHOLDS:
        if ratio < upper:
            return status
    return BudgetStatus.EXCELLENT


def _check_budget(budget: float) -> None:
    if budget <= 0:
        msg = f"budget must be positive, got {budget}"
        raise InvalidConfigurationError(msg)


def suggest_components(
    engine: EstimateEngine,
    config: ProjectConfiguration,
    budget: float,
) -> dict[ComponentKey, QualityLevel]:
    """Selections for the tier the budget affords, limited to the work types."""
    _check_budget(budget)
    minimum = minimum_budget(engine, config)
    ratio = budget / minimum if minimum else float("inf")
    return _tier_selections(config, budget_tier(ratio))


def match_budget(engine: EstimateEngine, config: ProjectConfiguration, budget: float) -> BudgetMatch:
    """Analyse a budget and price the suggested selections.

    Raises:
        InvalidConfigurationError: If ``budget`` is not positive.
    """
    _check_budget(budget)
    minimum = minimum_budget(engine, config)
    ratio = budget / minimum if minimum else float("inf")
    tier = budget_tier(ratio)
    status = budget_status(ratio)

    selections = _tier_selections(config, tier)
    suggested = engine.estimate(config.with_changes(component_selections=selections))

    logger.info(
        "Budget %.0f vs minimum %d (ratio %.2f): status=%s tier=%s",
        budget,
        minimum,
        ratio,
        status.value,
        tier.value,
    )

    return BudgetMatch(
        budget=budget,
        minimum_budget=minimum,
        ratio=round(ratio, 4),
        status=status,
        tier=tier,
        message=_STATUS_MESSAGES[status],
        suggested_selections={key.value: level.value for key, level in selections.items()},
        suggested_estimate=suggested,
        within_budget=suggested.total_cost <= budget,
    )
