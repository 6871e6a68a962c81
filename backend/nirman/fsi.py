"""Floor Space Index (FSI) checks for plot-based projects.

All areas are in whatever unit the caller uses consistently; FSI is a
ratio, so no conversion happens here.
"""

from __future__ import annotations

import logging
import math

from pydantic import BaseModel

from nirman.data.fsi_rules import DEFAULT_FSI_RULE, FSI_RULES, PLOT_COVERAGE_RATIO, FsiRule
from nirman.exceptions import InvalidConfigurationError

logger = logging.getLogger(__name__)


class FsiCompliance(BaseModel):
    """Result of checking a proposed built-up area against a city's FSI."""

    city: str
    is_compliant: bool
    max_allowed: float
    fsi_used: float
    fsi_max: float
    message: str


class FloorSuggestion(BaseModel):
    max_floors: int
    floor_area: float
    recommendation: str


def _require_positive(name: str, value: float) -> None:
    if value <= 0:
        msg = f"{name} must be positive, got {value}"
        raise InvalidConfigurationError(msg)


def get_fsi_rule(city: str) -> FsiRule:
    """FSI rule for a city; unlisted cities get the default rule."""
    rule = FSI_RULES.get(city.strip())
    if rule is None:
        logger.debug("No FSI rule for '%s'; using default", city)
        return DEFAULT_FSI_RULE
    return rule


def max_built_up_area(plot_area: float, city: str) -> float:
    _require_positive("plot_area", plot_area)
    return plot_area * get_fsi_rule(city).max_fsi


def typical_built_up_area(plot_area: float, city: str) -> float:
    _require_positive("plot_area", plot_area)
    return plot_area * get_fsi_rule(city).typical


def validate_fsi_compliance(plot_area: float, proposed_built_up_area: float, city: str) -> FsiCompliance:
    """Check a proposed built-up area against the city's maximum FSI.

    Compliance is ``built_up / plot <= max_fsi``; hitting the limit
    exactly is compliant.
    """
    _require_positive("plot_area", plot_area)
    if proposed_built_up_area < 0:
        msg = f"proposed_built_up_area must not be negative, got {proposed_built_up_area}"
        raise InvalidConfigurationError(msg)

    rule = get_fsi_rule(city)
    fsi_used = proposed_built_up_area / plot_area
    max_allowed = plot_area * rule.max_fsi
    is_compliant = fsi_used <= rule.max_fsi

    if is_compliant:
        message = f"FSI compliant. Using {fsi_used:.2f} out of {rule.max_fsi:g} maximum FSI."
    else:
        message = (
            f"The proposed built-up area exceeds the maximum FSI of {rule.max_fsi:g} "
            f"for {city}. Maximum allowed built-up area is {round(max_allowed)}."
        )

    return FsiCompliance(
        city=city,
        is_compliant=is_compliant,
        max_allowed=max_allowed,
        fsi_used=fsi_used,
        fsi_max=rule.max_fsi,
        message=message,
    )


def built_up_area_per_floor(total_built_up_area: float, floor_count: int) -> float:
    if floor_count < 1:
        msg = f"floor_count must be at least 1, got {floor_count}"
        raise InvalidConfigurationError(msg)
    return total_built_up_area / floor_count


def suggest_max_floors(plot_area: float, city: str, floor_area: float | None = None) -> FloorSuggestion:
    """How many floors fit under the city's maximum FSI.

    Without an explicit ``floor_area`` each floor is assumed to cover the
    plot minus setbacks (70% of the plot).
    """
    _require_positive("plot_area", plot_area)
    rule = get_fsi_rule(city)
    area_per_floor = floor_area or plot_area * PLOT_COVERAGE_RATIO
    _require_positive("floor_area", area_per_floor)
    max_floors = math.floor(plot_area * rule.max_fsi / area_per_floor)
    return FloorSuggestion(
        max_floors=max_floors,
        floor_area=area_per_floor,
        recommendation=(
            f"Based on FSI of {rule.max_fsi:g} for {city}, you can build up to "
            f"{max_floors} floors with typical floor area of {round(area_per_floor)} sq.units."
        ),
    )
