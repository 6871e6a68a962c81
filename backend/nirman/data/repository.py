"""Pricing repository for looking up rates and multipliers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nirman.data.location_index import DEFAULT_LOCATION_MULTIPLIER, LOCATION_MULTIPLIERS
from nirman.data.pricing import (
    BASE_CONSTRUCTION_COST,
    CIVIL_QUALITY_MULTIPLIERS,
    COMPONENT_CATEGORIES,
    COMPONENT_PRICING,
    COMPONENT_WORK_TYPES,
    LANDSCAPE_ALLOWANCES,
    PROJECT_TYPE_MULTIPLIERS,
)
from nirman.exceptions import PricingDataError
from nirman.models.enums import ComponentKey, QualityLevel

if TYPE_CHECKING:
    from collections.abc import Mapping

    from nirman.models.enums import CostCategory, LandscapeArea, ProjectType, WorkType

logger = logging.getLogger(__name__)


class PricingRepository:
    """Repository for looking up pricing data.

    Wraps the static lookup tables. Tables can be swapped per instance
    (e.g. a regional price list), but every closed key must be present:
    a missing component or quality level raises ``PricingDataError``
    rather than pricing the component at zero.
    """

    def __init__(
        self,
        component_pricing: Mapping[ComponentKey, Mapping[QualityLevel, float]] | None = None,
        location_multipliers: Mapping[str, float] | None = None,
        default_location_multiplier: float = DEFAULT_LOCATION_MULTIPLIER,
        base_construction_cost: Mapping[ProjectType, float] | None = None,
    ) -> None:
        self._component_pricing = (
            COMPONENT_PRICING if component_pricing is None else component_pricing
        )
        self._location_multipliers = dict(
            LOCATION_MULTIPLIERS if location_multipliers is None else location_multipliers
        )
        self._default_location_multiplier = default_location_multiplier
        self._base_construction_cost = (
            BASE_CONSTRUCTION_COST if base_construction_cost is None else base_construction_cost
        )
        self._check_component_table()

    def _check_component_table(self) -> None:
        for key in ComponentKey:
            rates = self._component_pricing.get(key)
            if rates is None:
                msg = f"No pricing found for component '{key}'"
                raise PricingDataError(msg)
            for level in QualityLevel:
                if level not in rates:
                    msg = f"No '{level}' rate found for component '{key}'"
                    raise PricingDataError(msg)
            if rates[QualityLevel.NONE] != 0:
                msg = f"Component '{key}' must cost 0 at quality 'none'"
                raise PricingDataError(msg)

    def get_component_rate(self, key: ComponentKey, level: QualityLevel) -> float:
        """Rate in INR/m2 for a component at a quality level."""
        try:
            return float(self._component_pricing[key][level])
        except KeyError:
            msg = f"No '{level}' rate found for component '{key}'"
            raise PricingDataError(msg) from None

    def get_component_category(self, key: ComponentKey) -> CostCategory:
        return COMPONENT_CATEGORIES[key]

    def get_component_work_types(self, key: ComponentKey) -> frozenset[WorkType]:
        return COMPONENT_WORK_TYPES[key]

    def get_base_construction_rate(self, project_type: ProjectType) -> float:
        rate = self._base_construction_cost.get(project_type)
        if rate is None:
            msg = f"No base construction rate found for project type '{project_type}'"
            raise PricingDataError(msg)
        return float(rate)

    def get_civil_quality_multiplier(self, level: QualityLevel) -> float:
        return CIVIL_QUALITY_MULTIPLIERS[level]

    def get_project_type_multiplier(self, project_type: ProjectType) -> float:
        return PROJECT_TYPE_MULTIPLIERS[project_type]

    def get_location_multiplier(self, city: str) -> float:
        """Cost multiplier for a city.

        Lookup is an exact match on the city name (surrounding whitespace
        ignored). Unlisted cities use the default multiplier.
        """
        multiplier = self._location_multipliers.get(city.strip())
        if multiplier is not None:
            return multiplier
        logger.warning(
            "No location multiplier for '%s'; using default %.2f",
            city,
            self._default_location_multiplier,
        )
        return self._default_location_multiplier

    def is_listed_location(self, city: str) -> bool:
        return city.strip() in self._location_multipliers

    def get_landscape_allowance(self, area: LandscapeArea) -> float:
        return LANDSCAPE_ALLOWANCES[area]
