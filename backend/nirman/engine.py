"""Core estimation engine for the Nirman estimator.

The EstimateEngine prices a project configuration with an area-rate method:

1. **Area** — Convert the entered area to square metres (and apply the
   plinth/plot interpretation).
2. **Construction** — Base rate for the project type x area x civil quality
   multiplier. Zero without construction work or with civil quality ``none``.
3. **Components** — Per-m2 rate of every applicable component at its
   selected quality level, folded into the core, finishes and interiors
   buckets. Civil quality's own rate enters core at a 15% share; its full
   cost already sits in the construction bucket.
4. **Landscape** — Fixed allowance per landscaped section.
5. **Multipliers** — Location multiplier, then project type x complexity
   multiplier, both on the summed subtotal.
6. **Add-ons** — Professional fees and contingency on the adjusted subtotal
   (independently), then GST on the pre-tax total.
7. **Phases & timeline** — Re-partition the total by construction sequence
   and estimate durations.

The engine is a pure function of its input: no caching, no I/O.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from nirman.data.phases import PHASE_COST_WEIGHTS, PHASE_WORK_TYPES
from nirman.data.pricing import (
    CIVIL_CORE_SHARE,
    COMPLEXITY_STEP,
    NEUTRAL_COMPLEXITY,
    PRICING_DATA_VERSION,
)
from nirman.exceptions import InvalidConfigurationError
from nirman.models.enums import (
    ComponentKey,
    CostCategory,
    Phase,
    ProjectType,
    QualityLevel,
    WorkType,
)
from nirman.models.estimate import (
    CategoryBreakdown,
    CostAdjustments,
    EstimateMetadata,
    PhaseBreakdown,
    ProjectEstimate,
)
from nirman.models.parameters import PricingParameters
from nirman.timeline import compute_timeline

if TYPE_CHECKING:
    from collections.abc import Iterable

    from nirman.data.repository import PricingRepository
    from nirman.models.project import ProjectConfiguration

logger = logging.getLogger(__name__)

ENGINE_VERSION = "0.1.0"


def round_currency(amount: float) -> int:
    """Round half-up to whole rupees."""
    return math.floor(amount + 0.5)


class EstimateEngine:
    """Converts a ProjectConfiguration into a ProjectEstimate.

    Args:
        repository: The pricing repository providing component rates,
            base construction rates and location multipliers.
        parameters: Fee, contingency and tax rates. Defaults to the
            standard 13% / 9% / 12%.

    Example::

        from nirman.data.repository import PricingRepository

        engine = EstimateEngine(PricingRepository())
        estimate = engine.estimate(config)
    """

    def __init__(
        self,
        repository: PricingRepository,
        parameters: PricingParameters | None = None,
    ) -> None:
        self._repository = repository
        self._parameters = parameters or PricingParameters()

    @property
    def repository(self) -> PricingRepository:
        return self._repository

    @property
    def parameters(self) -> PricingParameters:
        return self._parameters

    def estimate(self, config: ProjectConfiguration) -> ProjectEstimate:
        """Produce an itemised estimate for a project configuration.

        Returns:
            A ProjectEstimate with the grand total, category and phase
            breakdowns, the adjustment trail and a timeline.

        Raises:
            InvalidConfigurationError: If the configuration violates a
                precondition (non-positive area, blank location, unknown
                component or quality level).
        """
        self._check_preconditions(config)
        params = self._parameters
        area_in_sqm = config.area_in_sqm

        # 1-4. Base costs per bucket
        buckets = self.component_costs(config, area_in_sqm)
        buckets[CostCategory.CONSTRUCTION] = self.construction_cost(config, area_in_sqm)
        buckets[CostCategory.LANDSCAPE] = self.landscape_cost(config)
        subtotal = sum(buckets.values())

        # 5. Multipliers on the subtotal
        location_multiplier = self._repository.get_location_multiplier(config.location)
        project_multiplier = self.project_multiplier(config.project_type, config.complexity)
        adjusted_subtotal = subtotal * location_multiplier * project_multiplier

        # 6. Fees and contingency on the same base, then tax
        professional_fees = adjusted_subtotal * params.professional_fee_rate
        contingency = adjusted_subtotal * params.contingency_rate
        pre_tax_total = adjusted_subtotal + professional_fees + contingency
        gst = pre_tax_total * params.gst_rate
        total_cost = round_currency(pre_tax_total + gst)

        # 7. Phase re-partition and timeline
        phase_breakdown = self.phase_breakdown(total_cost, config.work_types)
        timeline = compute_timeline(
            config.project_type,
            config.work_types,
            area_in_sqm,
            config.complexity,
        )

        logger.info(
            "Estimated %s project in %s (%.1f m2): total %d INR",
            config.project_type.value,
            config.location,
            area_in_sqm,
            total_cost,
        )

        return ProjectEstimate(
            project_type=config.project_type,
            location=config.location,
            work_types=sorted(config.work_types),
            area=config.area,
            area_unit=config.area_unit.value,
            area_in_sqm=round(area_in_sqm, 3),
            complexity=config.complexity,
            component_selections={
                key.value: level.value
                for key, level in self.effective_selections(config).items()
            },
            total_cost=total_cost,
            category_breakdown=CategoryBreakdown(
                **{category.value: round_currency(cost) for category, cost in buckets.items()}
            ),
            adjustments=CostAdjustments(
                subtotal=round_currency(subtotal),
                location_multiplier=location_multiplier,
                project_multiplier=round(project_multiplier, 6),
                adjusted_subtotal=round_currency(adjusted_subtotal),
                professional_fees=round_currency(professional_fees),
                contingency=round_currency(contingency),
                pre_tax_total=round_currency(pre_tax_total),
                gst=round_currency(gst),
            ),
            phase_breakdown=phase_breakdown,
            timeline=timeline,
            metadata=EstimateMetadata(
                engine_version=ENGINE_VERSION,
                pricing_data_version=PRICING_DATA_VERSION,
            ),
        )

    # ------------------------------------------------------------------
    # Pricing steps
    # ------------------------------------------------------------------

    def is_applicable(self, key: ComponentKey, work_types: Iterable[WorkType]) -> bool:
        """Whether a component is priced for the selected work types."""
        return bool(self._repository.get_component_work_types(key) & frozenset(work_types))

    def effective_selections(self, config: ProjectConfiguration) -> dict[ComponentKey, QualityLevel]:
        """Selections as priced: components out of scope count as ``none``."""
        return {
            key: (config.selection(key) if self.is_applicable(key, config.work_types) else QualityLevel.NONE)
            for key in ComponentKey
        }

    def construction_cost(self, config: ProjectConfiguration, area_in_sqm: float) -> float:
        """Shell construction cost; zero for projects without construction work."""
        if not config.has_work(WorkType.CONSTRUCTION):
            return 0.0
        base_rate = self._repository.get_base_construction_rate(config.project_type)
        civil_multiplier = self._repository.get_civil_quality_multiplier(
            config.selection(ComponentKey.CIVIL_QUALITY)
        )
        return base_rate * area_in_sqm * civil_multiplier

    def component_costs(
        self, config: ProjectConfiguration, area_in_sqm: float
    ) -> dict[CostCategory, float]:
        """Sum per-component costs into the core, finishes and interiors buckets."""
        buckets = {
            CostCategory.CORE: 0.0,
            CostCategory.FINISHES: 0.0,
            CostCategory.INTERIORS: 0.0,
        }
        for key, level in self.effective_selections(config).items():
            rate = self._repository.get_component_rate(key, level)
            if key == ComponentKey.CIVIL_QUALITY:
                rate *= CIVIL_CORE_SHARE
            buckets[self._repository.get_component_category(key)] += rate * area_in_sqm
        return buckets

    def landscape_cost(self, config: ProjectConfiguration) -> float:
        if not config.has_work(WorkType.LANDSCAPE):
            return 0.0
        return sum(
            self._repository.get_landscape_allowance(area) for area in config.landscape_areas
        )

    def project_multiplier(self, project_type: ProjectType, complexity: int) -> float:
        """Project-type multiplier scaled linearly around the neutral complexity."""
        base = self._repository.get_project_type_multiplier(project_type)
        return base * (1 + (complexity - NEUTRAL_COMPLEXITY) * COMPLEXITY_STEP)

    def phase_breakdown(self, total_cost: int, work_types: Iterable[WorkType]) -> PhaseBreakdown:
        """Re-partition the grand total by construction sequence.

        Planning takes a fixed share; the remainder is split across the
        phases in scope by their weights. Rounding residue lands on the
        largest phase so the phases always add up to ``total_cost``.
        """
        selected = frozenset(work_types)
        planning = total_cost * self._parameters.planning_phase_share
        active = {
            phase: weight
            for phase, weight in PHASE_COST_WEIGHTS.items()
            if PHASE_WORK_TYPES[phase] & selected
        }
        weight_sum = sum(active.values())
        remaining = total_cost - planning

        raw: dict[Phase, float] = {Phase.PLANNING: planning}
        for phase, weight in active.items():
            raw[phase] = remaining * weight / weight_sum

        rounded = {phase: round_currency(value) for phase, value in raw.items()}
        residue = total_cost - sum(rounded.values())
        if residue:
            largest = max(rounded, key=lambda phase: rounded[phase])
            rounded[largest] += residue
        return PhaseBreakdown(**{phase.value: value for phase, value in rounded.items()})

    # ------------------------------------------------------------------
    # Preconditions
    # ------------------------------------------------------------------

    @staticmethod
    def _check_preconditions(config: ProjectConfiguration) -> None:
        """Reject configurations the engine has no defined behaviour for.

        Validated models already satisfy these; the checks guard against
        snapshots built without validation (``model_construct``).
        """
        if not config.location or not config.location.strip():
            msg = "location must be set before estimating"
            raise InvalidConfigurationError(msg)
        if not isinstance(config.project_type, ProjectType):
            msg = f"project_type must be one of {[t.value for t in ProjectType]}"
            raise InvalidConfigurationError(msg)
        if config.area <= 0:
            msg = f"area must be positive, got {config.area}"
            raise InvalidConfigurationError(msg)
        if not config.work_types:
            msg = "at least one work type must be selected"
            raise InvalidConfigurationError(msg)
        for key, level in config.component_selections.items():
            if not isinstance(key, ComponentKey) or not isinstance(level, QualityLevel):
                msg = f"invalid component selection {key!r}: {level!r}"
                raise InvalidConfigurationError(msg)
