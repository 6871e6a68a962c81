"""Tests for the EstimateEngine pricing pipeline."""

from __future__ import annotations

import pytest

from nirman.data.repository import PricingRepository
from nirman.engine import ENGINE_VERSION, EstimateEngine, round_currency
from nirman.exceptions import InvalidConfigurationError
from nirman.models.enums import (
    AreaUnit,
    ComponentKey,
    LandscapeArea,
    Phase,
    ProjectType,
    QualityLevel,
    WorkType,
)
from nirman.models.parameters import PricingParameters
from nirman.models.project import ProjectConfiguration


@pytest.fixture()
def repo() -> PricingRepository:
    return PricingRepository()


@pytest.fixture()
def engine(repo: PricingRepository) -> EstimateEngine:
    """EstimateEngine wired to the built-in pricing tables."""
    return EstimateEngine(repo)


# ---------------------------------------------------------------------------
# Helper builders
# ---------------------------------------------------------------------------

_ALL_STANDARD = {key.value: "standard" for key in ComponentKey}


def _bangalore_home(
    area: float = 1000.0,
    area_unit: AreaUnit = AreaUnit.SQFT,
    complexity: int = 5,
    location: str = "Bangalore",
    project_type: ProjectType = ProjectType.RESIDENTIAL,
    work_types: frozenset[WorkType] = frozenset({WorkType.CONSTRUCTION, WorkType.INTERIORS}),
    selections: dict[str, str] | None = None,
    **extra: object,
) -> ProjectConfiguration:
    return ProjectConfiguration(
        location=location,
        project_type=project_type,
        work_types=work_types,
        area=area,
        area_unit=area_unit,
        complexity=complexity,
        component_selections=_ALL_STANDARD if selections is None else selections,
        **extra,
    )


# ---------------------------------------------------------------------------
# Reference estimate
# ---------------------------------------------------------------------------


class TestReferenceEstimate:
    """1000 sqft standard residential project in Bangalore, hand-checked.

    area = 92.903 m2
    construction = 15,000 x 92.903 = 1,393,545
    core = (45 + 500 + 400 + 800 + 750) x 92.903 = 231,792.985
    finishes = 2,000 x 92.903 = 185,806
    interiors = 6,800 x 92.903 = 631,740.4
    subtotal x 1.20 = 2,931,461.262
    + 13% fees + 9% contingency = 3,576,382.74; + 12% GST = 4,005,548.67
    """

    def test_total_cost(self, engine: EstimateEngine) -> None:
        estimate = engine.estimate(_bangalore_home())
        assert estimate.total_cost == 4_005_549

    def test_area_in_sqm(self, engine: EstimateEngine) -> None:
        estimate = engine.estimate(_bangalore_home())
        assert estimate.area_in_sqm == pytest.approx(92.903)

    def test_category_breakdown(self, engine: EstimateEngine) -> None:
        categories = engine.estimate(_bangalore_home()).category_breakdown
        assert categories.construction == 1_393_545
        assert categories.core == 231_793
        assert categories.finishes == 185_806
        assert categories.interiors == 631_740
        assert categories.landscape == 0

    def test_adjustments(self, engine: EstimateEngine) -> None:
        adjustments = engine.estimate(_bangalore_home()).adjustments
        assert adjustments.location_multiplier == pytest.approx(1.20)
        assert adjustments.project_multiplier == pytest.approx(1.0)
        assert adjustments.adjusted_subtotal == 2_931_461
        assert adjustments.professional_fees == 381_090
        assert adjustments.contingency == 263_832
        assert adjustments.gst == 429_166

    def test_metadata(self, engine: EstimateEngine) -> None:
        metadata = engine.estimate(_bangalore_home()).metadata
        assert metadata.engine_version == ENGINE_VERSION
        assert metadata.pricing_data_version == "2025.1"
        assert metadata.currency == "INR"

    def test_echoes_configuration(self, engine: EstimateEngine) -> None:
        estimate = engine.estimate(_bangalore_home())
        assert estimate.location == "Bangalore"
        assert estimate.project_type == ProjectType.RESIDENTIAL
        assert estimate.work_types == [WorkType.CONSTRUCTION, WorkType.INTERIORS]
        assert estimate.component_selections["elevator"] == "standard"


# ---------------------------------------------------------------------------
# Construction bucket and civil quality
# ---------------------------------------------------------------------------


class TestConstructionCost:
    @pytest.mark.parametrize(
        ("level", "multiplier"),
        [("standard", 1.0), ("premium", 1.6), ("luxury", 2.8)],
    )
    def test_civil_quality_scales_construction(
        self, engine: EstimateEngine, level: str, multiplier: float
    ) -> None:
        config = _bangalore_home(selections={"civil_quality": level})
        estimate = engine.estimate(config)
        assert estimate.category_breakdown.construction == round_currency(
            15_000 * 92.903 * multiplier
        )

    def test_civil_none_zeroes_construction(self, engine: EstimateEngine) -> None:
        estimate = engine.estimate(_bangalore_home(selections={"civil_quality": "none"}))
        assert estimate.category_breakdown.construction == 0

    def test_commercial_base_rate(self, engine: EstimateEngine) -> None:
        estimate = engine.estimate(_bangalore_home(project_type=ProjectType.COMMERCIAL))
        assert estimate.category_breakdown.construction == round_currency(18_000 * 92.903)

    def test_civil_share_in_core(self, engine: EstimateEngine) -> None:
        """Civil quality adds 15% of its rate to core on top of the construction bucket."""
        standard = engine.estimate(_bangalore_home())
        luxury = engine.estimate(_bangalore_home(selections={**_ALL_STANDARD, "civil_quality": "luxury"}))
        delta = luxury.category_breakdown.core - standard.category_breakdown.core
        assert delta == pytest.approx((1400 - 300) * 0.15 * 92.903, abs=1)


# ---------------------------------------------------------------------------
# Work types
# ---------------------------------------------------------------------------


class TestWorkTypes:
    def test_interiors_only_has_no_construction(self, engine: EstimateEngine) -> None:
        config = _bangalore_home(work_types=frozenset({WorkType.INTERIORS}))
        estimate = engine.estimate(config)
        assert estimate.category_breakdown.construction == 0

    def test_interiors_only_skips_construction_components(self, engine: EstimateEngine) -> None:
        config = _bangalore_home(work_types=frozenset({WorkType.INTERIORS}))
        estimate = engine.estimate(config)
        # lighting 400 + ceiling 350 + surfaces 600; envelope and windows skipped
        assert estimate.category_breakdown.finishes == round_currency(1350 * 92.903)
        assert estimate.component_selections["civil_quality"] == "none"
        assert estimate.component_selections["windows"] == "none"

    def test_construction_only_has_no_interiors(self, engine: EstimateEngine) -> None:
        config = _bangalore_home(work_types=frozenset({WorkType.CONSTRUCTION}))
        estimate = engine.estimate(config)
        assert estimate.category_breakdown.interiors == 0
        assert estimate.component_selections["fixed_furniture"] == "none"

    def test_landscape_allowances(self, engine: EstimateEngine) -> None:
        config = _bangalore_home(
            work_types=frozenset({WorkType.LANDSCAPE}),
            landscape_areas=frozenset({LandscapeArea.FRONT_YARD, LandscapeArea.BACK_YARD}),
        )
        estimate = engine.estimate(config)
        assert estimate.category_breakdown.landscape == 350_000
        assert estimate.category_breakdown.construction == 0
        assert estimate.category_breakdown.interiors == 0
        assert estimate.total_cost > 0

    def test_landscape_ignored_without_landscape_work(self, engine: EstimateEngine) -> None:
        config = _bangalore_home(landscape_areas=frozenset({LandscapeArea.FRONT_YARD}))
        assert engine.estimate(config).category_breakdown.landscape == 0


# ---------------------------------------------------------------------------
# Multipliers
# ---------------------------------------------------------------------------


class TestMultipliers:
    def test_location_ratio(self, engine: EstimateEngine) -> None:
        mumbai = engine.estimate(_bangalore_home(location="Mumbai"))
        bangalore = engine.estimate(_bangalore_home())
        assert mumbai.total_cost / bangalore.total_cost == pytest.approx(1.30 / 1.20, rel=1e-5)

    def test_unknown_city_uses_default(self, engine: EstimateEngine) -> None:
        estimate = engine.estimate(_bangalore_home(location="Smalltown"))
        assert estimate.adjustments.location_multiplier == pytest.approx(0.95)

    def test_commercial_project_multiplier(self, engine: EstimateEngine) -> None:
        estimate = engine.estimate(_bangalore_home(project_type=ProjectType.COMMERCIAL))
        assert estimate.adjustments.project_multiplier == pytest.approx(1.15)

    def test_mixed_use_project_multiplier(self, engine: EstimateEngine) -> None:
        estimate = engine.estimate(_bangalore_home(project_type=ProjectType.MIXED_USE))
        assert estimate.adjustments.project_multiplier == pytest.approx(1.25)

    @pytest.mark.parametrize(("complexity", "expected"), [(1, 0.8), (5, 1.0), (7, 1.1), (10, 1.25)])
    def test_complexity_scaling(self, engine: EstimateEngine, complexity: int, expected: float) -> None:
        assert engine.project_multiplier(ProjectType.RESIDENTIAL, complexity) == pytest.approx(expected)

    def test_total_increases_with_complexity(self, engine: EstimateEngine) -> None:
        totals = [engine.estimate(_bangalore_home(complexity=c)).total_cost for c in range(1, 11)]
        assert totals == sorted(totals)
        assert len(set(totals)) == len(totals)

    def test_custom_parameters(self, repo: PricingRepository) -> None:
        untaxed = EstimateEngine(repo, PricingParameters(gst_rate=0.0))
        taxed = EstimateEngine(repo)
        config = _bangalore_home()
        ratio = taxed.estimate(config).total_cost / untaxed.estimate(config).total_cost
        assert ratio == pytest.approx(1.12, rel=1e-6)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestProperties:
    def test_none_contributes_zero(self, engine: EstimateEngine) -> None:
        base = engine.estimate(_bangalore_home())
        without_ceiling = engine.estimate(_bangalore_home(selections={**_ALL_STANDARD, "ceiling": "none"}))
        delta = base.category_breakdown.finishes - without_ceiling.category_breakdown.finishes
        assert delta == pytest.approx(350 * 92.903, abs=1)

    def test_all_none_interiors_only_costs_nothing(self, engine: EstimateEngine) -> None:
        config = _bangalore_home(
            work_types=frozenset({WorkType.INTERIORS}),
            selections={key.value: "none" for key in ComponentKey},
        )
        estimate = engine.estimate(config)
        assert estimate.total_cost == 0
        assert estimate.phase_breakdown.total == 0

    def test_sqft_and_sqm_agree(self, engine: EstimateEngine) -> None:
        in_sqft = engine.estimate(_bangalore_home(area=1000.0))
        in_sqm = engine.estimate(_bangalore_home(area=92.903, area_unit=AreaUnit.SQM))
        assert in_sqft.total_cost == in_sqm.total_cost

    def test_idempotent(self, engine: EstimateEngine) -> None:
        config = _bangalore_home(complexity=7, location="Pune")
        first = engine.estimate(config).model_dump(exclude={"generated_at"})
        second = engine.estimate(config).model_dump(exclude={"generated_at"})
        assert first == second

    @pytest.mark.parametrize(
        "config",
        [
            _bangalore_home(),
            _bangalore_home(location="Mumbai", project_type=ProjectType.MIXED_USE, complexity=9),
            _bangalore_home(work_types=frozenset({WorkType.INTERIORS}), area=450.0),
            _bangalore_home(selections={"civil_quality": "luxury", "ac": "premium"}, area=3200.0),
        ],
    )
    def test_total_reproducible_from_categories(
        self, engine: EstimateEngine, config: ProjectConfiguration
    ) -> None:
        estimate = engine.estimate(config)
        adjustments = estimate.adjustments
        rebuilt = (
            estimate.category_breakdown.total
            * adjustments.location_multiplier
            * adjustments.project_multiplier
            * (1 + 0.13 + 0.09)
            * 1.12
        )
        assert estimate.total_cost == pytest.approx(rebuilt, rel=1e-5)

    def test_money_is_non_negative(self, engine: EstimateEngine) -> None:
        estimate = engine.estimate(_bangalore_home(complexity=1, location="Smalltown"))
        assert all(value >= 0 for value in estimate.category_breakdown.model_dump().values())
        assert all(value >= 0 for value in estimate.phase_breakdown.model_dump().values())


# ---------------------------------------------------------------------------
# Phase breakdown
# ---------------------------------------------------------------------------


class TestPhaseBreakdown:
    @pytest.mark.parametrize(
        "work_types",
        [
            frozenset({WorkType.CONSTRUCTION, WorkType.INTERIORS}),
            frozenset({WorkType.CONSTRUCTION}),
            frozenset({WorkType.INTERIORS}),
            frozenset(WorkType),
        ],
    )
    def test_phases_sum_to_total(self, engine: EstimateEngine, work_types: frozenset[WorkType]) -> None:
        config = _bangalore_home(
            work_types=work_types,
            landscape_areas=frozenset({LandscapeArea.COURTYARD}),
        )
        estimate = engine.estimate(config)
        assert estimate.phase_breakdown.total == estimate.total_cost

    def test_planning_share(self, engine: EstimateEngine) -> None:
        estimate = engine.estimate(_bangalore_home())
        assert estimate.phase_breakdown.planning == round_currency(4_005_549 * 0.08)

    def test_interiors_only_skips_structural_phases(self, engine: EstimateEngine) -> None:
        config = _bangalore_home(work_types=frozenset({WorkType.INTERIORS}))
        phases = engine.estimate(config).phase_breakdown.as_dict()
        assert phases[Phase.SITE_WORK_FOUNDATION] == 0
        assert phases[Phase.SUPERSTRUCTURE] == 0
        assert phases[Phase.EXTERIOR_FINAL_TOUCHES] == 0
        assert phases[Phase.INTERIOR_FINISHES] > 0

    def test_residue_goes_to_largest_phase(self, engine: EstimateEngine) -> None:
        breakdown = engine.phase_breakdown(1_000_003, frozenset({WorkType.CONSTRUCTION}))
        assert breakdown.total == 1_000_003
        assert breakdown.superstructure == max(breakdown.as_dict().values())


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------


class TestPreconditions:
    def test_non_positive_area_rejected(self, engine: EstimateEngine) -> None:
        config = ProjectConfiguration.model_construct(
            location="Bangalore",
            project_type=ProjectType.RESIDENTIAL,
            area=0.0,
        )
        with pytest.raises(InvalidConfigurationError, match="area"):
            engine.estimate(config)

    def test_blank_location_rejected(self, engine: EstimateEngine) -> None:
        config = ProjectConfiguration.model_construct(
            location="  ",
            project_type=ProjectType.RESIDENTIAL,
            area=1000.0,
        )
        with pytest.raises(InvalidConfigurationError, match="location"):
            engine.estimate(config)

    def test_unknown_quality_rejected(self, engine: EstimateEngine) -> None:
        config = ProjectConfiguration.model_construct(
            location="Bangalore",
            project_type=ProjectType.RESIDENTIAL,
            area=1000.0,
            component_selections={ComponentKey.AC: "gold"},
        )
        with pytest.raises(InvalidConfigurationError, match="selection"):
            engine.estimate(config)

    def test_valid_selection_passes(self, engine: EstimateEngine) -> None:
        config = ProjectConfiguration.model_construct(
            location="Bangalore",
            project_type=ProjectType.RESIDENTIAL,
            area=1000.0,
            component_selections={ComponentKey.AC: QualityLevel.LUXURY},
        )
        assert engine.estimate(config).total_cost > 0
