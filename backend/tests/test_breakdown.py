"""Tests for detailed breakdowns derived from an estimate."""

from __future__ import annotations

import pytest

from nirman.breakdown import (
    PHASE_TITLES,
    allocate,
    benchmark_tier,
    cost_per_unit,
    detailed_cost_breakdown,
    phase_line_items,
)
from nirman.data.repository import PricingRepository
from nirman.engine import EstimateEngine
from nirman.models.enums import AreaUnit, BenchmarkTier, ComponentKey, Phase
from nirman.models.estimate import ProjectEstimate
from nirman.models.project import ProjectConfiguration


@pytest.fixture()
def engine() -> EstimateEngine:
    return EstimateEngine(PricingRepository())


@pytest.fixture()
def estimate(engine: EstimateEngine) -> ProjectEstimate:
    """The 1000 sqft all-standard Bangalore reference home."""
    config = ProjectConfiguration(
        location="Bangalore",
        project_type="residential",
        area=1000,
        component_selections={key.value: "standard" for key in ComponentKey},
    )
    return engine.estimate(config)


class TestAllocate:
    def test_items_sum_to_total(self) -> None:
        items = allocate(1001, (("a", 1 / 3), ("b", 1 / 3), ("c", 1 / 3)))
        assert sum(item.cost for item in items) == 1001

    def test_residue_on_largest_item(self) -> None:
        items = allocate(10, (("small", 0.25), ("large", 0.75)))
        assert [item.cost for item in items] == [3, 7]

    def test_zero_total(self) -> None:
        assert all(item.cost == 0 for item in allocate(0, (("a", 0.5), ("b", 0.5))))


# ---------------------------------------------------------------------------
# Category sub-items
# ---------------------------------------------------------------------------


class TestDetailedCostBreakdown:
    def test_groups_sum_to_categories(self, estimate: ProjectEstimate) -> None:
        detail = detailed_cost_breakdown(estimate)
        categories = estimate.category_breakdown
        assert sum(item.cost for item in detail.core) == categories.core
        assert sum(item.cost for item in detail.finishes) == categories.finishes
        assert sum(item.cost for item in detail.interiors) == categories.interiors
        assert sum(stage.cost for stage in detail.construction_stages) == categories.construction

    def test_core_includes_elevator(self, estimate: ProjectEstimate) -> None:
        detail = detailed_cost_breakdown(estimate)
        assert len(detail.core) == 5
        assert detail.core[-1].name == "Elevator"

    def test_core_without_elevator(self, engine: EstimateEngine) -> None:
        config = ProjectConfiguration(location="Bangalore", project_type="residential", area=1000)
        detail = detailed_cost_breakdown(engine.estimate(config))
        assert [item.name for item in detail.core] == [
            "Civil Materials",
            "Plumbing",
            "Electrical",
            "Air Conditioning",
        ]
        assert [item.share for item in detail.core] == [0.22, 0.28, 0.28, 0.22]

    def test_construction_stage_months(self, estimate: ProjectEstimate) -> None:
        stages = {stage.name: stage for stage in detailed_cost_breakdown(estimate).construction_stages}
        # site 1 + superstructure 2 + MEP 1.5 = 4.5 months of construction
        assert stages["RCC Structure"].months == 2.0
        assert stages["Foundation"].months == 0.5


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------


class TestPhaseLineItems:
    def test_all_phases_for_full_build(self, estimate: ProjectEstimate) -> None:
        details = phase_line_items(estimate)
        assert [detail.phase for detail in details] == list(Phase)
        assert details[0].title == PHASE_TITLES[Phase.PLANNING]

    def test_items_sum_to_phase_cost(self, estimate: ProjectEstimate) -> None:
        for detail in phase_line_items(estimate):
            assert sum(item.cost for item in detail.items) == detail.total_cost

    def test_sequential_schedule(self, estimate: ProjectEstimate) -> None:
        details = phase_line_items(estimate)
        assert details[0].start_month == 0.0
        for previous, current in zip(details, details[1:]):
            assert current.start_month == previous.end_month
        assert details[-1].end_month == pytest.approx(estimate.timeline.phase_sum)

    def test_skips_phases_without_cost(self, engine: EstimateEngine) -> None:
        config = ProjectConfiguration(
            location="Bangalore",
            project_type="residential",
            area=1000,
            work_types=["interiors"],
        )
        phases = [detail.phase for detail in phase_line_items(engine.estimate(config))]
        assert phases == [Phase.PLANNING, Phase.MEP_ROUGH_INS, Phase.INTERIOR_FINISHES]


# ---------------------------------------------------------------------------
# Per-unit costs and benchmark
# ---------------------------------------------------------------------------


class TestCostPerUnit:
    def test_per_sqft(self, estimate: ProjectEstimate) -> None:
        per_sqft = cost_per_unit(estimate)
        assert per_sqft.unit == AreaUnit.SQFT
        assert per_sqft.total == 4006
        assert per_sqft.construction == 1394

    def test_per_sqm(self, estimate: ProjectEstimate) -> None:
        per_sqm = cost_per_unit(estimate, AreaUnit.SQM)
        assert per_sqm.construction == 15_000
        assert per_sqm.finishes == 2_000


class TestBenchmark:
    def test_reference_home_is_luxury(self, estimate: ProjectEstimate) -> None:
        benchmark = benchmark_tier(estimate)
        assert benchmark.tier == BenchmarkTier.LUXURY
        assert benchmark.cost_per_sqft == 4006

    def test_cheap_project_is_standard(self, engine: EstimateEngine) -> None:
        config = ProjectConfiguration(
            location="Smalltown",
            project_type="residential",
            area=2000,
            work_types=["interiors"],
            complexity=1,
            component_selections={
                "loose_furniture": "none",
                "furnishings": "none",
                "appliances": "none",
            },
        )
        benchmark = benchmark_tier(engine.estimate(config))
        assert benchmark.tier == BenchmarkTier.STANDARD
        assert benchmark.cost_per_sqft < 1850
