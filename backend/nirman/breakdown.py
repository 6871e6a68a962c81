"""Detailed views derived from a finished estimate.

Nothing here re-prices a project: category and phase totals from the
estimate are split into sub-items by fixed distribution ratios, so the
items of every group add up exactly to the group total.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from nirman.data.phases import CONSTRUCTION_PHASES
from nirman.engine import round_currency
from nirman.models.enums import AreaUnit, BenchmarkTier, ComponentKey, Phase, QualityLevel
from nirman.models.project import SQFT_TO_SQM
from nirman.timeline import round_half_month

if TYPE_CHECKING:
    from collections.abc import Sequence

    from nirman.models.estimate import ProjectEstimate

_CORE_SHARES = (
    ("Civil Materials", 0.20),
    ("Plumbing", 0.25),
    ("Electrical", 0.25),
    ("Air Conditioning", 0.20),
    ("Elevator", 0.10),
)
_CORE_SHARES_NO_ELEVATOR = (
    ("Civil Materials", 0.22),
    ("Plumbing", 0.28),
    ("Electrical", 0.28),
    ("Air Conditioning", 0.22),
)
_FINISHES_SHARES = (
    ("Building Envelope", 0.20),
    ("Lighting", 0.15),
    ("Windows", 0.30),
    ("Ceiling", 0.10),
    ("Surfaces", 0.25),
)
_INTERIORS_SHARES = (
    ("Fixed Furniture", 0.40),
    ("Loose Furniture", 0.30),
    ("Furnishings", 0.10),
    ("Appliances", 0.15),
    ("Artefacts", 0.05),
)
_CONSTRUCTION_STAGE_SHARES = (
    ("Foundation", 0.15),
    ("RCC Structure", 0.45),
    ("Masonry", 0.25),
    ("Roofing", 0.10),
    ("Finishing", 0.05),
)

PHASE_TITLES: dict[Phase, str] = {
    Phase.PLANNING: "Planning & Design",
    Phase.SITE_WORK_FOUNDATION: "Site Work & Foundation",
    Phase.SUPERSTRUCTURE: "Superstructure",
    Phase.MEP_ROUGH_INS: "MEP Rough-ins & Plastering",
    Phase.INTERIOR_FINISHES: "Interior Finishes",
    Phase.EXTERIOR_FINAL_TOUCHES: "Exterior & Final Touches",
}

_PHASE_ITEM_SHARES: dict[Phase, tuple[tuple[str, float], ...]] = {
    Phase.PLANNING: (
        ("Architectural Design", 0.40),
        ("Structural Design", 0.25),
        ("MEP Design", 0.20),
        ("Approvals & Permits", 0.15),
    ),
    Phase.SITE_WORK_FOUNDATION: (
        ("Excavation & Earthwork", 0.25),
        ("Foundation (PCC & RCC)", 0.55),
        ("Termite Treatment & Waterproofing", 0.20),
    ),
    Phase.SUPERSTRUCTURE: (
        ("RCC Columns, Beams, Slabs", 0.50),
        ("Brickwork / Blockwork", 0.35),
        ("Lintels & Chajjas", 0.15),
    ),
    Phase.MEP_ROUGH_INS: (
        ("Electrical Conduiting & Wiring", 0.30),
        ("Plumbing & Sanitary Pipes", 0.35),
        ("HVAC Ducting", 0.15),
        ("Internal Plastering", 0.20),
    ),
    Phase.INTERIOR_FINISHES: (
        ("Flooring (Tiles/Marble/Wood)", 0.30),
        ("Doors & Windows Installation", 0.25),
        ("False Ceiling & POP", 0.15),
        ("Kitchen & Bathroom Fixtures", 0.20),
        ("Built-in Furniture", 0.10),
    ),
    Phase.EXTERIOR_FINAL_TOUCHES: (
        ("Exterior Plastering & Painting", 0.35),
        ("Internal Painting & Polishing", 0.30),
        ("Staircase & Railings", 0.15),
        ("Landscaping & Compound Wall", 0.12),
        ("Final Site Cleanup", 0.08),
    ),
}

# Lowest INR per sqft for each tier, highest first.
_BENCHMARK_THRESHOLDS = (
    (2000, BenchmarkTier.LUXURY),
    (1850, BenchmarkTier.PREMIUM),
)

_BENCHMARK_MESSAGES = {
    BenchmarkTier.STANDARD: "Cost-effective construction with good quality materials",
    BenchmarkTier.PREMIUM: "Above-average quality with branded materials and better finishes",
    BenchmarkTier.LUXURY: "High-end construction with premium imported materials and finishes",
}


class BreakdownItem(BaseModel):
    name: str
    cost: int
    share: float


class ConstructionStage(BaseModel):
    name: str
    cost: int
    share: float
    months: float


class DetailedCostBreakdown(BaseModel):
    """Category totals split into their sub-items (INR, pre-multiplier)."""

    core: list[BreakdownItem]
    finishes: list[BreakdownItem]
    interiors: list[BreakdownItem]
    construction_stages: list[ConstructionStage]


class PhaseDetail(BaseModel):
    """One phase of the schedule with its itemised cost.

    ``start_month`` is the elapsed time before the phase begins; phases run
    back to back in construction sequence.
    """

    phase: Phase
    title: str
    items: list[BreakdownItem]
    total_cost: int
    months: float
    start_month: float
    end_month: float


class CostPerUnit(BaseModel):
    unit: AreaUnit
    construction: int
    core: int
    finishes: int
    interiors: int
    landscape: int
    total: int


class Benchmark(BaseModel):
    tier: BenchmarkTier
    cost_per_sqft: int
    message: str


def allocate(total: int, shares: Sequence[tuple[str, float]]) -> list[BreakdownItem]:
    """Split ``total`` by ``shares``; rounding residue goes to the largest item."""
    costs = [round_currency(total * share) for _, share in shares]
    residue = total - sum(costs)
    if residue and costs:
        largest = max(range(len(costs)), key=costs.__getitem__)
        costs[largest] += residue
    return [
        BreakdownItem(name=name, cost=cost, share=share)
        for (name, share), cost in zip(shares, costs)
    ]


def detailed_cost_breakdown(estimate: ProjectEstimate) -> DetailedCostBreakdown:
    categories = estimate.category_breakdown
    elevator = estimate.component_selections.get(ComponentKey.ELEVATOR.value, QualityLevel.NONE.value)
    core_shares = _CORE_SHARES if elevator != QualityLevel.NONE.value else _CORE_SHARES_NO_ELEVATOR

    construction_months = sum(estimate.timeline.phases.as_dict()[phase] for phase in CONSTRUCTION_PHASES)
    stages = [
        ConstructionStage(
            name=item.name,
            cost=item.cost,
            share=item.share,
            months=round_half_month(construction_months * item.share),
        )
        for item in allocate(categories.construction, _CONSTRUCTION_STAGE_SHARES)
    ]

    return DetailedCostBreakdown(
        core=allocate(categories.core, core_shares),
        finishes=allocate(categories.finishes, _FINISHES_SHARES),
        interiors=allocate(categories.interiors, _INTERIORS_SHARES),
        construction_stages=stages,
    )


def phase_line_items(estimate: ProjectEstimate) -> list[PhaseDetail]:
    """Itemised cost and schedule window for every phase that has a cost."""
    costs = estimate.phase_breakdown.as_dict()
    months = estimate.timeline.phases.as_dict()

    details: list[PhaseDetail] = []
    elapsed = 0.0
    for phase in Phase:
        if costs[phase] <= 0:
            continue
        details.append(
            PhaseDetail(
                phase=phase,
                title=PHASE_TITLES[phase],
                items=allocate(costs[phase], _PHASE_ITEM_SHARES[phase]),
                total_cost=costs[phase],
                months=months[phase],
                start_month=elapsed,
                end_month=elapsed + months[phase],
            )
        )
        elapsed += months[phase]
    return details


def _built_up_area(estimate: ProjectEstimate, unit: AreaUnit) -> float:
    if unit == AreaUnit.SQM:
        return estimate.area_in_sqm
    return estimate.area_in_sqm / SQFT_TO_SQM


def cost_per_unit(estimate: ProjectEstimate, unit: AreaUnit = AreaUnit.SQFT) -> CostPerUnit:
    """Cost per square foot (or metre) of priced built-up area."""
    area = _built_up_area(estimate, unit)
    categories = estimate.category_breakdown
    return CostPerUnit(
        unit=unit,
        construction=round_currency(categories.construction / area),
        core=round_currency(categories.core / area),
        finishes=round_currency(categories.finishes / area),
        interiors=round_currency(categories.interiors / area),
        landscape=round_currency(categories.landscape / area),
        total=round_currency(estimate.total_cost / area),
    )


def benchmark_tier(estimate: ProjectEstimate) -> Benchmark:
    per_sqft = cost_per_unit(estimate, AreaUnit.SQFT).total
    tier = BenchmarkTier.STANDARD
    for threshold, candidate in _BENCHMARK_THRESHOLDS:
        if per_sqft >= threshold:
            tier = candidate
            break
    return Benchmark(tier=tier, cost_per_sqft=per_sqft, message=_BENCHMARK_MESSAGES[tier])
