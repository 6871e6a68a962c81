"""Estimate output models for the Nirman estimator."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from nirman.models.enums import Phase, ProjectType, WorkType


class CategoryBreakdown(BaseModel):
    """Cost by material/system bucket, before any multiplier (INR).

    The buckets are mutually exclusive; their sum is the base subtotal
    that the location and project multipliers are applied to.
    """

    construction: int = Field(default=0, ge=0)
    core: int = Field(default=0, ge=0)
    finishes: int = Field(default=0, ge=0)
    interiors: int = Field(default=0, ge=0)
    landscape: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.construction + self.core + self.finishes + self.interiors + self.landscape


class CostAdjustments(BaseModel):
    """How the base subtotal turns into the grand total.

    Kept on the estimate for transparency; every step is recorded so a
    reader can reproduce ``total_cost`` by hand.
    """

    subtotal: int = Field(ge=0)
    location_multiplier: float = Field(gt=0)
    project_multiplier: float = Field(gt=0)
    adjusted_subtotal: int = Field(ge=0)
    professional_fees: int = Field(ge=0)
    contingency: int = Field(ge=0)
    pre_tax_total: int = Field(ge=0)
    gst: int = Field(ge=0)


class PhaseBreakdown(BaseModel):
    """The grand total re-partitioned by construction sequence (INR)."""

    planning: int = Field(default=0, ge=0)
    site_work_foundation: int = Field(default=0, ge=0)
    superstructure: int = Field(default=0, ge=0)
    mep_rough_ins: int = Field(default=0, ge=0)
    interior_finishes: int = Field(default=0, ge=0)
    exterior_final_touches: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return sum(self.as_dict().values())

    def as_dict(self) -> dict[Phase, int]:
        return {phase: getattr(self, phase.value) for phase in Phase}


class TimelinePhases(BaseModel):
    """Duration of each phase in months (multiples of 0.5)."""

    planning: float = Field(default=0.0, ge=0)
    site_work_foundation: float = Field(default=0.0, ge=0)
    superstructure: float = Field(default=0.0, ge=0)
    mep_rough_ins: float = Field(default=0.0, ge=0)
    interior_finishes: float = Field(default=0.0, ge=0)
    exterior_final_touches: float = Field(default=0.0, ge=0)

    def as_dict(self) -> dict[Phase, float]:
        return {phase: getattr(self, phase.value) for phase in Phase}


class Timeline(BaseModel):
    """Estimated project duration.

    ``total_months`` is rounded from the unrounded phase sum, so it may
    differ slightly from the sum of the rounded phases.
    """

    total_months: float = Field(ge=0)
    phases: TimelinePhases

    @property
    def phase_sum(self) -> float:
        return sum(self.phases.as_dict().values())


class EstimateMetadata(BaseModel):
    """Metadata about the estimation run."""

    engine_version: str
    pricing_data_version: str
    currency: str = "INR"
    estimation_method: str = "area_rate_with_adjustments"
    gst_note: str = "Flat effective GST rate; approximates tiered construction GST"


class ProjectEstimate(BaseModel):
    """Complete, itemised estimate for one project configuration."""

    project_type: ProjectType
    location: str
    work_types: list[WorkType]
    area: float
    area_unit: str
    area_in_sqm: float
    complexity: int
    component_selections: dict[str, str]
    total_cost: int = Field(ge=0)
    category_breakdown: CategoryBreakdown
    adjustments: CostAdjustments
    phase_breakdown: PhaseBreakdown
    timeline: Timeline
    generated_at: datetime = Field(default_factory=datetime.now)
    metadata: EstimateMetadata

    def to_summary_dict(self) -> dict[str, Any]:
        """Produce a flat summary dict for frontend consumption.

        Returns a dict with formatted strings for direct display in the UI.
        """
        from nirman.formatting import format_area, format_inr, format_inr_compact, format_months

        categories = self.category_breakdown.model_dump()
        top_categories = sorted(
            ((name, value) for name, value in categories.items() if value > 0),
            key=lambda item: item[1],
            reverse=True,
        )
        base_total = self.category_breakdown.total
        return {
            "project_type": self.project_type.value,
            "location": self.location,
            "work_types": [wt.value for wt in self.work_types],
            "area_formatted": format_area(self.area, self.area_unit),
            "total_cost_formatted": format_inr(self.total_cost),
            "total_cost_compact": format_inr_compact(self.total_cost),
            "cost_per_unit_formatted": (
                f"{format_inr(round(self.total_cost / self.area))} / {self.area_unit}"
            ),
            "location_multiplier": self.adjustments.location_multiplier,
            "timeline_formatted": format_months(self.timeline.total_months),
            "top_categories": [
                {
                    "category": name,
                    "cost_formatted": format_inr(value),
                    "percent_of_base": round(value / base_total * 100.0, 1) if base_total else 0.0,
                }
                for name, value in top_categories[:3]
            ],
            "generated_at_formatted": self.generated_at.strftime("%Y-%m-%d %H:%M"),
        }

    def to_export_dict(self) -> dict[str, Any]:
        """Produce a detailed dict for PDF export.

        Returns a dict with full nested data suitable for laying out an
        export document.
        """
        return {
            "project_type": self.project_type.value,
            "location": self.location,
            "work_types": [wt.value for wt in self.work_types],
            "area": self.area,
            "area_unit": self.area_unit,
            "area_in_sqm": self.area_in_sqm,
            "complexity": self.complexity,
            "component_selections": dict(self.component_selections),
            "total_cost": self.total_cost,
            "category_breakdown": self.category_breakdown.model_dump(),
            "adjustments": self.adjustments.model_dump(),
            "phase_breakdown": self.phase_breakdown.model_dump(),
            "timeline": {
                "total_months": self.timeline.total_months,
                "phases": self.timeline.phases.model_dump(),
            },
            "generated_at": self.generated_at.isoformat(),
            "metadata": self.metadata.model_dump(),
        }


class SavedEstimate(BaseModel):
    """A stored estimate snapshot.

    ``id`` and ``saved_at`` belong to the storage boundary, not to the
    engine's output.
    """

    id: str = Field(min_length=1)
    saved_at: datetime
    estimate: ProjectEstimate
