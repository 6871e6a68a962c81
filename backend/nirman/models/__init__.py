"""Domain models for the Nirman estimator.

``ProjectConfiguration`` lives in ``nirman.models.project``; it depends on
the pricing tables, which themselves depend on the enums exported here.
"""

from nirman.models.enums import (
    AreaInputType,
    AreaUnit,
    BenchmarkTier,
    BudgetStatus,
    BudgetTier,
    ComponentKey,
    ConstructionSubtype,
    CostCategory,
    LandscapeArea,
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
    SavedEstimate,
    Timeline,
    TimelinePhases,
)
from nirman.models.parameters import PricingParameters

__all__ = [
    "AreaInputType",
    "AreaUnit",
    "BenchmarkTier",
    "BudgetStatus",
    "BudgetTier",
    "CategoryBreakdown",
    "ComponentKey",
    "ConstructionSubtype",
    "CostAdjustments",
    "CostCategory",
    "EstimateMetadata",
    "LandscapeArea",
    "Phase",
    "PhaseBreakdown",
    "PricingParameters",
    "ProjectEstimate",
    "ProjectType",
    "QualityLevel",
    "SavedEstimate",
    "Timeline",
    "TimelinePhases",
    "WorkType",
]
