"""Phase tables shared by the phase cost breakdown and the timeline."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from nirman.models.enums import Phase, ProjectType, WorkType

if TYPE_CHECKING:
    from collections.abc import Mapping

# Work types that bring a phase into the project. Planning always applies.
PHASE_WORK_TYPES: Mapping[Phase, frozenset[WorkType]] = MappingProxyType({
    Phase.PLANNING: frozenset(WorkType),
    Phase.SITE_WORK_FOUNDATION: frozenset({WorkType.CONSTRUCTION}),
    Phase.SUPERSTRUCTURE: frozenset({WorkType.CONSTRUCTION}),
    Phase.MEP_ROUGH_INS: frozenset({WorkType.CONSTRUCTION, WorkType.INTERIORS}),
    Phase.INTERIOR_FINISHES: frozenset({WorkType.CONSTRUCTION, WorkType.INTERIORS}),
    Phase.EXTERIOR_FINAL_TOUCHES: frozenset({WorkType.CONSTRUCTION, WorkType.LANDSCAPE}),
})

# Relative weight of each non-planning phase in the cost left after planning.
PHASE_COST_WEIGHTS: Mapping[Phase, float] = MappingProxyType({
    Phase.SITE_WORK_FOUNDATION: 0.15,
    Phase.SUPERSTRUCTURE: 0.30,
    Phase.MEP_ROUGH_INS: 0.20,
    Phase.INTERIOR_FINISHES: 0.20,
    Phase.EXTERIOR_FINAL_TOUCHES: 0.15,
})

# Base phase durations in months.
BASE_PHASE_MONTHS: Mapping[Phase, float] = MappingProxyType({
    Phase.PLANNING: 1.5,
    Phase.SITE_WORK_FOUNDATION: 1.0,
    Phase.SUPERSTRUCTURE: 2.0,
    Phase.MEP_ROUGH_INS: 1.5,
    Phase.INTERIOR_FINISHES: 1.5,
    Phase.EXTERIOR_FINAL_TOUCHES: 1.0,
})

# Phases stretched by the area and complexity factors.
CONSTRUCTION_PHASES: frozenset[Phase] = frozenset({
    Phase.SITE_WORK_FOUNDATION,
    Phase.SUPERSTRUCTURE,
    Phase.MEP_ROUGH_INS,
})

# Extra months per project type, applied to phases that are in scope.
PROJECT_TYPE_PHASE_MONTHS: Mapping[ProjectType, Mapping[Phase, float]] = MappingProxyType({
    ProjectType.RESIDENTIAL: MappingProxyType({}),
    ProjectType.COMMERCIAL: MappingProxyType({
        Phase.PLANNING: 0.5,
        Phase.SUPERSTRUCTURE: 1.0,
    }),
    ProjectType.MIXED_USE: MappingProxyType({
        Phase.PLANNING: 1.0,
        Phase.SUPERSTRUCTURE: 2.0,
        Phase.MEP_ROUGH_INS: 0.5,
    }),
})

NO_CONSTRUCTION_PLANNING_FACTOR = 0.5
NO_INTERIORS_FINISHES_FACTOR = 0.5
LANDSCAPE_EXTRA_MONTHS = 1.0
AREA_LOG_REFERENCE_SQM = 100.0
AREA_LOG_WEIGHT = 0.5
COMPLEXITY_TIMELINE_STEP = 0.08
