"""Timeline estimator.

Starts from fixed base durations per phase and adjusts them for scope,
project type, size and complexity:

1. **Scope** — phases outside the selected work types drop to zero; without
   construction the site work and superstructure phases vanish and planning
   is halved; without interiors the finishing phase is halved; landscape
   work adds a month to the exterior phase.
2. **Project type** — commercial and mixed-use projects add fixed months to
   planning and structure.
3. **Size** — ``1 + log10(max(area / 100, 1)) * 0.5`` stretches the
   construction phases; duration grows sub-linearly with area.
4. **Complexity** — ``1 + (complexity - 5) * 0.08`` on the same phases.
5. **Rounding** — every phase is rounded to the nearest half month. The
   total is the unrounded phase sum rounded the same way, so it is the
   authoritative duration and may differ from the sum of rounded phases by
   up to 0.25 month per phase plus 0.25 for the total.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from nirman.data.phases import (
    AREA_LOG_REFERENCE_SQM,
    AREA_LOG_WEIGHT,
    BASE_PHASE_MONTHS,
    COMPLEXITY_TIMELINE_STEP,
    CONSTRUCTION_PHASES,
    LANDSCAPE_EXTRA_MONTHS,
    NO_CONSTRUCTION_PLANNING_FACTOR,
    NO_INTERIORS_FINISHES_FACTOR,
    PHASE_WORK_TYPES,
    PROJECT_TYPE_PHASE_MONTHS,
)
from nirman.data.pricing import NEUTRAL_COMPLEXITY
from nirman.exceptions import InvalidConfigurationError
from nirman.models.enums import Phase, ProjectType, WorkType
from nirman.models.estimate import Timeline, TimelinePhases

# Largest gap allowed between the sum of rounded phases and the total.
ROUNDING_TOLERANCE_MONTHS = 0.25 * (len(Phase) + 1)


def round_half_month(months: float) -> float:
    """Round half-up to the nearest 0.5."""
    return math.floor(months * 2 + 0.5) / 2


def area_factor(area_in_sqm: float) -> float:
    """Sub-linear stretch for larger projects (1.0 up to 100 m2)."""
    return 1 + math.log10(max(area_in_sqm / AREA_LOG_REFERENCE_SQM, 1.0)) * AREA_LOG_WEIGHT


def complexity_factor(complexity: int) -> float:
    return 1 + (complexity - NEUTRAL_COMPLEXITY) * COMPLEXITY_TIMELINE_STEP


def raw_phase_months(
    project_type: ProjectType,
    work_types: Iterable[WorkType],
    area_in_sqm: float,
    complexity: int,
) -> dict[Phase, float]:
    """Unrounded phase durations in months."""
    selected = frozenset(work_types)
    if not selected:
        msg = "at least one work type is required to estimate a timeline"
        raise InvalidConfigurationError(msg)
    if area_in_sqm <= 0:
        msg = f"area must be positive, got {area_in_sqm}"
        raise InvalidConfigurationError(msg)

    months = {
        phase: (base if PHASE_WORK_TYPES[phase] & selected else 0.0)
        for phase, base in BASE_PHASE_MONTHS.items()
    }

    if WorkType.CONSTRUCTION not in selected:
        months[Phase.SITE_WORK_FOUNDATION] = 0.0
        months[Phase.SUPERSTRUCTURE] = 0.0
        months[Phase.PLANNING] *= NO_CONSTRUCTION_PLANNING_FACTOR
    if WorkType.INTERIORS not in selected:
        months[Phase.INTERIOR_FINISHES] *= NO_INTERIORS_FINISHES_FACTOR
    if WorkType.LANDSCAPE in selected:
        months[Phase.EXTERIOR_FINAL_TOUCHES] += LANDSCAPE_EXTRA_MONTHS

    for phase, extra in PROJECT_TYPE_PHASE_MONTHS[project_type].items():
        if months[phase] > 0:
            months[phase] += extra

    stretch = area_factor(area_in_sqm) * complexity_factor(complexity)
    for phase in CONSTRUCTION_PHASES:
        months[phase] *= stretch

    return months


def compute_timeline(
    project_type: ProjectType,
    work_types: Iterable[WorkType],
    area_in_sqm: float,
    complexity: int,
) -> Timeline:
    """Estimate the total duration and per-phase months of a project."""
    months = raw_phase_months(project_type, work_types, area_in_sqm, complexity)
    phases = TimelinePhases(
        **{phase.value: round_half_month(value) for phase, value in months.items()}
    )
    return Timeline(
        total_months=round_half_month(sum(months.values())),
        phases=phases,
    )
