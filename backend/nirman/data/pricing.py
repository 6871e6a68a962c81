"""Static pricing tables for the estimator.

All rates are 2025 Indian market rates in INR per square metre of built-up
area unless stated otherwise. These tables are the single source of truth
for unit costs; nothing else in the package hard-codes a rate.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from nirman.models.enums import (
    ComponentKey,
    CostCategory,
    LandscapeArea,
    ProjectType,
    QualityLevel,
    WorkType,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

PRICING_DATA_VERSION = "2025.1"

_N, _S, _P, _L = (
    QualityLevel.NONE,
    QualityLevel.STANDARD,
    QualityLevel.PREMIUM,
    QualityLevel.LUXURY,
)


def _rates(standard: float, premium: float, luxury: float) -> Mapping[QualityLevel, float]:
    return MappingProxyType({_N: 0.0, _S: standard, _P: premium, _L: luxury})


# Per-component rate (INR / m2) for each quality level. ``none`` is always 0.
COMPONENT_PRICING: Mapping[ComponentKey, Mapping[QualityLevel, float]] = MappingProxyType({
    # Core systems
    ComponentKey.CIVIL_QUALITY: _rates(300, 700, 1400),
    ComponentKey.PLUMBING: _rates(500, 1500, 3500),
    ComponentKey.ELECTRICAL: _rates(400, 1200, 2800),
    ComponentKey.AC: _rates(800, 2200, 5000),
    ComponentKey.ELEVATOR: _rates(750, 1300, 2300),
    # Finishes & envelope
    ComponentKey.BUILDING_ENVELOPE: _rates(150, 400, 900),
    ComponentKey.LIGHTING: _rates(400, 1200, 3000),
    ComponentKey.WINDOWS: _rates(500, 1500, 3500),
    ComponentKey.CEILING: _rates(350, 1000, 2500),
    ComponentKey.SURFACES: _rates(600, 1800, 4000),
    # Interiors
    ComponentKey.FIXED_FURNITURE: _rates(3000, 8000, 15000),
    ComponentKey.LOOSE_FURNITURE: _rates(2000, 5000, 12000),
    ComponentKey.FURNISHINGS: _rates(500, 2000, 4000),
    ComponentKey.APPLIANCES: _rates(1000, 3500, 8000),
    ComponentKey.ARTEFACTS: _rates(300, 1500, 3500),
})

# Category each component's cost is folded into.
COMPONENT_CATEGORIES: Mapping[ComponentKey, CostCategory] = MappingProxyType({
    ComponentKey.CIVIL_QUALITY: CostCategory.CORE,
    ComponentKey.PLUMBING: CostCategory.CORE,
    ComponentKey.ELECTRICAL: CostCategory.CORE,
    ComponentKey.AC: CostCategory.CORE,
    ComponentKey.ELEVATOR: CostCategory.CORE,
    ComponentKey.BUILDING_ENVELOPE: CostCategory.FINISHES,
    ComponentKey.LIGHTING: CostCategory.FINISHES,
    ComponentKey.WINDOWS: CostCategory.FINISHES,
    ComponentKey.CEILING: CostCategory.FINISHES,
    ComponentKey.SURFACES: CostCategory.FINISHES,
    ComponentKey.FIXED_FURNITURE: CostCategory.INTERIORS,
    ComponentKey.LOOSE_FURNITURE: CostCategory.INTERIORS,
    ComponentKey.FURNISHINGS: CostCategory.INTERIORS,
    ComponentKey.APPLIANCES: CostCategory.INTERIORS,
    ComponentKey.ARTEFACTS: CostCategory.INTERIORS,
})

_ALL_WORK = frozenset(WorkType)
_CONSTRUCTION = frozenset({WorkType.CONSTRUCTION})
_INTERIORS = frozenset({WorkType.INTERIORS})

# Work types under which a component is priced at all.
COMPONENT_WORK_TYPES: Mapping[ComponentKey, frozenset[WorkType]] = MappingProxyType({
    ComponentKey.CIVIL_QUALITY: _CONSTRUCTION,
    ComponentKey.PLUMBING: _ALL_WORK,
    ComponentKey.ELECTRICAL: _ALL_WORK,
    ComponentKey.AC: _ALL_WORK,
    ComponentKey.ELEVATOR: _ALL_WORK,
    ComponentKey.BUILDING_ENVELOPE: _CONSTRUCTION,
    ComponentKey.LIGHTING: _ALL_WORK,
    ComponentKey.WINDOWS: _CONSTRUCTION,
    ComponentKey.CEILING: _ALL_WORK,
    ComponentKey.SURFACES: _ALL_WORK,
    ComponentKey.FIXED_FURNITURE: _INTERIORS,
    ComponentKey.LOOSE_FURNITURE: _INTERIORS,
    ComponentKey.FURNISHINGS: _INTERIORS,
    ComponentKey.APPLIANCES: _INTERIORS,
    ComponentKey.ARTEFACTS: _INTERIORS,
})

# Wizard defaults for a fresh configuration.
DEFAULT_SELECTIONS: Mapping[ComponentKey, QualityLevel] = MappingProxyType({
    key: (_N if key in (ComponentKey.ELEVATOR, ComponentKey.ARTEFACTS) else _S)
    for key in ComponentKey
})

# Complete construction (shell + basic MEP) per m2 at standard civil quality.
BASE_CONSTRUCTION_COST: Mapping[ProjectType, float] = MappingProxyType({
    ProjectType.RESIDENTIAL: 15_000.0,
    ProjectType.COMMERCIAL: 18_000.0,
    ProjectType.MIXED_USE: 21_000.0,
})

# Civil quality scales the whole construction bucket.
CIVIL_QUALITY_MULTIPLIERS: Mapping[QualityLevel, float] = MappingProxyType({
    _N: 0.0,
    _S: 1.0,
    _P: 1.6,
    _L: 2.8,
})

# Share of civil quality's per-m2 rate reported in the core bucket.
CIVIL_CORE_SHARE = 0.15

PROJECT_TYPE_MULTIPLIERS: Mapping[ProjectType, float] = MappingProxyType({
    ProjectType.RESIDENTIAL: 1.0,
    ProjectType.COMMERCIAL: 1.15,
    ProjectType.MIXED_USE: 1.25,
})

NEUTRAL_COMPLEXITY = 5
COMPLEXITY_STEP = 0.05

# Lump-sum allowance (INR) per landscaped section, before multipliers.
LANDSCAPE_ALLOWANCES: Mapping[LandscapeArea, float] = MappingProxyType({
    LandscapeArea.FRONT_YARD: 150_000.0,
    LandscapeArea.BACK_YARD: 200_000.0,
    LandscapeArea.TERRACE_GARDEN: 250_000.0,
    LandscapeArea.ROOFTOP_GARDEN: 350_000.0,
    LandscapeArea.FULL_COMPOUND: 600_000.0,
    LandscapeArea.COURTYARD: 180_000.0,
})
