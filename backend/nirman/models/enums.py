"""Enums for the Nirman domain models.

These enums are the closed vocabulary of the estimator wizard. Free-form
strings coming from the web client are normalised through the ``parse``
classmethods and anything outside the vocabulary is rejected.
"""

from __future__ import annotations

import re
from enum import StrEnum

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _normalise_token(value: str) -> str:
    """``'fixedFurniture'`` / ``'Fixed Furniture'`` -> ``'fixed_furniture'``."""
    token = _CAMEL_BOUNDARY.sub("_", value.strip())
    return re.sub(r"[\s\-]+", "_", token).lower()


class QualityLevel(StrEnum):
    """Quality level selected for every priced component."""

    NONE = "none"
    STANDARD = "standard"
    PREMIUM = "premium"
    LUXURY = "luxury"

    @classmethod
    def parse(
        cls,
        value: str | QualityLevel | None,
        default: QualityLevel | None = None,
    ) -> QualityLevel:
        """Normalise a selection; an empty selection means ``default``.

        Without a ``default`` an empty selection means ``standard``.
        """
        if isinstance(value, QualityLevel):
            return value
        if value is None or not str(value).strip():
            return cls.STANDARD if default is None else default
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            msg = f"Unknown quality level '{value}'"
            raise ValueError(msg) from None


class ProjectType(StrEnum):
    """Project typologies offered by the wizard."""

    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    MIXED_USE = "mixed-use"

    @classmethod
    def parse(cls, value: str | ProjectType) -> ProjectType:
        """Accept ``mixed_use`` and ``Mixed Use`` for ``mixed-use``."""
        if isinstance(value, ProjectType):
            return value
        try:
            return cls(_normalise_token(str(value)).replace("_", "-"))
        except ValueError:
            msg = f"Unknown project type '{value}'"
            raise ValueError(msg) from None


class WorkType(StrEnum):
    """Scopes of work; they decide which components and phases apply."""

    CONSTRUCTION = "construction"
    INTERIORS = "interiors"
    LANDSCAPE = "landscape"

    @classmethod
    def parse(cls, value: str | WorkType) -> WorkType:
        if isinstance(value, WorkType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            msg = f"Unknown work type '{value}'"
            raise ValueError(msg) from None


class AreaUnit(StrEnum):
    """Units the area can be entered in."""

    SQFT = "sqft"
    SQM = "sqm"


class AreaInputType(StrEnum):
    """How the entered area should be interpreted."""

    BUILT_UP = "built_up"
    PLINTH = "plinth"
    PLOT = "plot"


class ConstructionSubtype(StrEnum):
    """Residential construction subtypes."""

    HOUSE = "house"
    APARTMENT = "apartment"


class ComponentKey(StrEnum):
    """The fixed set of priced components."""

    # Core
    CIVIL_QUALITY = "civil_quality"
    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    AC = "ac"
    ELEVATOR = "elevator"

    # Finishes & envelope
    BUILDING_ENVELOPE = "building_envelope"
    LIGHTING = "lighting"
    WINDOWS = "windows"
    CEILING = "ceiling"
    SURFACES = "surfaces"

    # Interiors
    FIXED_FURNITURE = "fixed_furniture"
    LOOSE_FURNITURE = "loose_furniture"
    FURNISHINGS = "furnishings"
    APPLIANCES = "appliances"
    ARTEFACTS = "artefacts"

    @classmethod
    def parse(cls, value: str | ComponentKey) -> ComponentKey:
        """Accept snake_case, camelCase or spaced spellings."""
        if isinstance(value, ComponentKey):
            return value
        try:
            return cls(_normalise_token(str(value)))
        except ValueError:
            msg = f"Unknown component '{value}'"
            raise ValueError(msg) from None


class CostCategory(StrEnum):
    """Material/system cost buckets of the category breakdown."""

    CONSTRUCTION = "construction"
    CORE = "core"
    FINISHES = "finishes"
    INTERIORS = "interiors"
    LANDSCAPE = "landscape"


class Phase(StrEnum):
    """Construction-sequence phases of the phase breakdown and timeline."""

    PLANNING = "planning"
    SITE_WORK_FOUNDATION = "site_work_foundation"
    SUPERSTRUCTURE = "superstructure"
    MEP_ROUGH_INS = "mep_rough_ins"
    INTERIOR_FINISHES = "interior_finishes"
    EXTERIOR_FINAL_TOUCHES = "exterior_final_touches"


class LandscapeArea(StrEnum):
    """Outdoor sections that can be landscaped."""

    FRONT_YARD = "front_yard"
    BACK_YARD = "back_yard"
    TERRACE_GARDEN = "terrace_garden"
    ROOFTOP_GARDEN = "rooftop_garden"
    FULL_COMPOUND = "full_compound"
    COURTYARD = "courtyard"

    @classmethod
    def parse(cls, value: str | LandscapeArea) -> LandscapeArea:
        if isinstance(value, LandscapeArea):
            return value
        try:
            return cls(_normalise_token(str(value)))
        except ValueError:
            msg = f"Unknown landscape area '{value}'"
            raise ValueError(msg) from None


class BudgetStatus(StrEnum):
    """How a target budget compares with the minimum viable budget."""

    LOW = "low"
    MODERATE = "moderate"
    GOOD = "good"
    EXCELLENT = "excellent"


class BudgetTier(StrEnum):
    """Selection package suggested for a budget, cheapest first."""

    MINIMAL = "minimal"
    MODERATE = "moderate"
    GOOD = "good"
    PREMIUM = "premium"
    LUXURY = "luxury"


class BenchmarkTier(StrEnum):
    """Market band of a finished estimate by cost per square foot."""

    STANDARD = "standard"
    PREMIUM = "premium"
    LUXURY = "luxury"


# ---------------------------------------------------------------------------
# Architect fee calculator
# ---------------------------------------------------------------------------


class FeeTypology(StrEnum):
    INDIVIDUAL_HOUSE = "Individual House"
    RESIDENTIAL_BLOCK = "Residential Block"
    COMMERCIAL = "Commercial"
    FFE_PROCUREMENT = "FF&E Procurement"
    LANDSCAPE_DETAILED = "Landscape - Detailed"


class FeeModel(StrEnum):
    """How a typology's raw fee is derived."""

    PERCENT = "percent"  # share of construction cost
    SQM = "sqm"  # rate per square metre


class ClientType(StrEnum):
    FRIEND_FAMILY = "Friend/Family"
    INDIVIDUAL = "Individual"
    CORPORATE = "Corporate"
    DEVELOPER = "Developer"


class DesignComplexity(StrEnum):
    SIMPLE = "Simple"
    STANDARD = "Standard"
    PREMIUM = "Premium"
    LUXURY = "Luxury"


class ClientInvolvement(StrEnum):
    MINIMAL = "Minimal"
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    FLEXIBLE = "Flexible"


class VisualizationPackage(StrEnum):
    NONE = "None"
    STANDARD = "Standard"
    PREMIUM = "Premium"
    LUXURY = "Luxury"


class Currency(StrEnum):
    INR = "INR"
    USD = "USD"
    EUR = "EUR"
