"""Estimator wizard session.

One EstimatorSession owns the whole wizard state: the raw draft being
filled in, the current step, and the latest validated configuration and
estimate. Every update produces a fresh ProjectConfiguration snapshot and
re-prices it as soon as location, project type and area are known.

Steps:

1. Location
2. Project type and scope (work types, landscape areas, floors, area mode)
3. Area (and FSI compliance for houses entered by plot area)
4. Component selections
5. Results
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from nirman.data.pricing import DEFAULT_SELECTIONS
from nirman.exceptions import InvalidConfigurationError, StepValidationError
from nirman.fsi import validate_fsi_compliance
from nirman.models.enums import (
    AreaInputType,
    AreaUnit,
    ComponentKey,
    ConstructionSubtype,
    LandscapeArea,
    ProjectType,
    QualityLevel,
    WorkType,
)
from nirman.models.project import ProjectConfiguration
from nirman.selections import adjust_selections

if TYPE_CHECKING:
    from collections.abc import Callable

    from nirman.engine import EstimateEngine
    from nirman.models.estimate import ProjectEstimate, SavedEstimate
    from nirman.store import EstimateStore

logger = logging.getLogger(__name__)

TOTAL_STEPS = 5

_INTERIOR_PICKS = (
    ComponentKey.FIXED_FURNITURE,
    ComponentKey.LOOSE_FURNITURE,
    ComponentKey.FURNISHINGS,
    ComponentKey.APPLIANCES,
)


def _text(value: Any) -> str:
    return str(value).strip()


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return _text(value) or None


def _work_types(value: Any) -> frozenset[WorkType]:
    if isinstance(value, str):
        value = [value]
    return frozenset(WorkType.parse(item) for item in value)


def _landscape_areas(value: Any) -> frozenset[LandscapeArea]:
    return frozenset(LandscapeArea.parse(item) for item in value)


def _subtype(value: Any) -> ConstructionSubtype | None:
    return None if value is None else ConstructionSubtype(_text(value).lower())


_FIELD_PARSERS: dict[str, Callable[[Any], Any]] = {
    "location": _text,
    "state": _optional_text,
    "project_type": ProjectType.parse,
    "work_types": _work_types,
    "area": float,
    "area_unit": lambda v: AreaUnit(_text(v).lower()),
    "complexity": int,
    "area_input_type": lambda v: AreaInputType(_text(v).lower().replace("-", "_")),
    "floor_count": int,
    "construction_subtype": _subtype,
    "landscape_areas": _landscape_areas,
}


class EstimatorSession:
    """Controller for one pass through the estimator wizard.

    Args:
        engine: Engine used to price every valid snapshot.
    """

    def __init__(self, engine: EstimateEngine) -> None:
        self._engine = engine
        self._draft: dict[str, Any] = {}
        self._selections: dict[ComponentKey, QualityLevel] = dict(DEFAULT_SELECTIONS)
        self._step = 1
        self._config: ProjectConfiguration | None = None
        self._estimate: ProjectEstimate | None = None
        self._draft_error: str | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def step(self) -> int:
        return self._step

    @property
    def draft(self) -> dict[str, Any]:
        """Fields entered so far, parsed but not yet cross-validated."""
        return {**self._draft, "component_selections": dict(self._selections)}

    @property
    def config(self) -> ProjectConfiguration | None:
        return self._config

    @property
    def estimate(self) -> ProjectEstimate | None:
        return self._estimate

    @property
    def draft_error(self) -> str | None:
        """Why the latest complete draft did not validate, if it did not."""
        return self._draft_error

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def update(self, **fields: Any) -> ProjectEstimate | None:
        """Apply field changes and re-price when the draft is complete.

        ``component_selections`` are merged into the current selections.
        Changing ``work_types`` re-applies the work-type selection rules.

        Raises:
            InvalidConfigurationError: For unknown fields or values outside
                the closed vocabularies.
        """
        selections = fields.pop("component_selections", None)
        staged: dict[str, Any] = {}
        for name, value in fields.items():
            parser = _FIELD_PARSERS.get(name)
            if parser is None:
                msg = f"Unknown configuration field '{name}'"
                raise InvalidConfigurationError(msg)
            try:
                staged[name] = parser(value)
            except (TypeError, ValueError) as exc:
                msg = f"Invalid value for {name}: {exc}"
                raise InvalidConfigurationError(msg) from exc

        staged_selections = dict(self._selections)
        if selections:
            try:
                for raw_key, raw_level in selections.items():
                    key = ComponentKey.parse(raw_key)
                    staged_selections[key] = QualityLevel.parse(raw_level, DEFAULT_SELECTIONS[key])
            except ValueError as exc:
                raise InvalidConfigurationError(str(exc)) from exc

        # Nothing is committed until every field and selection has parsed.
        self._draft.update(staged)
        self._selections = staged_selections
        if "work_types" in staged:
            self._selections = adjust_selections(self._selections, staged["work_types"])

        self._refresh()
        return self._estimate

    def _refresh(self) -> None:
        self._config = None
        self._estimate = None
        self._draft_error = None
        if not self._priced_fields_complete():
            return
        try:
            self._config = ProjectConfiguration.model_validate(self.draft)
        except ValidationError as exc:
            self._draft_error = "; ".join(error["msg"] for error in exc.errors())
            logger.debug("Draft not yet valid: %s", self._draft_error)
            return
        self._estimate = self._engine.estimate(self._config)

    def _priced_fields_complete(self) -> bool:
        return (
            bool(self._draft.get("location"))
            and "project_type" in self._draft
            and self._draft.get("area", 0) > 0
        )

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next_step(self) -> int:
        """Validate the current step and advance.

        Raises:
            StepValidationError: If the current step is incomplete.
        """
        self.validate_step(self._step)
        if self._step < TOTAL_STEPS:
            self._step += 1
        return self._step

    def previous_step(self) -> int:
        if self._step > 1:
            self._step -= 1
        return self._step

    def reset(self) -> None:
        self._draft = {}
        self._selections = dict(DEFAULT_SELECTIONS)
        self._step = 1
        self._config = None
        self._estimate = None
        self._draft_error = None

    def save(self, store: EstimateStore) -> SavedEstimate:
        if self._estimate is None:
            raise StepValidationError(
                self._step,
                "Estimate Incomplete",
                self._draft_error or "Complete the location, project type and area first.",
            )
        return store.save(self._estimate)

    # ------------------------------------------------------------------
    # Step validation
    # ------------------------------------------------------------------

    def validate_step(self, step: int) -> None:
        validators = {
            1: self._validate_location,
            2: self._validate_scope,
            3: self._validate_area,
            4: self._validate_components,
            5: self._validate_results,
        }
        validators[step]()

    def _validate_location(self) -> None:
        if not self._draft.get("location"):
            raise StepValidationError(1, "Location Required", "Please select your project location.")

    def _validate_scope(self) -> None:
        draft = self._draft
        if "project_type" not in draft:
            raise StepValidationError(2, "Project Type Required", "Please select your project type.")
        work_types = draft.get("work_types", frozenset())
        if not work_types:
            raise StepValidationError(
                2, "Work Type Required", "Please select at least one type of work for your project."
            )
        if WorkType.LANDSCAPE in work_types and not draft.get("landscape_areas"):
            raise StepValidationError(
                2, "Landscape Area Required", "Please select at least one landscape area."
            )
        if draft["project_type"] == ProjectType.RESIDENTIAL and WorkType.CONSTRUCTION in work_types:
            if draft.get("construction_subtype") is None:
                raise StepValidationError(
                    2,
                    "Construction Type Required",
                    "Please select whether you're building a house or apartment.",
                )
        if draft.get("floor_count", 1) < 1:
            raise StepValidationError(2, "Floor Count Required", "Please specify the number of floors.")
        if "area_input_type" not in draft:
            if draft["project_type"] == ProjectType.RESIDENTIAL and WorkType.CONSTRUCTION in work_types:
                raise StepValidationError(
                    2,
                    "Area Type Required",
                    "Please select the type of area you'll provide "
                    "(plot area, plinth area, or built-up area).",
                )
            if WorkType.INTERIORS in work_types:
                raise StepValidationError(
                    2,
                    "Area Input Type Required",
                    "Please specify whether you'll provide plot area or plinth area.",
                )

    def _validate_area(self) -> None:
        draft = self._draft
        if draft.get("area", 0) <= 0:
            raise StepValidationError(3, "Area Required", "Please enter a valid project area.")
        if (
            draft.get("construction_subtype") == ConstructionSubtype.HOUSE
            and draft.get("area_input_type") == AreaInputType.PLOT
            and self._config is not None
        ):
            compliance = validate_fsi_compliance(
                self._config.base_area_in_sqm,
                self._config.area_in_sqm,
                self._config.location,
            )
            if not compliance.is_compliant:
                raise StepValidationError(
                    3,
                    "FSI Violation",
                    "The number of floors exceeds the FSI limit for your city. "
                    "Please reduce floors or increase plot area.",
                )

    def _validate_components(self) -> None:
        work_types = self._draft.get("work_types", frozenset())
        if (
            WorkType.CONSTRUCTION in work_types
            and self._selections[ComponentKey.CIVIL_QUALITY] == QualityLevel.NONE
        ):
            raise StepValidationError(
                4,
                "Civil Quality Required",
                "Please select civil materials quality for construction projects.",
            )
        if work_types == {WorkType.INTERIORS} and all(
            self._selections[key] == QualityLevel.NONE for key in _INTERIOR_PICKS
        ):
            raise StepValidationError(
                4,
                "Interior Components Required",
                "Please select at least one interior component for your interiors-only project.",
            )

    def _validate_results(self) -> None:
        if self._estimate is None:
            raise StepValidationError(
                5,
                "Estimate Incomplete",
                self._draft_error or "Complete the location, project type and area first.",
            )
