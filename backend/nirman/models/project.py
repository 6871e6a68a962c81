"""Project configuration model: the input to the estimate engine."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from nirman.data.fsi_rules import PLOT_COVERAGE_RATIO
from nirman.data.pricing import DEFAULT_SELECTIONS
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

SQFT_TO_SQM = 0.092903

_DEFAULT_WORK_TYPES = frozenset({WorkType.CONSTRUCTION, WorkType.INTERIORS})


class ProjectConfiguration(BaseModel):
    """An immutable snapshot of everything the wizard collects.

    Each wizard step produces a new snapshot via ``with_changes``; an
    estimate is always derived fresh from a whole snapshot.

    Component selections accept the client's spellings (``"fixedFurniture"``,
    ``"Premium"``); missing components take the wizard defaults and empty
    selections mean ``standard``. Unknown components or quality levels are
    rejected.
    """

    model_config = ConfigDict(frozen=True)

    location: str = Field(min_length=1)
    state: str | None = None
    project_type: ProjectType
    work_types: frozenset[WorkType] = _DEFAULT_WORK_TYPES
    area: float = Field(gt=0)
    area_unit: AreaUnit = AreaUnit.SQFT
    complexity: int = Field(default=5, ge=1, le=10)
    component_selections: dict[ComponentKey, QualityLevel] = Field(
        default_factory=lambda: dict(DEFAULT_SELECTIONS),
    )
    area_input_type: AreaInputType = AreaInputType.BUILT_UP
    floor_count: int = Field(default=1, ge=1)
    construction_subtype: ConstructionSubtype | None = None
    landscape_areas: frozenset[LandscapeArea] = frozenset()

    @field_validator("location")
    @classmethod
    def location_must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "location must not be blank"
            raise ValueError(msg)
        return v

    @field_validator("project_type", mode="before")
    @classmethod
    def normalise_project_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return ProjectType.parse(v)
        return v

    @field_validator("work_types", mode="before")
    @classmethod
    def normalise_work_types(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple, set, frozenset)):
            return frozenset(WorkType.parse(item) for item in v)
        return v

    @field_validator("work_types")
    @classmethod
    def work_types_must_not_be_empty(cls, v: frozenset[WorkType]) -> frozenset[WorkType]:
        if not v:
            msg = "at least one work type must be selected"
            raise ValueError(msg)
        return v

    @field_validator("component_selections", mode="before")
    @classmethod
    def normalise_selections(cls, v: Any) -> dict[ComponentKey, QualityLevel]:
        if v is None:
            v = {}
        if not isinstance(v, dict):
            msg = "component_selections must be a mapping of component to quality level"
            raise ValueError(msg)
        selections = dict(DEFAULT_SELECTIONS)
        for raw_key, raw_level in v.items():
            key = ComponentKey.parse(raw_key)
            selections[key] = QualityLevel.parse(raw_level, DEFAULT_SELECTIONS[key])
        return selections

    @field_validator("landscape_areas", mode="before")
    @classmethod
    def normalise_landscape_areas(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple, set, frozenset)):
            return frozenset(LandscapeArea.parse(item) for item in v)
        return v

    @model_validator(mode="after")
    def landscape_needs_sections(self) -> ProjectConfiguration:
        if WorkType.LANDSCAPE in self.work_types and not self.landscape_areas:
            msg = "landscape work requires at least one landscape area"
            raise ValueError(msg)
        return self

    @field_serializer("work_types", "landscape_areas")
    def _sorted_values(self, v: frozenset[str]) -> list[str]:
        return sorted(str(item) for item in v)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def base_area_in_sqm(self) -> float:
        """The entered area converted to square metres."""
        if self.area_unit == AreaUnit.SQFT:
            return self.area * SQFT_TO_SQM
        return self.area

    @property
    def area_in_sqm(self) -> float:
        """Total built-up area in square metres used for pricing.

        - built-up: the entered area already covers all floors
        - plinth: the entered footprint is repeated on every floor
        - plot: each floor covers the plot minus setbacks
        """
        base = self.base_area_in_sqm
        if self.area_input_type == AreaInputType.PLINTH:
            return base * self.floor_count
        if self.area_input_type == AreaInputType.PLOT:
            return base * PLOT_COVERAGE_RATIO * self.floor_count
        return base

    def selection(self, key: ComponentKey) -> QualityLevel:
        return self.component_selections.get(key, DEFAULT_SELECTIONS[key])

    def has_work(self, work_type: WorkType) -> bool:
        return work_type in self.work_types

    def with_changes(self, **changes: Any) -> ProjectConfiguration:
        """Return a new, re-validated snapshot with ``changes`` applied.

        ``component_selections`` passed here are merged into the existing
        selections rather than replacing them.
        """
        data = self.model_dump()
        selections = changes.pop("component_selections", None)
        if selections:
            merged = dict(data["component_selections"])
            for raw_key, raw_level in selections.items():
                key = ComponentKey.parse(raw_key)
                merged[key] = QualityLevel.parse(raw_level, DEFAULT_SELECTIONS[key])
            data["component_selections"] = merged
        data.update(changes)
        return ProjectConfiguration.model_validate(data)
