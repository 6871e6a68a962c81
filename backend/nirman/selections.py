"""Keep component selections consistent with the selected work types."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nirman.data.pricing import COMPONENT_WORK_TYPES, DEFAULT_SELECTIONS
from nirman.models.enums import ComponentKey, QualityLevel, WorkType

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from nirman.models.project import ProjectConfiguration

# Restored to standard when construction is added with civil quality "none".
_CONSTRUCTION_ESSENTIALS = (
    ComponentKey.BUILDING_ENVELOPE,
    ComponentKey.WINDOWS,
    ComponentKey.PLUMBING,
    ComponentKey.ELECTRICAL,
)


def applicable_components(work_types: Iterable[WorkType]) -> list[ComponentKey]:
    """Components priced for the given work types, in display order."""
    selected = frozenset(work_types)
    return [key for key in ComponentKey if COMPONENT_WORK_TYPES[key] & selected]


def adjust_selections(
    selections: Mapping[ComponentKey, QualityLevel],
    work_types: Iterable[WorkType],
) -> dict[ComponentKey, QualityLevel]:
    """Apply the work-type rules to a full or partial selection mapping.

    - Components outside the selected work types are set to ``none``.
    - With construction selected and civil quality ``none``, civil quality
      goes back to ``standard`` along with any unset envelope, windows,
      plumbing and electrical.
    """
    selected = frozenset(work_types)
    applicable = set(applicable_components(selected))
    adjusted = {
        key: (level if key in applicable else QualityLevel.NONE)
        for key, level in {**DEFAULT_SELECTIONS, **selections}.items()
    }

    if WorkType.CONSTRUCTION in selected and adjusted[ComponentKey.CIVIL_QUALITY] == QualityLevel.NONE:
        adjusted[ComponentKey.CIVIL_QUALITY] = QualityLevel.STANDARD
        for key in _CONSTRUCTION_ESSENTIALS:
            if adjusted[key] == QualityLevel.NONE:
                adjusted[key] = QualityLevel.STANDARD
    return adjusted


def normalize_selections(config: ProjectConfiguration) -> ProjectConfiguration:
    """Return a snapshot whose selections match its work types."""
    selections = adjust_selections(config.component_selections, config.work_types)
    if selections == config.component_selections:
        return config
    return config.with_changes(component_selections=selections)
