"""Floor Space Index rules for Indian cities.

FSI = total built-up area / plot area. Limits vary by municipality; the
values below are typical residential limits and should be verified with
the local authority for any real project.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class FsiRule(BaseModel):
    """Residential FSI limits for a single city."""

    city: str
    min_fsi: float = Field(gt=0)
    max_fsi: float = Field(gt=0)
    typical: float = Field(gt=0)
    notes: str | None = None

    @model_validator(mode="after")
    def min_le_typical_le_max(self) -> FsiRule:
        if not (self.min_fsi <= self.typical <= self.max_fsi):
            msg = (
                f"Must satisfy min_fsi <= typical <= max_fsi, "
                f"got {self.min_fsi} <= {self.typical} <= {self.max_fsi}"
            )
            raise ValueError(msg)
        return self


def _rule(city: str, min_fsi: float, max_fsi: float, typical: float, notes: str | None = None) -> FsiRule:
    return FsiRule(city=city, min_fsi=min_fsi, max_fsi=max_fsi, typical=typical, notes=notes)


FSI_RULES: dict[str, FsiRule] = {
    rule.city: rule
    for rule in [
        # Maharashtra
        _rule(
            "Mumbai", 1.0, 3.0, 1.33,
            "FSI varies by zone. Island City: 1.33, Suburbs: 1.0-2.0, TOD: up to 3.0",
        ),
        _rule("Pune", 1.0, 2.0, 1.5, "PMC allows 1.5 basic + incentive FSI"),
        _rule("Nagpur", 1.0, 2.0, 1.5),
        _rule("Nashik", 1.0, 1.8, 1.5),
        _rule("Aurangabad", 1.0, 1.8, 1.5),
        # Delhi NCR
        _rule("Delhi", 1.2, 3.5, 2.0, "Master Plan 2021: basic 2.0, up to 3.5 in certain zones"),
        _rule("Gurgaon", 1.0, 2.25, 1.75),
        _rule("Noida", 1.0, 2.5, 1.75),
        _rule("Faridabad", 1.0, 2.0, 1.5),
        _rule("Ghaziabad", 1.0, 2.0, 1.5),
        # Karnataka
        _rule("Bangalore", 1.5, 2.5, 2.0, "BBMP allows 1.75-2.5 depending on road width and zone"),
        _rule("Mysore", 1.0, 2.0, 1.5),
        _rule("Mangalore", 1.0, 2.0, 1.5),
        _rule("Hubli", 1.0, 1.75, 1.5),
        # Tamil Nadu
        _rule("Chennai", 1.5, 2.0, 1.8, "CMDA allows 1.5-2.0 depending on plot size and location"),
        _rule("Coimbatore", 1.0, 2.0, 1.5),
        _rule("Madurai", 1.0, 1.8, 1.5),
        # Telangana
        _rule("Hyderabad", 1.0, 2.5, 2.0, "GHMC allows up to 2.5 with incentives"),
        # Gujarat
        _rule("Ahmedabad", 1.0, 2.7, 1.8),
        _rule("Surat", 1.0, 2.5, 1.8),
        _rule("Vadodara", 1.0, 2.0, 1.5),
        # Others
        _rule("Jaipur", 1.0, 2.0, 1.5),
        _rule("Kochi", 1.0, 2.5, 1.5),
        _rule("Chandigarh", 1.0, 1.75, 1.5),
        _rule("Lucknow", 1.0, 2.0, 1.5),
        _rule("Indore", 1.0, 2.0, 1.5),
        _rule("Srinagar", 0.8, 1.5, 1.2, "Hilly terrain with restricted development"),
        _rule("Panaji", 1.0, 1.5, 1.2, "Coastal regulations apply"),
        _rule("Guwahati", 1.0, 2.0, 1.5),
    ]
}

DEFAULT_FSI_RULE = FsiRule(
    city="Default",
    min_fsi=1.0,
    max_fsi=2.0,
    typical=1.5,
    notes="Using standard FSI rules. Please verify with local municipal authorities.",
)

# Share of the plot a single floor can cover once setbacks are respected.
PLOT_COVERAGE_RATIO = 0.7
