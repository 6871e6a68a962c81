"""Nirman construction and interiors estimator.

Usage::

    from nirman import create_default_engine, ProjectConfiguration

    engine = create_default_engine()
    config = ProjectConfiguration(location="Bangalore", project_type="residential", area=1200)
    estimate = engine.estimate(config)
"""

from nirman.engine import EstimateEngine
from nirman.exceptions import (
    EstimateNotFoundError,
    InvalidConfigurationError,
    NirmanError,
    PricingDataError,
    StepValidationError,
)
from nirman.factory import compute_estimate, create_default_engine, create_default_store
from nirman.models import (
    CategoryBreakdown,
    ComponentKey,
    CostAdjustments,
    PhaseBreakdown,
    PricingParameters,
    ProjectEstimate,
    ProjectType,
    QualityLevel,
    SavedEstimate,
    Timeline,
    WorkType,
)
from nirman.models.project import ProjectConfiguration
from nirman.session import EstimatorSession
from nirman.store import EstimateStore
from nirman.timeline import compute_timeline

__all__ = [
    "CategoryBreakdown",
    "ComponentKey",
    "CostAdjustments",
    "EstimateEngine",
    "EstimateNotFoundError",
    "EstimateStore",
    "EstimatorSession",
    "InvalidConfigurationError",
    "NirmanError",
    "PhaseBreakdown",
    "PricingDataError",
    "PricingParameters",
    "ProjectConfiguration",
    "ProjectEstimate",
    "ProjectType",
    "QualityLevel",
    "SavedEstimate",
    "StepValidationError",
    "Timeline",
    "WorkType",
    "compute_estimate",
    "compute_timeline",
    "create_default_engine",
    "create_default_store",
]
