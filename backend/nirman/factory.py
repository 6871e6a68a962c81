"""Factory functions for creating pre-configured engine and store instances."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from nirman.data.repository import PricingRepository
from nirman.engine import EstimateEngine
from nirman.exceptions import InvalidConfigurationError
from nirman.models.parameters import PricingParameters
from nirman.store import EstimateStore

if TYPE_CHECKING:
    from nirman.models.estimate import ProjectEstimate
    from nirman.models.project import ProjectConfiguration

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path.home() / ".nirman" / "saved_estimates.json"

# Environment variable -> PricingParameters field
_RATE_ENV_VARS = {
    "NIRMAN_PROFESSIONAL_FEE_RATE": "professional_fee_rate",
    "NIRMAN_CONTINGENCY_RATE": "contingency_rate",
    "NIRMAN_GST_RATE": "gst_rate",
}


def parameters_from_env() -> PricingParameters:
    """Build PricingParameters, overriding defaults from the environment.

    Raises:
        InvalidConfigurationError: If a variable is set but is not a rate
            between 0 and 1.
    """
    overrides: dict[str, float] = {}
    for env_var, field in _RATE_ENV_VARS.items():
        raw = os.environ.get(env_var, "").strip()
        if not raw:
            continue
        try:
            overrides[field] = float(raw)
        except ValueError:
            msg = f"{env_var} must be a number, got '{raw}'"
            raise InvalidConfigurationError(msg) from None
        logger.info("Using %s=%s from environment", env_var, raw)
    try:
        return PricingParameters(**overrides)
    except ValueError as exc:
        msg = f"Invalid pricing rate in environment: {exc}"
        raise InvalidConfigurationError(msg) from exc


def create_default_engine(parameters: PricingParameters | None = None) -> EstimateEngine:
    """Create an EstimateEngine wired up with the built-in pricing tables.

    This is the recommended way to create an EstimateEngine for typical
    usage. Rates come from ``parameters`` when given, otherwise from the
    ``NIRMAN_*_RATE`` environment variables falling back to the defaults.

    Returns:
        An EstimateEngine ready to produce estimates.

    Example::

        from nirman import create_default_engine, ProjectConfiguration

        engine = create_default_engine()
        estimate = engine.estimate(config)
    """
    return EstimateEngine(PricingRepository(), parameters or parameters_from_env())


def create_default_store(path: str | Path | None = None) -> EstimateStore:
    """Create an EstimateStore at ``path``, ``NIRMAN_STORE_PATH`` or the default."""
    if path is None:
        path = os.environ.get("NIRMAN_STORE_PATH") or DEFAULT_STORE_PATH
    return EstimateStore(path)


def compute_estimate(config: ProjectConfiguration) -> ProjectEstimate:
    """Price a configuration with a default engine."""
    return create_default_engine().estimate(config)
