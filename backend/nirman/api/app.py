"""FastAPI application — create_app factory with /api endpoints."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from nirman.budget import match_budget
from nirman.engine import ENGINE_VERSION
from nirman.exceptions import (
    EstimateNotFoundError,
    InvalidConfigurationError,
    NirmanError,
    StepValidationError,
)
from nirman.fees import ArchitectFeeRequest, calculate_architect_fee
from nirman.fsi import (
    get_fsi_rule,
    max_built_up_area,
    suggest_max_floors,
    typical_built_up_area,
    validate_fsi_compliance,
)
from nirman.models.enums import ProjectType, WorkType
from nirman.models.project import ProjectConfiguration
from nirman.timeline import compute_timeline

if TYPE_CHECKING:
    from nirman.engine import EstimateEngine
    from nirman.store import EstimateStore

# Load .env from project root (backend/../.env or backend/.env)
_backend_dir = Path(__file__).resolve().parent.parent.parent
_project_root = _backend_dir.parent
load_dotenv(_project_root / ".env")
load_dotenv(_backend_dir / ".env")

logger = logging.getLogger(__name__)


class BudgetRequest(BaseModel):
    config: ProjectConfiguration
    budget: float = Field(gt=0)


class FsiRequest(BaseModel):
    city: str = Field(min_length=1)
    plot_area: float = Field(gt=0)
    proposed_built_up_area: float | None = Field(default=None, ge=0)
    floor_area: float | None = Field(default=None, gt=0)


def _http_error(exc: NirmanError) -> HTTPException:
    """Map a NirmanError onto the matching HTTP status."""
    if isinstance(exc, EstimateNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, InvalidConfigurationError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, StepValidationError):
        return HTTPException(status_code=400, detail=str(exc))
    logger.exception("Unexpected estimator error")
    return HTTPException(status_code=500, detail=str(exc))


def create_app(
    *,
    engine: EstimateEngine | None = None,
    store: EstimateStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    engine
        Optional pre-built estimate engine (e.g. tests). If not provided,
        one is created via create_default_engine on first request.
    store
        Optional saved-estimates store. If not provided, one is created via
        create_default_store (``NIRMAN_STORE_PATH``) on first request to
        /api/estimates.
    """
    app = FastAPI(title="Nirman", version=ENGINE_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state so tests can inject their own
    app.state.engine = engine
    app.state.store = store

    def _get_engine() -> EstimateEngine:
        eng: EstimateEngine | None = app.state.engine
        if eng is not None:
            return eng
        from nirman.factory import create_default_engine

        eng = create_default_engine()
        app.state.engine = eng
        return eng

    def _get_store() -> EstimateStore:
        st: EstimateStore | None = app.state.store
        if st is not None:
            return st
        from nirman.factory import create_default_store

        st = create_default_store()
        app.state.store = st
        return st

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": ENGINE_VERSION}

    # ------------------------------------------------------------------
    # POST /api/estimate
    # ------------------------------------------------------------------

    @app.post("/api/estimate")
    def estimate(config: ProjectConfiguration) -> dict[str, Any]:
        try:
            result = _get_engine().estimate(config)
        except NirmanError as exc:
            raise _http_error(exc) from exc
        return {
            "estimate": result.model_dump(mode="json"),
            "summary_dict": result.to_summary_dict(),
            "export_dict": result.to_export_dict(),
        }

    # ------------------------------------------------------------------
    # POST /api/timeline
    # ------------------------------------------------------------------

    @app.post("/api/timeline")
    def timeline(config: ProjectConfiguration) -> dict[str, Any]:
        try:
            result = compute_timeline(
                config.project_type,
                config.work_types,
                config.area_in_sqm,
                config.complexity,
            )
        except NirmanError as exc:
            raise _http_error(exc) from exc
        return result.model_dump(mode="json")

    # ------------------------------------------------------------------
    # GET /api/sample-estimate
    # ------------------------------------------------------------------

    @app.get("/api/sample-estimate")
    def sample_estimate() -> dict[str, Any]:
        sample_config = ProjectConfiguration(
            location="Bangalore",
            state="Karnataka",
            project_type=ProjectType.RESIDENTIAL,
            work_types=frozenset({WorkType.CONSTRUCTION, WorkType.INTERIORS}),
            area=2400,
            complexity=6,
            component_selections={"ac": "premium", "lighting": "premium"},
        )
        result = _get_engine().estimate(sample_config)
        return {
            "estimate": result.model_dump(mode="json"),
            "config": sample_config.model_dump(mode="json"),
            "summary_dict": result.to_summary_dict(),
            "export_dict": result.to_export_dict(),
        }

    # ------------------------------------------------------------------
    # POST /api/budget
    # ------------------------------------------------------------------

    @app.post("/api/budget")
    def budget(request: BudgetRequest) -> dict[str, Any]:
        try:
            match = match_budget(_get_engine(), request.config, request.budget)
        except NirmanError as exc:
            raise _http_error(exc) from exc
        return match.model_dump(mode="json")

    # ------------------------------------------------------------------
    # POST /api/architect-fee
    # ------------------------------------------------------------------

    @app.post("/api/architect-fee")
    def architect_fee(request: ArchitectFeeRequest) -> dict[str, Any]:
        return calculate_architect_fee(request).model_dump(mode="json")

    # ------------------------------------------------------------------
    # POST /api/fsi
    # ------------------------------------------------------------------

    @app.post("/api/fsi")
    def fsi(request: FsiRequest) -> dict[str, Any]:
        try:
            body: dict[str, Any] = {
                "rule": get_fsi_rule(request.city).model_dump(mode="json"),
                "max_built_up_area": max_built_up_area(request.plot_area, request.city),
                "typical_built_up_area": typical_built_up_area(request.plot_area, request.city),
                "floors": suggest_max_floors(
                    request.plot_area, request.city, request.floor_area
                ).model_dump(mode="json"),
                "compliance": None,
            }
            if request.proposed_built_up_area is not None:
                body["compliance"] = validate_fsi_compliance(
                    request.plot_area, request.proposed_built_up_area, request.city
                ).model_dump(mode="json")
        except NirmanError as exc:
            raise _http_error(exc) from exc
        return body

    # ------------------------------------------------------------------
    # /api/estimates (saved estimates)
    # ------------------------------------------------------------------

    @app.post("/api/estimates", status_code=201)
    def save_estimate(config: ProjectConfiguration) -> dict[str, Any]:
        try:
            result = _get_engine().estimate(config)
            saved = _get_store().save(result)
        except NirmanError as exc:
            raise _http_error(exc) from exc
        return saved.model_dump(mode="json")

    @app.get("/api/estimates")
    def list_estimates() -> list[dict[str, Any]]:
        try:
            saved = _get_store().list_saved()
        except NirmanError as exc:
            raise _http_error(exc) from exc
        return [item.model_dump(mode="json") for item in saved]

    @app.get("/api/estimates/{estimate_id}")
    def get_estimate(estimate_id: str) -> dict[str, Any]:
        try:
            saved = _get_store().get(estimate_id)
        except NirmanError as exc:
            raise _http_error(exc) from exc
        return saved.model_dump(mode="json")

    @app.delete("/api/estimates/{estimate_id}", status_code=204)
    def delete_estimate(estimate_id: str) -> None:
        try:
            _get_store().delete(estimate_id)
        except NirmanError as exc:
            raise _http_error(exc) from exc

    return app
