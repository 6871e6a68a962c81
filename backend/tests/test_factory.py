"""Tests for factory functions and environment configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from nirman.engine import EstimateEngine
from nirman.exceptions import InvalidConfigurationError
from nirman.factory import (
    DEFAULT_STORE_PATH,
    compute_estimate,
    create_default_engine,
    create_default_store,
    parameters_from_env,
)
from nirman.models.parameters import PricingParameters
from nirman.models.project import ProjectConfiguration

if TYPE_CHECKING:
    from pathlib import Path

_RATE_VARS = ("NIRMAN_PROFESSIONAL_FEE_RATE", "NIRMAN_CONTINGENCY_RATE", "NIRMAN_GST_RATE")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (*_RATE_VARS, "NIRMAN_STORE_PATH"):
        monkeypatch.delenv(name, raising=False)


class TestParametersFromEnv:
    def test_defaults(self) -> None:
        assert parameters_from_env() == PricingParameters()

    def test_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NIRMAN_GST_RATE", "0.18")
        params = parameters_from_env()
        assert params.gst_rate == pytest.approx(0.18)
        assert params.contingency_rate == pytest.approx(0.09)

    def test_blank_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NIRMAN_CONTINGENCY_RATE", "  ")
        assert parameters_from_env().contingency_rate == pytest.approx(0.09)

    def test_not_a_number(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NIRMAN_PROFESSIONAL_FEE_RATE", "thirteen")
        with pytest.raises(InvalidConfigurationError, match="NIRMAN_PROFESSIONAL_FEE_RATE"):
            parameters_from_env()

    def test_out_of_range(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NIRMAN_GST_RATE", "12")
        with pytest.raises(InvalidConfigurationError, match="Invalid pricing rate"):
            parameters_from_env()


class TestCreateDefaultEngine:
    def test_returns_engine(self) -> None:
        assert isinstance(create_default_engine(), EstimateEngine)

    def test_explicit_parameters_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NIRMAN_GST_RATE", "0.18")
        engine = create_default_engine(PricingParameters(gst_rate=0.05))
        assert engine.parameters.gst_rate == pytest.approx(0.05)

    def test_compute_estimate(self) -> None:
        config = ProjectConfiguration(
            location="Bangalore",
            project_type="residential",
            area=1000,
            component_selections={"elevator": "standard", "artefacts": "standard"},
        )
        assert compute_estimate(config).total_cost == 4_005_549


class TestCreateDefaultStore:
    def test_explicit_path(self, tmp_path: Path) -> None:
        store = create_default_store(tmp_path / "a.json")
        assert store.path == tmp_path / "a.json"

    def test_env_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NIRMAN_STORE_PATH", str(tmp_path / "env.json"))
        assert create_default_store().path == tmp_path / "env.json"

    def test_default_path(self) -> None:
        assert create_default_store().path == DEFAULT_STORE_PATH
