"""JSON-file persistence for saved estimates."""

from __future__ import annotations

import logging
import os
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from nirman.exceptions import EstimateNotFoundError, EstimateStoreError
from nirman.models.estimate import SavedEstimate

if TYPE_CHECKING:
    from nirman.models.estimate import ProjectEstimate

logger = logging.getLogger(__name__)

_SAVED_LIST = TypeAdapter(list[SavedEstimate])


class EstimateStore:
    """Saved estimates kept in a single JSON file, newest first.

    The whole file is rewritten on every change (via a temporary file and
    an atomic rename). ``id`` and ``saved_at`` are assigned here; the
    estimate itself is stored unchanged.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> list[SavedEstimate]:
        if not self._path.exists():
            return []
        try:
            return _SAVED_LIST.validate_json(self._path.read_bytes())
        except (OSError, ValidationError) as exc:
            msg = f"Could not read saved estimates from {self._path}: {exc}"
            raise EstimateStoreError(msg) from exc

    def _write(self, saved: list[SavedEstimate]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(_SAVED_LIST.dump_json(saved, indent=2))
            os.replace(tmp_path, self._path)
        except OSError as exc:
            msg = f"Could not write saved estimates to {self._path}: {exc}"
            raise EstimateStoreError(msg) from exc

    def save(self, estimate: ProjectEstimate) -> SavedEstimate:
        """Store an estimate snapshot and return it with its new id."""
        saved = SavedEstimate(
            id=uuid.uuid4().hex,
            saved_at=datetime.now(UTC),
            estimate=estimate,
        )
        self._write([saved, *self._read()])
        logger.info("Saved estimate %s (total %d INR)", saved.id, estimate.total_cost)
        return saved

    def list_saved(self) -> list[SavedEstimate]:
        return self._read()

    def get(self, estimate_id: str) -> SavedEstimate:
        for saved in self._read():
            if saved.id == estimate_id:
                return saved
        msg = f"No saved estimate with id '{estimate_id}'"
        raise EstimateNotFoundError(msg)

    def delete(self, estimate_id: str) -> None:
        saved = self._read()
        remaining = [item for item in saved if item.id != estimate_id]
        if len(remaining) == len(saved):
            msg = f"No saved estimate with id '{estimate_id}'"
            raise EstimateNotFoundError(msg)
        self._write(remaining)
        logger.info("Deleted saved estimate %s", estimate_id)
