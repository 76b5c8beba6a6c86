"""History of calculations with YAML persistence.

Results are stored newest first and capped at MAX_ENTRIES. Records are
reparsed through CalculationResult on load: timestamps come back as
datetimes and the totals are checked again.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from nominamx.models.result import CalculationResult

logger = logging.getLogger(__name__)

MAX_ENTRIES = 100

_READ_ERRORS = (OSError, yaml.YAMLError, ValidationError, ValueError)


class CalculationHistory:
    """Local history of calculation results, persisted in YAML."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else Path("data/historial.yaml")

    def _read(self) -> list[CalculationResult]:
        if not self.path.exists():
            return []

        with open(self.path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if not data:
            return []
        if not isinstance(data, list):
            raise ValueError("the history file must contain a list")
        return [CalculationResult.model_validate(d) for d in data]

    def _load(self) -> list[CalculationResult]:
        try:
            return self._read()
        except _READ_ERRORS as e:
            logger.error("Error loading calculation history %s: %s", self.path, e)
            return []

    def _write(self, results: list[CalculationResult]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = [r.model_dump(mode="json") for r in results]
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)

    @property
    def backup_path(self) -> Path:
        """Where an unreadable history file is moved before being replaced."""
        return self.path.with_name(self.path.name + ".bak")

    def save(self, result: CalculationResult) -> None:
        """Adds a result at the head of the history, keeping the newest MAX_ENTRIES.

        An unreadable history file is moved to backup_path, never overwritten.
        """
        try:
            results = self._read()
        except _READ_ERRORS as e:
            logger.warning(
                "Calculation history %s could not be read (%s); moved to %s, "
                "starting a new history",
                self.path, e, self.backup_path,
            )
            self.path.replace(self.backup_path)
            results = []

        results = [r for r in results if r.id != result.id]
        results.insert(0, result)
        self._write(results[:MAX_ENTRIES])
        logger.info("Calculation %s saved to %s", result.id, self.path)

    def list(self) -> list[CalculationResult]:
        """All results, newest first."""
        return self._load()

    def get(self, result_id: str) -> CalculationResult | None:
        """Returns a result by its id, or None."""
        for result in self._load():
            if result.id == result_id:
                return result
        return None

    def delete(self, result_id: str) -> bool:
        """Deletes a result. Returns False if the id is unknown."""
        results = self._load()
        remaining = [r for r in results if r.id != result_id]
        if len(remaining) == len(results):
            return False
        self._write(remaining)
        return True

    def clear(self) -> None:
        """Deletes the whole history."""
        if self.path.exists():
            self.path.unlink()
