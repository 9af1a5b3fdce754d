"""JSON file persistence for accumulated state totals."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .models import PersistedTotals

logger = logging.getLogger(__name__)


class TotalsRecord(BaseModel):
    """On-disk shape of the totals file."""

    total_running_time: float = Field(default=0.0, ge=0.0, alias="totalRunningTime")
    total_screen_off_time: float = Field(default=0.0, ge=0.0, alias="totalScreenOffTime")
    total_unlocked_time: float = Field(default=0.0, ge=0.0, alias="totalUnlockedTime")

    model_config = ConfigDict(populate_by_name=True, extra="ignore", allow_inf_nan=False)

    @classmethod
    def from_totals(cls, totals: PersistedTotals) -> "TotalsRecord":
        return cls(
            total_running_time=totals.total_running_time,
            total_screen_off_time=totals.total_screen_off_time,
            total_unlocked_time=totals.total_unlocked_time,
        )

    def to_totals(self) -> PersistedTotals:
        return PersistedTotals(
            total_running_time=self.total_running_time,
            total_screen_off_time=self.total_screen_off_time,
            total_unlocked_time=self.total_unlocked_time,
        )


class TotalsStore:
    """Loads and saves :class:`PersistedTotals` at a fixed path.

    Neither operation raises: a missing or corrupt file loads as zeroed
    totals, and a failed write is logged and reported through the return
    value of :meth:`save`.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> PersistedTotals:
        if not self.path.exists():
            logger.info("No totals file at %s; starting from zero.", self.path)
            return PersistedTotals()

        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.warning("Failed to read totals from %s; starting from zero.", self.path, exc_info=True)
            return PersistedTotals()

        try:
            record = TotalsRecord.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Discarding corrupt totals file %s (%d errors); starting from zero.",
                self.path,
                exc.error_count(),
            )
            return PersistedTotals()

        totals = record.to_totals()
        logger.info(
            "Loaded totals: running=%.1fs screen_off=%.1fs unlocked=%.1fs",
            totals.total_running_time,
            totals.total_screen_off_time,
            totals.total_unlocked_time,
        )
        return totals

    def save(self, totals: PersistedTotals) -> bool:
        try:
            payload = TotalsRecord.from_totals(totals).model_dump_json(by_alias=True)
        except ValidationError:
            logger.error("Refusing to save non-finite or negative totals: %s", totals)
            return False
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError:
            logger.exception("Failed to save totals to %s", self.path)
            return False
        finally:
            if tmp_name is not None:
                _discard(Path(tmp_name))

        logger.debug(
            "Saved totals: running=%.1fs screen_off=%.1fs unlocked=%.1fs",
            totals.total_running_time,
            totals.total_screen_off_time,
            totals.total_unlocked_time,
        )
        return True


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except OSError:
        logger.debug("Could not remove temporary file %s", path)
