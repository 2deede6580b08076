"""Daily nutrition tracking against stored goals."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from label_tracker.domain.nutrition import NutritionInfo
from label_tracker.domain.records import DailyGoals, NutritionRecord, TrackingResult
from label_tracker.errors import PersistenceError

_logger = logging.getLogger(__name__)


class NutritionRecordRepository(Protocol):
    """Persistence interface for daily nutrition records."""

    def get_record(self, user_id: str, day: date) -> NutritionRecord | None:
        """Return the record for a user and day, if present."""

    def create_record(self, record: NutritionRecord) -> NutritionRecord:
        """Create and return a new record."""

    def update_totals(self, record: NutritionRecord) -> NutritionRecord:
        """Persist updated consumed totals and return the stored record."""


@dataclass
class NutritionTrackingService:
    """Adds intakes to the user's record for the day."""

    repository: NutritionRecordRepository

    def record_intake(
        self,
        user_id: str,
        day: date,
        intake: NutritionInfo,
        goals_provider: Callable[[], DailyGoals],
    ) -> TrackingResult:
        """Add an intake to the day's record, creating it with goals if missing."""
        existing = self._call(
            lambda: self.repository.get_record(user_id, day), action="lookup"
        )
        if existing is not None:
            updated = existing.with_added(intake)
            stored = self._call(
                lambda: self.repository.update_totals(updated), action="update"
            )
            _logger.info("Updated nutrition record for %s on %s", user_id, day)
            return TrackingResult(
                record=stored, remaining=stored.remaining(), created=False
            )

        goals = goals_provider()
        record = NutritionRecord.start(user_id, day, intake, goals)
        stored = self._call(
            lambda: self.repository.create_record(record), action="create"
        )
        _logger.info("Created nutrition record for %s on %s", user_id, day)
        return TrackingResult(
            record=stored, remaining=stored.remaining(), created=True
        )

    def _call(
        self, func: Callable[[], NutritionRecord | None], *, action: str
    ) -> NutritionRecord | None:
        try:
            return func()
        except Exception as exc:
            raise PersistenceError(f"Nutrition record {action} failed: {exc}") from exc


def today(timezone_name: str = "UTC") -> date:
    """Return the current date in the given timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).date()
