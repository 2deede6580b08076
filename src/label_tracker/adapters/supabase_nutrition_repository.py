"""Supabase repository for daily nutrition records."""

from dataclasses import dataclass
from datetime import UTC, date, datetime

from supabase import Client

from label_tracker.domain.records import NutritionRecord
from label_tracker.services.tracking import NutritionRecordRepository

_COLUMNS = (
    "user_id, date, calories, fat, protein, carbs, "
    "daily_calories, daily_fat, daily_protein, daily_carbs"
)


@dataclass
class SupabaseNutritionRecordRepository(NutritionRecordRepository):
    """Supabase implementation for nutrition record persistence."""

    client: Client
    table_name: str = "nutrition_records"

    def get_record(self, user_id: str, day: date) -> NutritionRecord | None:
        """Return the record for a user and day, if present."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_record(self, record: NutritionRecord) -> NutritionRecord:
        """Insert a new record and return the stored row."""
        now = datetime.now(tz=UTC).isoformat()
        payload = {
            "user_id": record.user_id,
            "date": record.day.isoformat(),
            **_totals_payload(record),
            "daily_calories": record.daily_calories,
            "daily_fat": record.daily_fat,
            "daily_protein": record.daily_protein,
            "daily_carbs": record.daily_carbs,
            "created_at": now,
            "updated_at": now,
        }
        response = self.client.table(self.table_name).insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create nutrition record in Supabase")
        return _parse_row(response.data[0])

    def update_totals(self, record: NutritionRecord) -> NutritionRecord:
        """Persist the consumed totals of an existing record."""
        response = (
            self.client.table(self.table_name)
            .update(
                {
                    **_totals_payload(record),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("user_id", record.user_id)
            .eq("date", record.day.isoformat())
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update nutrition record in Supabase")
        return _parse_row(response.data[0])


def _totals_payload(record: NutritionRecord) -> dict[str, float]:
    return {
        "calories": record.calories,
        "fat": record.fat,
        "protein": record.protein,
        "carbs": record.carbs,
    }


def _parse_row(row: dict[str, object]) -> NutritionRecord:
    return NutritionRecord(
        user_id=str(row["user_id"]),
        day=date.fromisoformat(str(row["date"])[:10]),
        calories=float(row.get("calories") or 0.0),
        fat=float(row.get("fat") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        daily_calories=float(row.get("daily_calories") or 0.0),
        daily_fat=float(row.get("daily_fat") or 0.0),
        daily_protein=float(row.get("daily_protein") or 0.0),
        daily_carbs=float(row.get("daily_carbs") or 0.0),
    )
