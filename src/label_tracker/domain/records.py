"""Domain models for daily nutrition records."""

from dataclasses import dataclass, replace
from datetime import date

from label_tracker.domain.nutrition import NutritionInfo


@dataclass(frozen=True)
class DailyGoals:
    """User-supplied daily targets."""

    calories: int
    fat: int
    protein: int
    carbs: int


@dataclass(frozen=True)
class NutritionRecord:
    """Consumption and goals for one user on one day."""

    user_id: str
    day: date
    calories: float
    fat: float
    protein: float
    carbs: float
    daily_calories: float
    daily_fat: float
    daily_protein: float
    daily_carbs: float

    @classmethod
    def start(
        cls, user_id: str, day: date, consumed: NutritionInfo, goals: DailyGoals
    ) -> "NutritionRecord":
        """Build the first record of the day from an intake and goals."""
        return cls(
            user_id=user_id,
            day=day,
            calories=consumed.calories,
            fat=consumed.fat,
            protein=consumed.protein,
            carbs=consumed.carbs,
            daily_calories=goals.calories,
            daily_fat=goals.fat,
            daily_protein=goals.protein,
            daily_carbs=goals.carbs,
        )

    def consumed(self) -> NutritionInfo:
        """Return the totals consumed so far."""
        return NutritionInfo(
            calories=self.calories,
            fat=self.fat,
            protein=self.protein,
            carbs=self.carbs,
        )

    def with_added(self, intake: NutritionInfo) -> "NutritionRecord":
        """Return a copy with an intake added to the consumed totals."""
        total = self.consumed() + intake
        return replace(
            self,
            calories=total.calories,
            fat=total.fat,
            protein=total.protein,
            carbs=total.carbs,
        )

    def remaining(self) -> NutritionInfo:
        """Return goal minus consumed per field; negative when over budget."""
        return NutritionInfo(
            calories=self.daily_calories - self.calories,
            fat=self.daily_fat - self.fat,
            protein=self.daily_protein - self.protein,
            carbs=self.daily_carbs - self.carbs,
        )


@dataclass(frozen=True)
class TrackingResult:
    """Outcome of recording an intake."""

    record: NutritionRecord
    remaining: NutritionInfo
    created: bool
