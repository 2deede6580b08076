"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutritionInfo:
    """Calories and macronutrients for a label, an item or a day."""

    calories: float
    fat: float
    protein: float
    carbs: float

    @classmethod
    def zero(cls) -> "NutritionInfo":
        """Return an all-zero nutrition vector."""
        return cls(calories=0, fat=0, protein=0, carbs=0)

    def is_empty(self) -> bool:
        """Return True when every field is zero."""
        return (
            self.calories == 0
            and self.fat == 0
            and self.protein == 0
            and self.carbs == 0
        )

    def scaled(self, count: int) -> "NutritionInfo":
        """Return the vector multiplied by a unit count."""
        return NutritionInfo(
            calories=self.calories * count,
            fat=self.fat * count,
            protein=self.protein * count,
            carbs=self.carbs * count,
        )

    def __add__(self, other: "NutritionInfo") -> "NutritionInfo":
        return NutritionInfo(
            calories=self.calories + other.calories,
            fat=self.fat + other.fat,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
        )


@dataclass(frozen=True)
class IdentifiedItem:
    """Food item detected in an image description with an estimated count."""

    name: str
    count: int
