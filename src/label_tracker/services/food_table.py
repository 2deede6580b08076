"""Reference table of per-unit nutrition facts."""

import json
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter

from label_tracker.domain.nutrition import NutritionInfo

DEFAULT_TABLE_PATH = (
    Path(__file__).resolve().parents[1] / "data" / "food_nutrition.json"
)

FoodNutritionTable = dict[str, NutritionInfo]


class _FoodFacts(BaseModel):
    calories: float = Field(ge=0)
    fat: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)


_TABLE_ADAPTER = TypeAdapter(dict[str, _FoodFacts])


def parse_food_table(raw: object) -> FoodNutritionTable:
    """Validate raw JSON data and key it by lower-case item name."""
    facts = _TABLE_ADAPTER.validate_python(raw)
    return {
        name.strip().lower(): NutritionInfo(
            calories=item.calories,
            fat=item.fat,
            protein=item.protein,
            carbs=item.carbs,
        )
        for name, item in facts.items()
    }


def load_food_table(path: str | Path | None = None) -> FoodNutritionTable:
    """Load the table from a JSON file, defaulting to the packaged data."""
    resolved = Path(path) if path else DEFAULT_TABLE_PATH
    with resolved.open(encoding="utf-8") as handle:
        return parse_food_table(json.load(handle))
