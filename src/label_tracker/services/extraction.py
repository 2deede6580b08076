"""Label text parsing."""

import re

from label_tracker.domain.nutrition import NutritionInfo

_PATTERNS = {
    "calories": re.compile(r"calories\s+(\d+)", re.IGNORECASE),
    "fat": re.compile(r"total\s+fat\s+(\d+)", re.IGNORECASE),
    "protein": re.compile(r"protein\s+(\d+)", re.IGNORECASE),
    "carbs": re.compile(r"carbohydrate\s+(\d+)", re.IGNORECASE),
}


def extract_nutrition(text: str) -> NutritionInfo:
    """Parse the first labeled value of each field; missing fields are zero.

    An all-zero result means nothing was found and triggers the description
    fallback, even for a label that really lists zeros.
    """
    values: dict[str, int] = {}
    for field, pattern in _PATTERNS.items():
        match = pattern.search(text)
        values[field] = int(match.group(1)) if match else 0
    return NutritionInfo(**values)
