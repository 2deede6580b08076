"""Food item identification from descriptions and nutrition estimates."""

import re
from dataclasses import dataclass

from label_tracker.domain.nutrition import IdentifiedItem, NutritionInfo
from label_tracker.services.food_table import FoodNutritionTable


@dataclass(frozen=True)
class CountRule:
    """Adds a fixed item count when a phrase appears in a description."""

    phrase: str
    item: str
    count: int

    def matches(self, description: str) -> bool:
        return self.phrase in description


DEFAULT_COUNT_RULES: tuple[CountRule, ...] = (
    CountRule(phrase="group of apples", item="apple", count=5),
)


@dataclass
class ItemIdentifier:
    """Finds known food names in a description and counts mentions."""

    table: FoodNutritionTable
    rules: tuple[CountRule, ...] = DEFAULT_COUNT_RULES

    def identify(self, description: str) -> list[IdentifiedItem]:
        """Return identified items; rule counts are added on top of name matches."""
        identified: list[IdentifiedItem] = []
        for name in self.table:
            pattern = re.compile(rf"\b{re.escape(name)}\b", re.IGNORECASE)
            count = len(pattern.findall(description))
            if count:
                identified.append(IdentifiedItem(name=name, count=count))

        for rule in self.rules:
            if rule.matches(description):
                identified.append(IdentifiedItem(name=rule.item, count=rule.count))
        return identified


def aggregate_nutrition(
    items: list[IdentifiedItem], table: FoodNutritionTable
) -> NutritionInfo:
    """Sum per-unit nutrition times count; unknown items are skipped."""
    total = NutritionInfo.zero()
    for item in items:
        facts = table.get(item.name)
        if facts is None:
            continue
        total = total + facts.scaled(item.count)
    return total
