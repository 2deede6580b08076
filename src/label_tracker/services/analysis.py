"""Label analysis with a description-based fallback."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from label_tracker.domain.nutrition import IdentifiedItem, NutritionInfo
from label_tracker.errors import ServiceSubmissionError
from label_tracker.services.description import ImageDescriptionService
from label_tracker.services.extraction import extract_nutrition
from label_tracker.services.food_table import FoodNutritionTable
from label_tracker.services.items import ItemIdentifier, aggregate_nutrition
from label_tracker.services.recognition import TextRecognitionService

_logger = logging.getLogger(__name__)

NutritionSource = Literal["label", "estimate", "none"]


@dataclass
class AnalysisResult:
    """Nutrition found for an image and how it was obtained."""

    nutrition: NutritionInfo | None
    source: NutritionSource
    text: str
    description: str | None = None
    items: list[IdentifiedItem] = field(default_factory=list)


@dataclass
class LabelAnalysisService:
    """Reads a label, falling back to item estimation from a caption."""

    recognition_service: TextRecognitionService
    description_service: ImageDescriptionService
    food_table: FoodNutritionTable
    identifier: ItemIdentifier

    async def analyze(self, image_path: str | Path) -> AnalysisResult:
        """Return label nutrition, an estimate, or a result without nutrition."""
        image_bytes = _read_image(image_path)
        _logger.info("Processing image: %s", Path(image_path).name)

        text = await self.recognition_service.recognize(image_bytes)
        _logger.debug("Recognized text: %s", text)
        nutrition = extract_nutrition(text)
        if not nutrition.is_empty():
            return AnalysisResult(nutrition=nutrition, source="label", text=text)

        _logger.info("No label values found; describing the image instead")
        description = await self.description_service.describe(image_bytes)
        items = self.identifier.identify(description)
        if not items:
            return AnalysisResult(
                nutrition=None, source="none", text=text, description=description
            )
        return AnalysisResult(
            nutrition=aggregate_nutrition(items, self.food_table),
            source="estimate",
            text=text,
            description=description,
            items=items,
        )


def _read_image(image_path: str | Path) -> bytes:
    try:
        return Path(image_path).expanduser().read_bytes()
    except OSError as exc:
        raise ServiceSubmissionError(f"Cannot read image {image_path}: {exc}") from exc
