"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from label_tracker.adapters.azure_vision_client import AzureVisionClient
from label_tracker.adapters.openai_vision_client import OpenAICaptionClient
from label_tracker.adapters.supabase_nutrition_repository import (
    SupabaseNutritionRecordRepository,
)
from label_tracker.config import Settings
from label_tracker.services.analysis import LabelAnalysisService
from label_tracker.services.description import CaptionClient, ImageDescriptionService
from label_tracker.services.food_table import FoodNutritionTable, load_food_table
from label_tracker.services.items import ItemIdentifier
from label_tracker.services.recognition import TextRecognitionService
from label_tracker.services.tracking import NutritionTrackingService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_table: FoodNutritionTable
    analysis_service: LabelAnalysisService
    tracking_service: NutritionTrackingService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    food_table = load_food_table(resolved_settings.food_table_path)

    azure_client = AzureVisionClient.create(
        endpoint=resolved_settings.azure_vision_endpoint,
        api_key=resolved_settings.azure_vision_key,
        api_version=resolved_settings.azure_vision_api_version,
        timeout_seconds=resolved_settings.http_timeout_seconds,
    )
    caption_client: CaptionClient = azure_client
    openai_client: OpenAICaptionClient | None = None
    if resolved_settings.caption_backend == "openai":
        if not resolved_settings.openai_api_key:
            raise ValueError("OPENAI_API_KEY is required for caption_backend=openai")
        openai_client = OpenAICaptionClient.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
        )
        caption_client = openai_client

    analysis_service = LabelAnalysisService(
        recognition_service=TextRecognitionService(
            client=azure_client,
            poll_interval_seconds=resolved_settings.ocr_poll_interval_seconds,
            max_poll_attempts=resolved_settings.ocr_max_poll_attempts,
        ),
        description_service=ImageDescriptionService(caption_client),
        food_table=food_table,
        identifier=ItemIdentifier(food_table),
    )

    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    tracking_service = NutritionTrackingService(
        SupabaseNutritionRecordRepository(
            supabase_client, table_name=resolved_settings.nutrition_table
        )
    )

    async def close_resources() -> None:
        await azure_client.close()
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        food_table=food_table,
        analysis_service=analysis_service,
        tracking_service=tracking_service,
        close_resources=close_resources,
    )
