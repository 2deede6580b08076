"""Interactive command-line entry point."""

import asyncio
import logging
import sys
from dataclasses import dataclass

import click
from supabase import SupabaseException

from label_tracker.app_logging import configure_logging
from label_tracker.config import Settings
from label_tracker.containers import AppContainer, build_container
from label_tracker.domain.nutrition import NutritionInfo
from label_tracker.domain.records import DailyGoals, NutritionRecord, TrackingResult
from label_tracker.errors import LabelTrackerError
from label_tracker.services.analysis import AnalysisResult
from label_tracker.services.tracking import today

NO_ITEMS_MESSAGE = (
    "Could not extract nutritional information or identify items. "
    "Please upload a valid image."
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntakeRequest:
    """User input for one tracking run."""

    user_id: str
    image_path: str


def collect_intake_request() -> IntakeRequest:
    """Prompt for the user id and image path."""
    user_id = click.prompt("Enter your User ID", type=str).strip()
    image_path = click.prompt("Enter the image path", type=str).strip()
    return IntakeRequest(user_id=user_id, image_path=image_path)


def collect_daily_goals() -> DailyGoals:
    """Prompt for the four daily goals."""
    return DailyGoals(
        calories=click.prompt("Enter your daily calories goal", type=int),
        fat=click.prompt("Enter your daily fat goal (g)", type=int),
        protein=click.prompt("Enter your daily protein goal (g)", type=int),
        carbs=click.prompt("Enter your daily carbs goal (g)", type=int),
    )


def format_nutrition(info: NutritionInfo) -> str:
    """Render a nutrition vector for the console."""
    return (
        f"calories={info.calories:g}, fat={info.fat:g}g, "
        f"protein={info.protein:g}g, carbs={info.carbs:g}g"
    )


def format_record(record: NutritionRecord) -> str:
    """Render a stored record with consumed totals and goals."""
    goals = NutritionInfo(
        calories=record.daily_calories,
        fat=record.daily_fat,
        protein=record.daily_protein,
        carbs=record.daily_carbs,
    )
    return (
        f"user={record.user_id} date={record.day.isoformat()} "
        f"consumed: {format_nutrition(record.consumed())} | "
        f"goals: {format_nutrition(goals)}"
    )


async def _analyze(container: AppContainer, image_path: str) -> AnalysisResult:
    try:
        return await container.analysis_service.analyze(image_path)
    finally:
        await container.close_resources()


def run(container: AppContainer, request: IntakeRequest) -> int:
    """Analyze the image, record the intake and return a process exit code."""
    try:
        result = asyncio.run(_analyze(container, request.image_path))
        click.echo(f"Recognized Text: {result.text}")
        if result.nutrition is None:
            click.echo(f"Image Description: {result.description}")
            click.echo(NO_ITEMS_MESSAGE)
            return 0
        if result.source == "estimate":
            click.echo(f"Image Description: {result.description}")
            click.echo(
                "Calculated Approximate Nutrition Info: "
                + format_nutrition(result.nutrition)
            )
        else:
            click.echo(
                "Extracted Nutrition Info: " + format_nutrition(result.nutrition)
            )

        tracking = container.tracking_service.record_intake(
            request.user_id,
            today(container.settings.timezone),
            result.nutrition,
            collect_daily_goals,
        )
    except LabelTrackerError as exc:
        _logger.error("Error processing the image: %s", exc)
        return 1

    _report(tracking)
    return 0


def _report(tracking: TrackingResult) -> None:
    if tracking.created:
        click.echo("New nutrition data saved.")
        click.echo(f"New Data: {format_record(tracking.record)}")
    else:
        click.echo("Updated nutrition data saved.")
        click.echo(f"Updated Data: {format_record(tracking.record)}")
    click.echo(f"Remaining Nutrition: {format_nutrition(tracking.remaining)}")


@click.command()
def main() -> None:
    """Track calories and macros from a food label or grocery photo."""
    click.echo("Nutrition Label Tracker")
    try:
        settings = Settings()
    except ValueError as exc:
        configure_logging()
        _logger.error("Invalid configuration: %s", exc)
        sys.exit(1)

    configure_logging(settings.debug)
    request = collect_intake_request()
    try:
        container = build_container(settings)
    except (ValueError, OSError, SupabaseException) as exc:
        _logger.error("Failed to initialize services: %s", exc)
        sys.exit(1)
    _logger.info("Connected to services (environment=%s)", settings.environment)
    sys.exit(run(container, request))
