"""Tests for the command-line entry point."""

import logging
from datetime import date

import pytest
from click.testing import CliRunner
from pydantic import ValidationError
from supabase import SupabaseException

from label_tracker import main as main_module
from label_tracker.main import NO_ITEMS_MESSAGE, main
from tests.conftest import FailingNutritionRecordRepository, make_record, read_payload

DAY = date(2024, 1, 1)


@pytest.fixture(autouse=True)
def _environment(monkeypatch):  # type: ignore[no-untyped-def]
    monkeypatch.setenv("AZURE_VISION_KEY", "azure-key")
    monkeypatch.setenv("AZURE_VISION_ENDPOINT", "https://vision.example.com")
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "service-key")
    monkeypatch.setattr(main_module, "today", lambda _tz: DAY)
    yield
    logging.getLogger("label_tracker").handlers.clear()


@pytest.fixture
def use_container(monkeypatch, container):  # type: ignore[no-untyped-def]
    monkeypatch.setattr(main_module, "build_container", lambda _settings: container)
    return container


def test_label_intake_updates_existing_record(
    use_container, record_repository, image_file
) -> None:
    record_repository.create_record(make_record(calories=100))

    result = CliRunner().invoke(main, input=f"u1\n{image_file}\n")

    assert result.exit_code == 0, result.output
    assert "Nutrition Label Tracker" in result.output
    assert "Extracted Nutrition Info: calories=250" in result.output
    assert "Updated nutrition data saved." in result.output
    assert "Remaining Nutrition: calories=1650" in result.output
    assert record_repository.records[("u1", DAY)].calories == 350


def test_first_intake_prompts_for_goals(
    use_container, record_repository, image_file
) -> None:
    result = CliRunner().invoke(
        main, input=f"new-user\n{image_file}\n2000\n70\n50\n300\n"
    )

    assert result.exit_code == 0, result.output
    assert "Enter your daily calories goal" in result.output
    assert "Enter your daily carbs goal (g)" in result.output
    assert "New nutrition data saved." in result.output
    assert "Remaining Nutrition: calories=1750, fat=60g, protein=45g, carbs=270g" in (
        result.output
    )
    stored = record_repository.records[("new-user", DAY)]
    assert stored.daily_carbs == 300


def test_unidentified_image_exits_cleanly(
    use_container, read_client, caption_client, record_repository, image_file
) -> None:
    read_client.payloads = [read_payload("succeeded", [])]
    caption_client.captions = ["a dog on the grass"]

    result = CliRunner().invoke(main, input=f"u1\n{image_file}\n")

    assert result.exit_code == 0
    assert NO_ITEMS_MESSAGE in result.output
    assert record_repository.records == {}


def test_recognition_failure_exits_with_error(
    use_container, read_client, image_file
) -> None:
    read_client.payloads = [read_payload("failed")]

    result = CliRunner().invoke(main, input=f"u1\n{image_file}\n")

    assert result.exit_code == 1


def test_persistence_failure_exits_with_error(
    use_container, image_file
) -> None:
    use_container.tracking_service.repository = FailingNutritionRecordRepository()

    result = CliRunner().invoke(main, input=f"u1\n{image_file}\n")

    assert result.exit_code == 1


def test_missing_configuration_exits_with_error(monkeypatch) -> None:
    monkeypatch.delenv("AZURE_VISION_KEY")

    result = CliRunner().invoke(main, input="u1\nlabel.jpg\n")

    assert result.exit_code == 1


def test_malformed_read_payload_is_logged_and_exits_with_error(
    use_container, read_client, record_repository, image_file
) -> None:
    read_client.payloads = [{"unexpected": "shape"}]

    result = CliRunner().invoke(main, input=f"u1\n{image_file}\n")

    assert result.exit_code == 1
    assert not isinstance(result.exception, ValidationError)
    assert "Error processing the image" in result.output
    assert record_repository.records == {}


def test_invalid_timezone_exits_before_prompting(monkeypatch) -> None:
    monkeypatch.setenv("TIMEZONE", "Mars/Olympus")

    result = CliRunner().invoke(main, input="u1\nlabel.jpg\n")

    assert result.exit_code == 1
    assert "Enter your User ID" not in result.output
    assert "Invalid configuration" in result.output


def test_service_initialization_failure_exits_with_error(monkeypatch) -> None:
    def failing_build(_settings):  # type: ignore[no-untyped-def]
        raise SupabaseException("Invalid URL")

    monkeypatch.setattr(main_module, "build_container", failing_build)

    result = CliRunner().invoke(main, input="u1\nlabel.jpg\n")

    assert result.exit_code == 1
    assert "Failed to initialize services" in result.output
