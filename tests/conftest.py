import os

# Set test environment variables before any source imports
os.environ.setdefault("ANTHROPIC_API_KEY", "test-api-key")
os.environ.setdefault("TIMEZONE", "UTC")
os.environ.setdefault("REMINDER_HOUR", "9")

from datetime import date, datetime, timezone

import pytest
from unittest.mock import MagicMock

from src.models import CycleModel, Flow, LogEntry
from src.notifications import default_preferences


@pytest.fixture
def model():
    """28-day cycle, 5-day period, last period started 11 June 2025."""
    return CycleModel(
        cycle_length=28,
        period_length=5,
        last_period_start=date(2025, 6, 11),
        average_cycle_length=28,
    )


@pytest.fixture
def make_entry():
    """Factory creating a LogEntry for an ISO date."""
    def _factory(day="2025-06-11", flow=Flow.MEDIUM, symptoms=(), first_day=False, **kwargs):
        return LogEntry(
            date=date.fromisoformat(day),
            flow=flow,
            symptoms=tuple(symptoms),
            is_first_day_of_cycle=first_day,
            **kwargs,
        )
    return _factory


@pytest.fixture
def prefs():
    return default_preferences("user-1")


@pytest.fixture
def now():
    """Noon UTC on 12 June 2025, the second day of the fixture cycle."""
    return datetime(2025, 6, 12, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_anthropic_response():
    """Factory returning mock Anthropic response with given text."""
    def _factory(text="Test response"):
        response = MagicMock()
        block = MagicMock()
        block.text = text
        response.content = [block]
        return response
    return _factory
