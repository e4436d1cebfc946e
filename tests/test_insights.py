from datetime import date

import pytest

from src.cycle import calculate_cycle_phase
from src.insights import get_cycle_insights, get_key_dates
from src.models import Phase


class TestGetCycleInsights:
    def test_ovulation_day(self, model):
        insights = get_cycle_insights(model, [], today=date(2025, 6, 24))
        assert insights.current_phase == Phase.OVULATION
        assert insights.day_of_cycle == 14
        assert insights.days_until_next_period == 15
        assert insights.cycle_progress == pytest.approx(13 / 28 * 100)
        assert insights.next_periods == [date(2025, 7, 9), date(2025, 8, 6)]

    def test_first_day_progress_is_zero(self, model):
        insights = get_cycle_insights(model, [], today=date(2025, 6, 11))
        assert insights.cycle_progress == 0
        assert insights.current_phase == Phase.PERIOD

    def test_overdue_period_is_negative(self, model):
        insights = get_cycle_insights(model, [], today=date(2025, 7, 11))
        assert insights.days_until_next_period == -2

    def test_entry_summary(self, model, make_entry):
        entries = [
            make_entry("2025-06-11", symptoms=["Cramps"]),
            make_entry("2025-06-12", symptoms=["Cramps", "Bloating"]),
        ]
        insights = get_cycle_insights(model, entries, today=date(2025, 6, 12))
        assert insights.total_entries == 2
        assert insights.top_symptoms == [("Cramps", 2), ("Bloating", 1)]


class TestGetKeyDates:
    def test_default_start(self, model):
        dates = get_key_dates(model, [], default_start=date(2025, 6, 11))
        assert dates.cycle_start == date(2025, 6, 11)
        assert dates.next_period == date(2025, 7, 9)
        assert dates.ovulation == date(2025, 6, 24)
        assert dates.pms_start == date(2025, 7, 4)

    def test_uses_newest_first_day(self, model, make_entry):
        entries = [
            make_entry("2025-06-11", first_day=True),
            make_entry("2025-07-08", first_day=True),
        ]
        dates = get_key_dates(model, entries, default_start=date(2025, 1, 1))
        assert dates.cycle_start == date(2025, 7, 8)
        assert dates.next_period == date(2025, 8, 5)

    def test_dates_match_engine_phases(self, model):
        dates = get_key_dates(model, [], default_start=model.last_period_start)
        start = model.last_period_start
        assert calculate_cycle_phase(dates.ovulation, start, 28, 5).is_ovulation
        assert calculate_cycle_phase(dates.pms_start, start, 28, 5).phase == Phase.PMS
        assert calculate_cycle_phase(dates.next_period, start, 28, 5).day_of_cycle == 1
