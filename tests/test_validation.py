from datetime import date

import pytest

from src.models import CycleModel, Phase
from src.validation import (
    InvalidCycleModel,
    ValidationFailure,
    check_cycle_model,
    check_months_ahead,
    check_user_cycle_length,
    checked_cycle_phase,
    checked_predicted_periods,
    validate_cycle_model,
)


def _model(cycle_length=28, period_length=5, average_cycle_length=28):
    return CycleModel(cycle_length, period_length, date(2025, 6, 11), average_cycle_length)


class TestCheckCycleModel:
    def test_valid(self, model):
        assert check_cycle_model(model) == []

    def test_non_positive_cycle_length(self):
        failures = check_cycle_model(_model(cycle_length=0, period_length=1))
        assert ValidationFailure("cycle_length", "must be positive") in failures

    def test_non_positive_average(self):
        failures = check_cycle_model(_model(average_cycle_length=-1))
        assert [f.field for f in failures] == ["average_cycle_length"]

    def test_period_not_shorter_than_cycle(self):
        failures = check_cycle_model(_model(cycle_length=5, period_length=5))
        assert [f.field for f in failures] == ["period_length"]

    def test_zero_period_length(self):
        failures = check_cycle_model(_model(period_length=0))
        assert [f.field for f in failures] == ["period_length"]

    def test_reports_every_failure(self):
        failures = check_cycle_model(_model(cycle_length=0, period_length=0, average_cycle_length=0))
        assert len(failures) == 4


class TestCheckMonthsAhead:
    def test_valid(self):
        assert check_months_ahead(1) == []

    def test_zero(self):
        assert check_months_ahead(0)[0].field == "months_ahead"


class TestCheckUserCycleLength:
    def test_bounds_inclusive(self):
        assert check_user_cycle_length(20) == []
        assert check_user_cycle_length(45) == []

    def test_out_of_range(self):
        failure = check_user_cycle_length(19)[0]
        assert "between 20 and 45" in failure.message
        assert check_user_cycle_length(46)


class TestValidateCycleModel:
    def test_returns_model(self, model):
        assert validate_cycle_model(model) is model

    def test_raises_with_failures(self):
        with pytest.raises(InvalidCycleModel) as exc_info:
            validate_cycle_model(_model(cycle_length=4, period_length=5))
        assert exc_info.value.failures[0].field == "period_length"
        assert "period_length" in str(exc_info.value)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            validate_cycle_model(_model(cycle_length=0, period_length=1))


class TestCheckedOperations:
    def test_cycle_phase(self, model):
        result = checked_cycle_phase(date(2025, 6, 24), model)
        assert result.phase == Phase.OVULATION
        assert result.is_ovulation

    def test_cycle_phase_rejects_zero_cycle(self):
        with pytest.raises(InvalidCycleModel):
            checked_cycle_phase(date(2025, 6, 24), _model(cycle_length=0, period_length=1))

    def test_predicted_periods(self, model):
        assert checked_predicted_periods(model, 1) == [date(2025, 7, 9)]

    def test_predicted_periods_rejects_zero_count(self, model):
        with pytest.raises(InvalidCycleModel) as exc_info:
            checked_predicted_periods(model, 0)
        assert exc_info.value.failures[0].field == "months_ahead"
