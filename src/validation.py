"""Precondition checks applied before calling the cycle engine.

The engine in ``src.cycle`` is total and does not validate its input; callers
that take cycle configuration from users go through this module instead.
"""

from dataclasses import dataclass
from datetime import date

from src.cycle import calculate_cycle_phase, get_predicted_periods
from src.models import CycleModel, PhaseResult

# Range accepted from interactive input.
MIN_CYCLE_LENGTH = 20
MAX_CYCLE_LENGTH = 45


@dataclass(frozen=True)
class ValidationFailure:
    field: str
    message: str


class InvalidCycleModel(ValueError):
    def __init__(self, failures):
        self.failures = tuple(failures)
        super().__init__("; ".join(f"{f.field}: {f.message}" for f in self.failures))


def check_cycle_model(model: CycleModel) -> list[ValidationFailure]:
    """Return every violated precondition of ``model`` (empty when valid)."""
    failures = []
    if model.cycle_length <= 0:
        failures.append(ValidationFailure("cycle_length", "must be positive"))
    if model.average_cycle_length <= 0:
        failures.append(ValidationFailure("average_cycle_length", "must be positive"))
    if model.period_length < 1:
        failures.append(ValidationFailure("period_length", "must be at least 1"))
    if model.period_length >= model.cycle_length:
        failures.append(ValidationFailure("period_length", "must be shorter than cycle_length"))
    return failures


def check_months_ahead(months_ahead: int) -> list[ValidationFailure]:
    if months_ahead < 1:
        return [ValidationFailure("months_ahead", "must be at least 1")]
    return []


def check_user_cycle_length(cycle_length: int) -> list[ValidationFailure]:
    if not MIN_CYCLE_LENGTH <= cycle_length <= MAX_CYCLE_LENGTH:
        return [
            ValidationFailure(
                "cycle_length",
                f"must be between {MIN_CYCLE_LENGTH} and {MAX_CYCLE_LENGTH} days",
            )
        ]
    return []


def validate_cycle_model(model: CycleModel) -> CycleModel:
    failures = check_cycle_model(model)
    if failures:
        raise InvalidCycleModel(failures)
    return model


def checked_cycle_phase(day: date, model: CycleModel) -> PhaseResult:
    validate_cycle_model(model)
    return calculate_cycle_phase(
        day, model.last_period_start, model.cycle_length, model.period_length
    )


def checked_predicted_periods(model: CycleModel, months_ahead: int = 3) -> list[date]:
    failures = check_cycle_model(model) + check_months_ahead(months_ahead)
    if failures:
        raise InvalidCycleModel(failures)
    return get_predicted_periods(model, months_ahead)
