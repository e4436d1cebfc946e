from dataclasses import dataclass, field
from datetime import date, timedelta

from src.cycle import (
    PMS_LENGTH,
    calculate_cycle_phase,
    days_until,
    get_ovulation_day,
    get_predicted_periods,
)
from src.entries import latest_first_day, top_symptoms
from src.models import CycleModel, LogEntry, Phase


@dataclass(frozen=True)
class CycleInsights:
    current_phase: Phase
    day_of_cycle: int
    days_until_next_period: int
    cycle_progress: float
    total_entries: int
    top_symptoms: list[tuple[str, int]] = field(default_factory=list)
    next_periods: list[date] = field(default_factory=list)


@dataclass(frozen=True)
class KeyDates:
    cycle_start: date
    next_period: date
    ovulation: date
    pms_start: date


def get_cycle_insights(
    model: CycleModel, entries: list[LogEntry], today: date | None = None
) -> CycleInsights:
    """Summarize where ``today`` sits in the cycle and what the log shows."""
    today = today or date.today()
    current = calculate_cycle_phase(
        today, model.last_period_start, model.cycle_length, model.period_length
    )
    next_periods = get_predicted_periods(model, 2)
    return CycleInsights(
        current_phase=current.phase,
        day_of_cycle=current.day_of_cycle,
        days_until_next_period=days_until(next_periods[0], today),
        cycle_progress=(current.day_of_cycle - 1) / model.cycle_length * 100,
        total_entries=len(entries),
        top_symptoms=top_symptoms(entries),
        next_periods=next_periods,
    )


def get_key_dates(
    model: CycleModel, entries: list[LogEntry], default_start: date
) -> KeyDates:
    """Key dates of the cycle started by the newest logged first day.

    Falls back to ``default_start`` when no entry marks a cycle start.
    """
    start = latest_first_day(entries) or default_start
    return KeyDates(
        cycle_start=start,
        next_period=start + timedelta(days=model.cycle_length),
        ovulation=start + timedelta(days=get_ovulation_day(model.cycle_length) - 1),
        pms_start=start + timedelta(days=model.cycle_length - PMS_LENGTH),
    )
