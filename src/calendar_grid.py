from dataclasses import dataclass
from datetime import date, timedelta

from src.cycle import calculate_cycle_phase, get_flow_color, get_phase_color
from src.entries import entry_for_date
from src.models import CycleModel, LogEntry, PhaseResult

GRID_SIZE = 42  # six weeks

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True)
class CalendarDay:
    date: date
    day_info: PhaseResult
    entry: LogEntry | None
    is_current_month: bool
    is_today: bool
    phase_color: str
    flow_color: str | None


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int
    title: str
    days: list[CalendarDay]


def grid_start(year: int, month: int) -> date:
    """Return the Sunday on or before the first of the month."""
    first = date(year, month, 1)
    # weekday(): Monday=0 .. Sunday=6
    return first - timedelta(days=(first.weekday() + 1) % 7)


def shift_month(year: int, month: int, step: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + step
    return index // 12, index % 12 + 1


def build_month(
    year: int,
    month: int,
    model: CycleModel,
    entries: list[LogEntry],
    today: date | None = None,
) -> CalendarMonth:
    """Compute the six-week grid shown for ``year``/``month``."""
    today = today or date.today()
    start = grid_start(year, month)
    days = []
    for offset in range(GRID_SIZE):
        day = start + timedelta(days=offset)
        info = calculate_cycle_phase(
            day, model.last_period_start, model.cycle_length, model.period_length
        )
        entry = entry_for_date(entries, day)
        days.append(
            CalendarDay(
                date=day,
                day_info=info,
                entry=entry,
                is_current_month=day.month == month,
                is_today=day == today,
                phase_color=get_phase_color(info.phase),
                flow_color=get_flow_color(entry.flow) if entry else None,
            )
        )
    return CalendarMonth(
        year=year,
        month=month,
        title=f"{MONTH_NAMES[month - 1]} {year}",
        days=days,
    )
