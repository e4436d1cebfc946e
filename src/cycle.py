from datetime import date, datetime, timedelta

from src.models import CycleModel, Flow, Phase, PhaseResult

# Ovulation falls on cycle day cycle_length - LUTEAL_PHASE_LENGTH for every cycle length.
LUTEAL_PHASE_LENGTH = 14
PMS_LENGTH = 5


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def get_ovulation_day(cycle_length: int) -> int:
    """Return the 1-based cycle day ovulation is expected on.

    Not clamped: cycles of 14 days or less give a non-positive day.
    """
    return cycle_length - LUTEAL_PHASE_LENGTH


def ovulation_date_for(period_start: date) -> date:
    """Return the expected ovulation date preceding a period start.

    Falls on the cycle day get_ovulation_day reports for the cycle ending the
    day before ``period_start``.
    """
    return _as_date(period_start) - timedelta(days=LUTEAL_PHASE_LENGTH + 1)


def get_day_of_cycle(day: date, last_period_start: date, cycle_length: int) -> int:
    """Return the 1-based position of ``day`` in its cycle, always in [1, cycle_length].

    Dates before ``last_period_start`` wrap backwards into the previous cycles.
    """
    days_diff = (_as_date(day) - _as_date(last_period_start)).days
    return days_diff % cycle_length + 1


def calculate_cycle_phase(
    day: date, last_period_start: date, cycle_length: int, period_length: int
) -> PhaseResult:
    """Classify ``day`` into a cycle phase.

    Medical model: ovulation falls LUTEAL_PHASE_LENGTH days before the next
    period, the ovulation phase spans two days either side of it and the
    fertile window runs from five days before to one day after.
    """
    day = _as_date(day)
    day_of_cycle = get_day_of_cycle(day, last_period_start, cycle_length)
    ovulation_day = get_ovulation_day(cycle_length)

    is_period = False
    is_ovulation = False
    is_fertile = False

    if day_of_cycle <= period_length:
        phase = Phase.PERIOD
        is_period = True
    elif day_of_cycle <= ovulation_day - 3:
        phase = Phase.FOLLICULAR
    elif ovulation_day - 2 <= day_of_cycle <= ovulation_day + 2:
        phase = Phase.OVULATION
        is_ovulation = day_of_cycle == ovulation_day
        is_fertile = True
    elif day_of_cycle <= cycle_length - PMS_LENGTH:
        phase = Phase.LUTEAL
    else:
        phase = Phase.PMS

    if ovulation_day - 5 <= day_of_cycle <= ovulation_day + 1:
        is_fertile = True

    return PhaseResult(
        date=day.isoformat(),
        phase=phase,
        is_period=is_period,
        is_ovulation=is_ovulation,
        is_fertile=is_fertile,
        day_of_cycle=day_of_cycle,
    )


def get_predicted_periods(model: CycleModel, months_ahead: int = 3) -> list[date]:
    """Project the next ``months_ahead`` period start dates.

    The first uses the model's own cycle length, later ones the historical
    average, each measured from the last period start.
    """
    if months_ahead < 1:
        return []
    start = _as_date(model.last_period_start)
    periods = [start + timedelta(days=model.cycle_length)]
    for i in range(2, months_ahead + 1):
        periods.append(start + timedelta(days=model.average_cycle_length * i))
    return periods


def days_until(target: date, today: date | None = None) -> int:
    today = today or date.today()
    return (_as_date(target) - _as_date(today)).days


PHASE_COLORS = {
    Phase.PERIOD: "bg-red-100 border-red-300 text-red-800",
    Phase.FOLLICULAR: "bg-green-50 border-green-200 text-green-700",
    Phase.OVULATION: "bg-blue-100 border-blue-300 text-blue-800",
    Phase.LUTEAL: "bg-yellow-50 border-yellow-200 text-yellow-700",
    Phase.PMS: "bg-purple-100 border-purple-300 text-purple-800",
    Phase.UNKNOWN: "bg-gray-50 border-gray-200 text-gray-600",
}

FLOW_COLORS = {
    Flow.LIGHT: "bg-pink-100 border-pink-300 text-pink-800",
    Flow.MEDIUM: "bg-pink-200 border-pink-400 text-pink-800",
    Flow.HEAVY: "bg-pink-300 border-pink-500 text-pink-800",
}
NO_FLOW_COLOR = "bg-gray-100 border-gray-300 text-gray-600"


def _to_phase(phase) -> Phase:
    try:
        return Phase(phase)
    except ValueError:
        return Phase.UNKNOWN


def get_phase_color(phase: Phase | str | None) -> str:
    """Return the calendar cell style for a phase; anything unrecognized is neutral."""
    return PHASE_COLORS[_to_phase(phase)]


def get_flow_color(flow: Flow | str | None) -> str:
    try:
        return FLOW_COLORS[Flow(flow)]
    except ValueError:
        return NO_FLOW_COLOR


PHASE_LABELS = {
    Phase.PERIOD: "\U0001fa78 Period",
    Phase.FOLLICULAR: "\U0001f331 Follicular",
    Phase.OVULATION: "✨ Ovulation",
    Phase.LUTEAL: "\U0001f319 Luteal",
    Phase.PMS: "⚡ PMS",
    Phase.UNKNOWN: "Unknown",
}

PHASE_DESCRIPTIONS = {
    Phase.PERIOD: "Your body is shedding the uterine lining. Rest, warmth and gentle movement help.",
    Phase.FOLLICULAR: "Estrogen is rising and energy is coming back. A good time to start new things.",
    Phase.OVULATION: "Peak energy and confidence. Fertility is at its highest around today.",
    Phase.LUTEAL: "Progesterone is rising and energy may dip. Slow down a little and sleep well.",
    Phase.PMS: "Hormones are shifting. Mood swings, cravings and fatigue are all normal.",
    Phase.UNKNOWN: "Log the first day of your period to see where you are in your cycle.",
}

# Name plus text and background tokens for the insights screen.
PHASE_DISPLAY = {
    Phase.PERIOD: {"name": "Menstrual", "color": "text-red-600", "bg": "bg-red-50"},
    Phase.FOLLICULAR: {"name": "Follicular", "color": "text-green-600", "bg": "bg-green-50"},
    Phase.OVULATION: {"name": "Ovulation", "color": "text-pink-600", "bg": "bg-pink-50"},
    Phase.LUTEAL: {"name": "Luteal", "color": "text-yellow-600", "bg": "bg-yellow-50"},
    Phase.PMS: {"name": "PMS", "color": "text-purple-600", "bg": "bg-purple-50"},
    Phase.UNKNOWN: {"name": "Unknown", "color": "text-gray-600", "bg": "bg-gray-50"},
}


def get_phase_display(phase: Phase | str | None) -> dict:
    return PHASE_DISPLAY[_to_phase(phase)]
