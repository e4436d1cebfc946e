from dataclasses import dataclass, replace
from datetime import date
from enum import Enum


class Phase(str, Enum):
    PERIOD = "period"
    FOLLICULAR = "follicular"
    OVULATION = "ovulation"
    LUTEAL = "luteal"
    PMS = "pms"
    UNKNOWN = "unknown"


class Flow(str, Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


def _or_default(value, default: int) -> int:
    return default if value is None else int(value)


@dataclass(frozen=True)
class CycleModel:
    """Cycle configuration a prediction is computed from."""

    cycle_length: int
    period_length: int
    last_period_start: date
    average_cycle_length: int

    @classmethod
    def from_dict(cls, data: dict) -> "CycleModel":
        """Build from a stored cycle document (camelCase keys, ISO dates)."""
        cycle_length = int(data["cycleLength"])
        return cls(
            cycle_length=cycle_length,
            period_length=int(data["periodLength"]),
            last_period_start=date.fromisoformat(data["lastPeriodStart"]),
            average_cycle_length=_or_default(data.get("averageCycleLength"), cycle_length),
        )

    def to_dict(self) -> dict:
        return {
            "cycleLength": self.cycle_length,
            "periodLength": self.period_length,
            "lastPeriodStart": self.last_period_start.isoformat(),
            "averageCycleLength": self.average_cycle_length,
        }

    def with_last_period_start(self, day: date) -> "CycleModel":
        return replace(self, last_period_start=day)


@dataclass(frozen=True)
class PhaseResult:
    date: str
    phase: Phase
    is_period: bool
    is_ovulation: bool
    is_fertile: bool
    day_of_cycle: int


@dataclass(frozen=True)
class LogEntry:
    """A day the user logged: flow, symptoms, mood and free-form notes."""

    date: date
    flow: Flow
    symptoms: tuple[str, ...] = ()
    mood: str = ""
    notes: str = ""
    is_first_day_of_cycle: bool = False
    id: str | None = None
    user_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "LogEntry":
        try:
            flow = Flow(data["flow"])
        except ValueError:
            raise ValueError(f"Unknown flow {data['flow']!r}") from None
        return cls(
            date=date.fromisoformat(data["date"]),
            flow=flow,
            symptoms=tuple(data.get("symptoms") or ()),
            mood=data.get("mood") or "",
            notes=data.get("notes") or "",
            is_first_day_of_cycle=bool(data.get("isFirstDayOfCycle", False)),
            id=data.get("id"),
            user_id=data.get("userId"),
        )

    def to_dict(self) -> dict:
        data = {
            "date": self.date.isoformat(),
            "flow": self.flow.value,
            "symptoms": list(self.symptoms),
            "mood": self.mood,
            "notes": self.notes,
            "isFirstDayOfCycle": self.is_first_day_of_cycle,
        }
        if self.id is not None:
            data["id"] = self.id
        if self.user_id is not None:
            data["userId"] = self.user_id
        return data
