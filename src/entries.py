from collections import Counter
from datetime import date

from src.models import CycleModel, LogEntry

RELIEF_IDEAS = {
    "Cramps": [
        "Use a heating pad on your abdomen",
        "Try gentle yoga or stretching",
        "Stay hydrated and rest",
    ],
    "Headache": [
        "Drink water and rest in a dark room",
        "Try a warm or cold compress",
        "Limit screen time",
    ],
    "Bloating": [
        "Eat smaller, more frequent meals",
        "Avoid salty foods",
        "Try gentle movement or walking",
    ],
    "Fatigue": [
        "Take short naps if needed",
        "Get some fresh air and sunlight",
        "Prioritize restful sleep",
    ],
    "Acne": [
        "Keep your skin clean and moisturized",
        "Avoid touching your face",
        "Use gentle skincare products",
    ],
}


def latest_first_day(entries: list[LogEntry]) -> date | None:
    """Return the date of the newest entry flagged as the first day of a cycle."""
    first_days = [e.date for e in entries if e.is_first_day_of_cycle]
    return max(first_days) if first_days else None


def derive_cycle_model(model: CycleModel, entries: list[LogEntry]) -> CycleModel:
    """Roll ``last_period_start`` forward to the newest logged cycle start."""
    first_day = latest_first_day(entries)
    if first_day is None or first_day <= model.last_period_start:
        return model
    return model.with_last_period_start(first_day)


def apply_entry(model: CycleModel, entry: LogEntry) -> CycleModel:
    """Return the model after saving ``entry``: a first-day entry restarts the cycle."""
    if entry.is_first_day_of_cycle:
        return model.with_last_period_start(entry.date)
    return model


def entry_for_date(entries: list[LogEntry], day: date) -> LogEntry | None:
    for entry in entries:
        if entry.date == day:
            return entry
    return None


def top_symptoms(entries: list[LogEntry], limit: int = 5) -> list[tuple[str, int]]:
    counts = Counter(symptom for entry in entries for symptom in entry.symptoms)
    return counts.most_common(limit)


def get_relief_ideas(entries: list[LogEntry]) -> dict[str, list[str]]:
    """Relief ideas for the symptoms of the most recent entry that logged any."""
    with_symptoms = [e for e in entries if e.symptoms]
    if not with_symptoms:
        return {}
    recent = max(with_symptoms, key=lambda e: e.date)
    return {s: RELIEF_IDEAS[s] for s in recent.symptoms if s in RELIEF_IDEAS}
