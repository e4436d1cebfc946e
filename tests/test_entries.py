from datetime import date

from src.entries import (
    RELIEF_IDEAS,
    apply_entry,
    derive_cycle_model,
    entry_for_date,
    get_relief_ideas,
    latest_first_day,
    top_symptoms,
)


class TestLatestFirstDay:
    def test_none_flagged(self, make_entry):
        assert latest_first_day([make_entry("2025-06-11")]) is None

    def test_empty(self):
        assert latest_first_day([]) is None

    def test_newest_by_date_not_position(self, make_entry):
        entries = [
            make_entry("2025-07-09", first_day=True),
            make_entry("2025-06-11", first_day=True),
            make_entry("2025-07-10"),
        ]
        assert latest_first_day(entries) == date(2025, 7, 9)


class TestDeriveCycleModel:
    def test_rolls_forward(self, model, make_entry):
        derived = derive_cycle_model(model, [make_entry("2025-07-08", first_day=True)])
        assert derived.last_period_start == date(2025, 7, 8)

    def test_keeps_newer_start(self, model, make_entry):
        derived = derive_cycle_model(model, [make_entry("2025-05-14", first_day=True)])
        assert derived is model

    def test_no_first_day_entries(self, model, make_entry):
        assert derive_cycle_model(model, [make_entry("2025-07-08")]) is model


class TestApplyEntry:
    def test_first_day_restarts_cycle(self, model, make_entry):
        updated = apply_entry(model, make_entry("2025-07-06", first_day=True))
        assert updated.last_period_start == date(2025, 7, 6)

    def test_first_day_may_move_backwards(self, model, make_entry):
        updated = apply_entry(model, make_entry("2025-06-01", first_day=True))
        assert updated.last_period_start == date(2025, 6, 1)

    def test_regular_entry(self, model, make_entry):
        assert apply_entry(model, make_entry("2025-07-06")) is model


class TestEntryForDate:
    def test_found(self, make_entry):
        entry = make_entry("2025-06-12")
        assert entry_for_date([make_entry("2025-06-11"), entry], date(2025, 6, 12)) is entry

    def test_missing(self, make_entry):
        assert entry_for_date([make_entry("2025-06-11")], date(2025, 6, 12)) is None


class TestTopSymptoms:
    def test_counts_descending(self, make_entry):
        entries = [
            make_entry("2025-06-11", symptoms=["Cramps", "Fatigue"]),
            make_entry("2025-06-12", symptoms=["Cramps"]),
            make_entry("2025-06-13", symptoms=["Headache", "Cramps", "Fatigue"]),
        ]
        assert top_symptoms(entries) == [("Cramps", 3), ("Fatigue", 2), ("Headache", 1)]

    def test_limit(self, make_entry):
        entries = [make_entry("2025-06-11", symptoms=[f"s{i}" for i in range(8)])]
        assert len(top_symptoms(entries)) == 5

    def test_no_symptoms(self, make_entry):
        assert top_symptoms([make_entry("2025-06-11")]) == []


class TestReliefIdeas:
    def test_most_recent_entry_with_symptoms(self, make_entry):
        entries = [
            make_entry("2025-06-13", symptoms=["Acne"]),
            make_entry("2025-06-11", symptoms=["Cramps"]),
            make_entry("2025-06-14"),
        ]
        assert get_relief_ideas(entries) == {"Acne": RELIEF_IDEAS["Acne"]}

    def test_unknown_symptoms_skipped(self, make_entry):
        entries = [make_entry("2025-06-11", symptoms=["Cramps", "Insomnia"])]
        assert list(get_relief_ideas(entries)) == ["Cramps"]

    def test_no_symptoms(self, make_entry):
        assert get_relief_ideas([make_entry("2025-06-11")]) == {}

    def test_three_ideas_each(self):
        assert all(len(ideas) == 3 for ideas in RELIEF_IDEAS.values())
