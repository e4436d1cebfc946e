"""Reminder documents derived from cycle predictions.

Planning is pure: every function returns ``Notification`` values and leaves
storing and delivering them to the caller. Ids are deterministic so planning
the same cycle twice yields the same documents.
"""

import re
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum
from zoneinfo import ZoneInfo

from src.cycle import get_predicted_periods, ovulation_date_for
from src.models import CycleModel

DEFAULT_REMINDER_HOUR = 9
PREDICTION_COUNT = 3


class NotificationType(str, Enum):
    PERIOD_PREDICTION = "period_prediction"
    SYMPTOM_REMINDER = "symptom_reminder"
    FERTILITY_ALERT = "fertility_alert"
    HEALTH_CHECKIN = "health_checkin"
    MEDICATION_REMINDER = "medication_reminder"
    CYCLE_INSIGHT = "cycle_insight"
    WELLNESS_TIP = "wellness_tip"
    APPOINTMENT_REMINDER = "appointment_reminder"


# Preference switch for each notification type.
PREFERENCE_KEYS = {
    NotificationType.PERIOD_PREDICTION: "period_predictions",
    NotificationType.SYMPTOM_REMINDER: "symptom_reminders",
    NotificationType.FERTILITY_ALERT: "fertility_alerts",
    NotificationType.HEALTH_CHECKIN: "health_checkins",
    NotificationType.MEDICATION_REMINDER: "medication_reminders",
    NotificationType.CYCLE_INSIGHT: "cycle_insights",
    NotificationType.WELLNESS_TIP: "wellness_tips",
    NotificationType.APPOINTMENT_REMINDER: "appointment_reminders",
}


@dataclass(frozen=True)
class NotificationAction:
    label: str
    action: str
    url: str | None = None
    id: str = ""


@dataclass(frozen=True)
class NotificationTemplate:
    type: NotificationType
    title: str
    message: str
    actions: tuple[NotificationAction, ...]
    priority: str
    channels: tuple[str, ...]
    variables: tuple[str, ...] = ()


def _template(type_, title, message, actions, priority, channels, variables=()):
    return NotificationTemplate(
        type=type_,
        title=title,
        message=message,
        actions=tuple(NotificationAction(*a) for a in actions),
        priority=priority,
        channels=tuple(channels),
        variables=tuple(variables),
    )


NOTIFICATION_TEMPLATES = {
    NotificationType.PERIOD_PREDICTION: _template(
        NotificationType.PERIOD_PREDICTION,
        "Period Prediction",
        "Your period is predicted to start in {{daysUntilPeriod}} days. "
        "Consider logging any early symptoms.",
        [("Log Entry", "log_entry"), ("Snooze", "snooze"), ("Dismiss", "dismiss")],
        "medium",
        ["push", "in_app"],
        ["daysUntilPeriod"],
    ),
    NotificationType.SYMPTOM_REMINDER: _template(
        NotificationType.SYMPTOM_REMINDER,
        "Symptom Check-in",
        "How are you feeling today? Log your symptoms to track patterns.",
        [("Log Symptoms", "log_symptoms"), ("Skip Today", "dismiss"), ("Remind Later", "snooze")],
        "low",
        ["push", "in_app"],
    ),
    NotificationType.FERTILITY_ALERT: _template(
        NotificationType.FERTILITY_ALERT,
        "Fertility Window",
        "Your fertile window is approaching. Track ovulation signs for better predictions.",
        [("Track Ovulation", "track_ovulation"), ("Dismiss", "dismiss"), ("Remind Later", "snooze")],
        "high",
        ["push", "in_app"],
        ["daysUntilOvulation"],
    ),
    NotificationType.HEALTH_CHECKIN: _template(
        NotificationType.HEALTH_CHECKIN,
        "Health Check-in",
        "Take a moment to check in on your overall wellness.",
        [("Complete Check-in", "complete_checkin"), ("Skip", "dismiss"), ("Remind Later", "snooze")],
        "low",
        ["push", "in_app"],
    ),
    NotificationType.MEDICATION_REMINDER: _template(
        NotificationType.MEDICATION_REMINDER,
        "Medication Reminder",
        "Time to take {{medicationName}}. Don't forget to log any side effects.",
        [("Taken", "log_entry"), ("Skip", "dismiss"), ("Remind Later", "snooze")],
        "high",
        ["push", "in_app"],
        ["medicationName"],
    ),
    NotificationType.CYCLE_INSIGHT: _template(
        NotificationType.CYCLE_INSIGHT,
        "Cycle Insight",
        "{{insightMessage}}",
        [("View Details", "custom", "/insights"), ("Dismiss", "dismiss")],
        "low",
        ["in_app"],
        ["insightMessage"],
    ),
    NotificationType.WELLNESS_TIP: _template(
        NotificationType.WELLNESS_TIP,
        "Wellness Tip",
        "{{tipMessage}}",
        [("Save Tip", "custom"), ("Dismiss", "dismiss")],
        "low",
        ["in_app"],
        ["tipMessage"],
    ),
    NotificationType.APPOINTMENT_REMINDER: _template(
        NotificationType.APPOINTMENT_REMINDER,
        "Appointment Reminder",
        "You have a {{appointmentType}} appointment in {{timeUntilAppointment}}.",
        [("View Details", "custom"), ("Dismiss", "dismiss"), ("Reschedule", "custom")],
        "high",
        ["push", "email", "in_app"],
        ["appointmentType", "timeUntilAppointment"],
    ),
}


def _default_types() -> dict[str, bool]:
    return {
        "period_predictions": True,
        "symptom_reminders": True,
        "fertility_alerts": True,
        "health_checkins": False,
        "medication_reminders": False,
        "cycle_insights": True,
        "wellness_tips": True,
        "appointment_reminders": True,
    }


@dataclass
class NotificationPreferences:
    user_id: str
    enabled: bool = True
    types: dict[str, bool] = field(default_factory=_default_types)
    period_advance_notice: int = 3
    fertility_advance_notice: int = 2
    symptom_reminder_frequency: str = "daily"
    quiet_hours_enabled: bool = True
    quiet_hours_start: str = "22:00"
    quiet_hours_end: str = "08:00"
    timezone: str = "UTC"

    def allows(self, type_: NotificationType) -> bool:
        return self.enabled and self.types.get(PREFERENCE_KEYS[type_], False)

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def default_preferences(user_id: str, timezone: str = "UTC") -> NotificationPreferences:
    return NotificationPreferences(user_id=user_id, timezone=timezone)


@dataclass(frozen=True)
class Notification:
    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    priority: str
    scheduled_for: datetime
    actions: tuple[NotificationAction, ...]
    channels: tuple[str, ...]
    repeat_interval: str = "none"
    repeat_count: int = 0
    metadata: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize as a notification document (camelCase keys, ISO timestamps)."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "priority": self.priority,
            "scheduledFor": self.scheduled_for.isoformat(),
            "repeatInterval": self.repeat_interval,
            "repeatCount": self.repeat_count,
            "actions": [
                {k: v for k, v in asdict(a).items() if v is not None} for a in self.actions
            ],
            "metadata": dict(self.metadata),
            "channels": list(self.channels),
        }


_VARIABLE = re.compile(r"\{\{(\w+)\}\}")


def render_template(text: str, variables: dict) -> str:
    """Replace every ``{{name}}`` in ``text``; unknown names are left in place."""
    def _sub(match):
        name = match.group(1)
        return str(variables[name]) if name in variables else match.group(0)

    return _VARIABLE.sub(_sub, text)


def _parse_clock(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def is_quiet_hours(prefs: NotificationPreferences, when: datetime) -> bool:
    """Return True if ``when`` falls inside the user's quiet window.

    Windows whose start is after their end run across midnight.
    """
    if not prefs.quiet_hours_enabled:
        return False
    local = when.astimezone(prefs.tz).time().replace(tzinfo=None)
    start = _parse_clock(prefs.quiet_hours_start)
    end = _parse_clock(prefs.quiet_hours_end)
    if start <= end:
        return start <= local < end
    return local >= start or local < end


def defer_quiet_hours(prefs: NotificationPreferences, when: datetime) -> datetime:
    """Move ``when`` to the end of the quiet window if it falls inside it."""
    if not is_quiet_hours(prefs, when):
        return when
    local = when.astimezone(prefs.tz)
    end = datetime.combine(local.date(), _parse_clock(prefs.quiet_hours_end), tzinfo=prefs.tz)
    if end <= local:
        end += timedelta(days=1)
    return end


def _at(day: date, hour: int, prefs: NotificationPreferences) -> datetime:
    return datetime.combine(day, time(hour), tzinfo=prefs.tz)


def _build(
    template: NotificationTemplate,
    notification_id: str,
    user_id: str,
    scheduled_for: datetime,
    variables: dict | None = None,
    metadata: dict | None = None,
    **extra,
) -> Notification:
    actions = tuple(
        NotificationAction(a.label, a.action, a.url, id=f"{a.action}_{index}")
        for index, a in enumerate(template.actions)
    )
    return Notification(
        id=notification_id,
        user_id=user_id,
        type=template.type,
        title=template.title,
        message=render_template(template.message, variables or {}),
        priority=template.priority,
        scheduled_for=scheduled_for,
        actions=actions,
        channels=template.channels,
        metadata=metadata or {},
        **extra,
    )


def plan_period_predictions(
    user_id: str,
    model: CycleModel,
    prefs: NotificationPreferences,
    now: datetime,
    reminder_hour: int = DEFAULT_REMINDER_HOUR,
) -> list[Notification]:
    """One reminder ahead of each predicted period still in the future."""
    if not prefs.allows(NotificationType.PERIOD_PREDICTION):
        return []
    template = NOTIFICATION_TEMPLATES[NotificationType.PERIOD_PREDICTION]
    notice = prefs.period_advance_notice
    planned = []
    for period_date in get_predicted_periods(model, PREDICTION_COUNT):
        send_on = period_date - timedelta(days=notice)
        scheduled_for = defer_quiet_hours(prefs, _at(send_on, reminder_hour, prefs))
        if scheduled_for <= now:
            continue
        days_until_period = (period_date - send_on).days
        planned.append(
            _build(
                template,
                f"period_prediction_{period_date.isoformat()}",
                user_id,
                scheduled_for,
                variables={"daysUntilPeriod": days_until_period},
                metadata={
                    "predictedPeriodDate": period_date.isoformat(),
                    "daysUntilPeriod": days_until_period,
                },
            )
        )
    return planned


def plan_fertility_alerts(
    user_id: str,
    model: CycleModel,
    prefs: NotificationPreferences,
    now: datetime,
    reminder_hour: int = DEFAULT_REMINDER_HOUR,
) -> list[Notification]:
    """One reminder ahead of the ovulation preceding each predicted period."""
    if not prefs.allows(NotificationType.FERTILITY_ALERT):
        return []
    template = NOTIFICATION_TEMPLATES[NotificationType.FERTILITY_ALERT]
    notice = prefs.fertility_advance_notice
    planned = []
    for period_date in get_predicted_periods(model, PREDICTION_COUNT):
        ovulation_date = ovulation_date_for(period_date)
        send_on = ovulation_date - timedelta(days=notice)
        scheduled_for = defer_quiet_hours(prefs, _at(send_on, reminder_hour, prefs))
        if scheduled_for <= now:
            continue
        days_until_ovulation = (ovulation_date - send_on).days
        planned.append(
            _build(
                template,
                f"fertility_alert_{ovulation_date.isoformat()}",
                user_id,
                scheduled_for,
                variables={"daysUntilOvulation": days_until_ovulation},
                metadata={
                    "ovulationDate": ovulation_date.isoformat(),
                    "daysUntilOvulation": days_until_ovulation,
                },
            )
        )
    return planned


def plan_symptom_reminder(
    user_id: str,
    prefs: NotificationPreferences,
    now: datetime,
    reminder_hour: int = DEFAULT_REMINDER_HOUR,
) -> list[Notification]:
    if not prefs.allows(NotificationType.SYMPTOM_REMINDER):
        return []
    template = NOTIFICATION_TEMPLATES[NotificationType.SYMPTOM_REMINDER]
    repeat = "weekly" if prefs.symptom_reminder_frequency == "weekly" else "daily"
    tomorrow = now.astimezone(prefs.tz).date() + timedelta(days=1)
    return [
        _build(
            template,
            f"symptom_reminder_{repeat}",
            user_id,
            defer_quiet_hours(prefs, _at(tomorrow, reminder_hour, prefs)),
            repeat_interval=repeat,
            repeat_count=-1,  # forever
        )
    ]


def plan_wellness_tip(
    user_id: str, prefs: NotificationPreferences, now: datetime, tip: str
) -> list[Notification]:
    if not tip or not prefs.allows(NotificationType.WELLNESS_TIP):
        return []
    template = NOTIFICATION_TEMPLATES[NotificationType.WELLNESS_TIP]
    today = now.astimezone(prefs.tz).date()
    return [
        _build(
            template,
            f"wellness_tip_{today.isoformat()}",
            user_id,
            defer_quiet_hours(prefs, now),
            variables={"tipMessage": tip},
        )
    ]


def plan_notifications(
    user_id: str,
    model: CycleModel,
    prefs: NotificationPreferences,
    now: datetime,
    tip: str | None = None,
    reminder_hour: int = DEFAULT_REMINDER_HOUR,
) -> list[Notification]:
    """Every reminder the user's preferences enable, ordered by send time."""
    if not prefs.enabled:
        return []
    planned = (
        plan_period_predictions(user_id, model, prefs, now, reminder_hour)
        + plan_fertility_alerts(user_id, model, prefs, now, reminder_hour)
        + plan_symptom_reminder(user_id, prefs, now, reminder_hour)
        + plan_wellness_tip(user_id, prefs, now, tip or "")
    )
    return sorted(planned, key=lambda n: n.scheduled_for)
