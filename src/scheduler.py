import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from config.settings import ANTHROPIC_API_KEY, REMINDER_HOUR, TIMEZONE
from src.ai import generate_wellness_tip
from src.cycle import PHASE_DESCRIPTIONS, calculate_cycle_phase
from src.entries import derive_cycle_model, get_relief_ideas
from src.models import CycleModel, LogEntry, Phase
from src.notifications import (
    Notification,
    NotificationPreferences,
    NotificationType,
    plan_notifications,
)

logger = logging.getLogger(__name__)

Publish = Callable[[Notification], Awaitable[None]]


@dataclass
class UserCycle:
    user_id: str
    model: CycleModel
    preferences: NotificationPreferences
    entries: list[LogEntry] = field(default_factory=list)


def _fallback_tip(phase: Phase, entries: list[LogEntry]) -> str:
    for ideas in get_relief_ideas(entries).values():
        return ideas[0]
    return PHASE_DESCRIPTIONS[phase]


async def _wellness_tip(user: UserCycle, model: CycleModel, now: datetime) -> str | None:
    if not user.preferences.allows(NotificationType.WELLNESS_TIP):
        return None
    today = now.astimezone(user.preferences.tz).date()
    current = calculate_cycle_phase(
        today, model.last_period_start, model.cycle_length, model.period_length
    )
    if not ANTHROPIC_API_KEY:
        return _fallback_tip(current.phase, user.entries)
    try:
        return await generate_wellness_tip(
            current.phase.value, current.day_of_cycle, user.entries
        )
    except Exception as e:
        logger.error(f"Tip generation failed for {user.user_id}: {e}")
        return _fallback_tip(current.phase, user.entries)


async def refresh_notifications(
    get_users: Callable[[], Iterable[UserCycle]],
    publish: Publish,
    now: datetime | None = None,
) -> int:
    """Plan reminders for every user and hand them to ``publish``.

    Returns the number of notifications published.
    """
    now = now or datetime.now(TIMEZONE)
    published = 0

    for user in get_users():
        try:
            model = derive_cycle_model(user.model, user.entries)
            tip = await _wellness_tip(user, model, now)
            planned = plan_notifications(
                user.user_id, model, user.preferences, now, tip=tip, reminder_hour=REMINDER_HOUR
            )
            for notification in planned:
                await publish(notification)
            published += len(planned)
            logger.info(f"User {user.user_id}: {len(planned)} notifications planned.")
        except Exception as e:
            logger.error(f"Failed to plan notifications for {user.user_id}: {e}")

    return published


def setup_scheduler(
    get_users: Callable[[], Iterable[UserCycle]], publish: Publish
) -> AsyncIOScheduler:
    """Set up APScheduler for the daily notification refresh."""
    scheduler = AsyncIOScheduler(timezone=TIMEZONE)
    scheduler.add_job(
        refresh_notifications,
        trigger="cron",
        hour=REMINDER_HOUR,
        minute=0,
        args=[get_users, publish],
        id="daily_notifications",
        replace_existing=True,
    )
    return scheduler
