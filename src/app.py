import asyncio
import json
import logging
from datetime import date
from logging.handlers import RotatingFileHandler

from config.settings import (
    AVERAGE_CYCLE_LENGTH,
    CYCLE_LENGTH,
    LAST_PERIOD_START,
    LOG_LEVEL,
    LOGS_DIR,
    PERIOD_LENGTH,
    TIMEZONE,
    USER_ID,
)
from src.models import CycleModel
from src.notifications import Notification, default_preferences
from src.scheduler import UserCycle, refresh_notifications, setup_scheduler
from src.validation import InvalidCycleModel, check_cycle_model, check_user_cycle_length

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            RotatingFileHandler(
                LOGS_DIR / "synccycle.log",
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
            ),
            logging.StreamHandler(),
        ],
    )


def configured_user() -> UserCycle:
    """Build the single user described by the settings."""
    model = CycleModel(
        cycle_length=CYCLE_LENGTH,
        period_length=PERIOD_LENGTH,
        last_period_start=date.fromisoformat(LAST_PERIOD_START),
        average_cycle_length=AVERAGE_CYCLE_LENGTH,
    )
    failures = check_cycle_model(model) + check_user_cycle_length(model.cycle_length)
    if failures:
        raise InvalidCycleModel(failures)
    return UserCycle(
        user_id=USER_ID,
        model=model,
        preferences=default_preferences(USER_ID, timezone=TIMEZONE.key),
    )


async def log_notification(notification: Notification) -> None:
    logger.info(f"Notification planned: {json.dumps(notification.to_dict())}")


async def run() -> None:
    user = configured_user()

    def get_users():
        return [user]

    await refresh_notifications(get_users, log_notification)

    scheduler = setup_scheduler(get_users, log_notification)
    scheduler.start()
    logger.info("Scheduler started. Press Ctrl+C to stop.")
    try:
        await asyncio.Event().wait()
    finally:
        scheduler.shutdown(wait=False)


def main() -> None:
    configure_logging()
    logger.info(f"Starting SyncCycle for user {USER_ID}...")
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Stopped.")


if __name__ == "__main__":
    main()
