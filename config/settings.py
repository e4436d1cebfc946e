import os
from pathlib import Path
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent
LOGS_DIR = Path(os.getenv("LOGS_DIR", BASE_DIR / "logs"))

ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")
TIP_MODEL = os.getenv("TIP_MODEL", "claude-haiku-4-5-20251001")

USER_ID = os.getenv("USER_ID", "local")
CYCLE_LENGTH = int(os.getenv("CYCLE_LENGTH", "28"))
PERIOD_LENGTH = int(os.getenv("PERIOD_LENGTH", "5"))
AVERAGE_CYCLE_LENGTH = int(os.getenv("AVERAGE_CYCLE_LENGTH", str(CYCLE_LENGTH)))
LAST_PERIOD_START = os.getenv("LAST_PERIOD_START", "2025-06-11")

REMINDER_HOUR = int(os.getenv("REMINDER_HOUR", "9"))
TIMEZONE = ZoneInfo(os.getenv("TIMEZONE", "UTC"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
