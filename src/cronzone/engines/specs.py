from __future__ import annotations

from typing import Dict

from ..core.types import CronFormat, CronSpec


# ============================================================
# STANDARD NAMED TIMELINES
# ============================================================

EVERY_SECOND = CronSpec("* * * * * *", CronFormat.WITH_SECONDS, "every second")
EVERY_MINUTE = CronSpec("* * * * *", CronFormat.STANDARD, "every minute")
HOURLY = CronSpec("0 * * * *", CronFormat.STANDARD, "start of every hour")
DAILY = CronSpec("0 0 * * *", CronFormat.STANDARD, "local midnight")
WEEKLY = CronSpec("0 0 * * 1", CronFormat.STANDARD, "Monday, local midnight")
MONTHLY = CronSpec("0 0 1 * *", CronFormat.STANDARD, "first day of the month, local midnight")
ANNUALLY = CronSpec("0 0 1 1 *", CronFormat.STANDARD, "January 1st, local midnight")


STANDARD_SPECS: Dict[str, CronSpec] = {
    "every-second": EVERY_SECOND,
    "every-minute": EVERY_MINUTE,
    "hourly": HOURLY,
    "daily": DAILY,
    "weekly": WEEKLY,
    "monthly": MONTHLY,
    "annually": ANNUALLY,
}
