"""
Activity schedule variants.

Stored in the activities row as JSON text:
    {"type": "daily"}
    {"type": "weekly", "daysOfWeek": [0, 3, 5]}   # 0 = Sunday
    {"type": "custom", "customDays": 7}

The schedule is descriptive only: no view filters activities by it.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Union

from breadcrumb.errors import ValidationError

logger = logging.getLogger(__name__)

SCHEDULE_TYPES = frozenset({"daily", "weekly", "custom"})


@dataclass(frozen=True)
class DailySchedule:
    type: str = "daily"


@dataclass(frozen=True)
class WeeklySchedule:
    days_of_week: frozenset[int]
    type: str = "weekly"


@dataclass(frozen=True)
class CustomSchedule:
    custom_days: int
    type: str = "custom"


Schedule = Union[DailySchedule, WeeklySchedule, CustomSchedule]


def build_schedule(
    schedule_type: str,
    days_of_week: list[int] | None = None,
    custom_days: int | None = None,
) -> Schedule:
    """Build and validate a schedule from form-like input"""
    if schedule_type == "daily":
        return DailySchedule()
    if schedule_type == "weekly":
        days = frozenset(days_of_week or [])
        if not days:
            raise ValidationError("Select at least one day of the week")
        if any(not isinstance(d, int) or d < 0 or d > 6 for d in days):
            raise ValidationError("Days of week must be between 0 (Sunday) and 6 (Saturday)")
        return WeeklySchedule(days_of_week=days)
    if schedule_type == "custom":
        if not isinstance(custom_days, int) or custom_days < 1:
            raise ValidationError("Custom schedule needs a positive number of days")
        return CustomSchedule(custom_days=custom_days)
    raise ValidationError(f"Unknown schedule type: {schedule_type!r}")


def schedule_to_dict(schedule: Schedule) -> dict[str, Any]:
    if isinstance(schedule, WeeklySchedule):
        return {"type": "weekly", "daysOfWeek": sorted(schedule.days_of_week)}
    if isinstance(schedule, CustomSchedule):
        return {"type": "custom", "customDays": schedule.custom_days}
    return {"type": "daily"}


def serialize_schedule(schedule: Schedule | None) -> str | None:
    if schedule is None:
        return None
    return json.dumps(schedule_to_dict(schedule))


def parse_schedule(raw: str | dict | None) -> Schedule | None:
    """
    Parse a stored schedule. Missing or unreadable values map to None,
    reads never raise.
    """
    if raw is None or raw == "":
        return None
    data = raw
    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Unreadable schedule %r, ignoring", raw)
            return None
    if not isinstance(data, dict):
        logger.warning("Unexpected schedule shape %r, ignoring", raw)
        return None
    try:
        return build_schedule(
            data.get("type"),
            days_of_week=data.get("daysOfWeek"),
            custom_days=data.get("customDays"),
        )
    except (ValidationError, TypeError):
        logger.warning("Invalid schedule %r, ignoring", raw)
        return None
