"""
Local calendar dates.

Records are keyed by the local calendar date string "YYYY-MM-DD" and always
compared as strings, never as instants. "Local" means the configured TIMEZONE.
"""
import calendar
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta, tzinfo

from breadcrumb.config import get_settings
from breadcrumb.errors import ValidationError

# Lower bound of the "all time" analytics window
ALL_TIME_START = date(2020, 1, 1)


def _local_tz() -> tzinfo:
    return get_settings().get_timezone()


def today_local(tz: tzinfo | None = None) -> date:
    return datetime.now(tz or _local_tz()).date()


def to_local_date(value: date | datetime | str, tz: tzinfo | None = None) -> date:
    """
    Normalize a date-like value to a local calendar date

    - str: must be exactly YYYY-MM-DD
    - aware datetime: converted to the local timezone first
    - naive datetime: taken as already local
    """
    if isinstance(value, str):
        try:
            if len(value) != 10:
                raise ValueError(value)
            return date.fromisoformat(value)
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r}, expected YYYY-MM-DD")
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz or _local_tz())
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError(f"Invalid date: {value!r}")


def format_date_local(value: date | datetime | str, tz: tzinfo | None = None) -> str:
    return to_local_date(value, tz).isoformat()


def week_start(day: date) -> date:
    """Sunday on or before `day`"""
    return shift_days(day, -((day.weekday() + 1) % 7))


def date_range(start: date, end: date) -> list[date]:
    if start > end:
        return []
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def shift_days(day: date, days: int) -> date:
    """day + days; leaving the supported calendar is a ValidationError"""
    try:
        return day + timedelta(days=days)
    except OverflowError:
        raise ValidationError(f"Date out of range: {day.isoformat()} {days:+d} days")


def week_dates(start: date) -> list[date]:
    return date_range(start, shift_days(start, 6))


def check_year(year: int) -> int:
    if not MINYEAR <= year <= MAXYEAR:
        raise ValidationError(f"Year out of range: {year}, expected {MINYEAR}..{MAXYEAR}")
    return year


def month_range(year: int, month: int) -> tuple[date, date]:
    check_year(year)
    if not 1 <= month <= 12:
        raise ValidationError(f"Month out of range: {month}")
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def year_range(year: int) -> tuple[date, date]:
    check_year(year)
    return date(year, 1, 1), date(year, 12, 31)


def parse_month(value: str) -> tuple[int, int]:
    """'2026-03' -> (2026, 3)"""
    try:
        year_s, month_s = value.split("-")
        year, month = int(year_s), int(month_s)
    except ValueError:
        raise ValidationError(f"Invalid month: {value!r}, expected YYYY-MM")
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {value!r}, expected YYYY-MM")
    check_year(year)
    return year, month
