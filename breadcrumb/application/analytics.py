"""Analytics dashboard: date windows and the stats query"""
from datetime import date

from sqlalchemy.orm import Session

from breadcrumb.application.aggregation import AnalyticsSummary, compute_analytics
from breadcrumb.domain.dates import ALL_TIME_START, month_range, parse_month, today_local, year_range
from breadcrumb.errors import ValidationError
from breadcrumb.infrastructure.db.row_store import RowStore
from breadcrumb.infrastructure.repository import TrackerRepository

VIEW_TYPES = ("monthly", "yearly", "alltime")


def analytics_window(
    view_type: str,
    month: str | None = None,
    year: int | None = None,
    today: date | None = None,
) -> tuple[date, date]:
    """
    monthly: the month given as YYYY-MM (default: current month)
    yearly:  Jan 1 .. Dec 31 of `year` (default: current year)
    alltime: ALL_TIME_START .. today
    """
    if today is None:
        today = today_local()

    if view_type == "monthly":
        if month:
            y, m = parse_month(month)
        else:
            y, m = today.year, today.month
        return month_range(y, m)
    if view_type == "yearly":
        return year_range(year or today.year)
    if view_type == "alltime":
        return ALL_TIME_START, today
    raise ValidationError(f"Unknown analytics view: {view_type!r}")


def build_analytics_view(
    db: Session,
    user_id: int,
    view_type: str = "monthly",
    month: str | None = None,
    year: int | None = None,
    today: date | None = None,
) -> AnalyticsSummary:
    start, end = analytics_window(view_type, month=month, year=year, today=today)

    repo = TrackerRepository(RowStore(db))
    activities = repo.get_activities(user_id)
    markers_by_activity = {a.id: repo.get_activity_markers(a.id) for a in activities}
    records = repo.get_daily_records_for_activity(user_id, start, end)

    return compute_analytics(activities, markers_by_activity, records, start, end)
