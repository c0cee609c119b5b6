"""
Data access layer: maps row-store rows to tracker entities and back.

Rows are snake_case with the schedule stored as JSON text and the record date
as a "YYYY-MM-DD" string. Optional columns (schedule, target, is_default,
completed_at) that are missing or null map to the entity defaults.
"""
import logging
from datetime import date, datetime, timezone
from typing import Any

from breadcrumb.domain.dates import format_date_local
from breadcrumb.domain.entities import User, Activity, ActivityMarker, DailyRecord
from breadcrumb.domain.schedule import Schedule, parse_schedule, serialize_schedule
from breadcrumb.errors import NotFoundError
from breadcrumb.infrastructure.db.row_store import RowStore, eq, gte, lte

logger = logging.getLogger(__name__)


def _positive_or_none(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return None
    return value


def user_from_row(row: dict[str, Any]) -> User:
    return User(id=row["id"], username=row["username"])


def activity_from_row(row: dict[str, Any]) -> Activity:
    return Activity(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        schedule=parse_schedule(row.get("schedule")),
        created_at=row.get("created_at"),
    )


def marker_from_row(row: dict[str, Any]) -> ActivityMarker:
    return ActivityMarker(
        id=row["id"],
        activity_id=row["activity_id"],
        label=row["label"],
        is_default=bool(row.get("is_default")),
        target=_positive_or_none(row.get("target")),
        created_at=row.get("created_at"),
    )


def record_from_row(row: dict[str, Any]) -> DailyRecord:
    return DailyRecord(
        id=row["id"],
        user_id=row["user_id"],
        activity_marker_id=row["activity_marker_id"],
        date_string=row["date"],
        completed=bool(row.get("completed")),
        target=_positive_or_none(row.get("target")),
        completed_at=row.get("completed_at"),
        created_at=row.get("created_at"),
    )


class UserRepository:
    def __init__(self, store: RowStore):
        self.store = store

    def create_user(self, username: str) -> User:
        return user_from_row(self.store.insert("users", {"username": username}))

    def get_user_by_username(self, username: str) -> User | None:
        rows = self.store.select("users", eq("username", username))
        return user_from_row(rows[0]) if rows else None

    def get_user_by_id(self, user_id: int) -> User | None:
        rows = self.store.select("users", eq("id", user_id))
        return user_from_row(rows[0]) if rows else None


class TrackerRepository:
    """
    Activities, markers and daily records.

    Every method is a single store round trip (or one write plus its read-back);
    StoreError propagates to the caller.
    """

    def __init__(self, store: RowStore):
        self.store = store

    # --- activities ---

    def create_activity(self, user_id: int, name: str, schedule: Schedule | None = None) -> Activity:
        values: dict[str, Any] = {"user_id": user_id, "name": name}
        if schedule is not None:
            values["schedule"] = serialize_schedule(schedule)
        return activity_from_row(self.store.insert("activities", values))

    def get_activities(self, user_id: int) -> list[Activity]:
        return [activity_from_row(r) for r in self.store.select("activities", eq("user_id", user_id))]

    def get_activity(self, user_id: int, activity_id: int) -> Activity:
        rows = self.store.select("activities", eq("id", activity_id), eq("user_id", user_id))
        if not rows:
            raise NotFoundError(f"Activity #{activity_id} not found")
        return activity_from_row(rows[0])

    # --- markers ---

    def create_activity_marker(
        self,
        activity_id: int,
        label: str,
        is_default: bool | None = None,
        target: int | None = None,
    ) -> ActivityMarker:
        values: dict[str, Any] = {"activity_id": activity_id, "label": label}
        if is_default is not None:
            values["is_default"] = is_default
        if target is not None:
            values["target"] = target
        return marker_from_row(self.store.insert("activity_markers", values))

    def get_activity_markers(self, activity_id: int) -> list[ActivityMarker]:
        # store returns rows in id order, i.e. creation order
        rows = self.store.select("activity_markers", eq("activity_id", activity_id))
        return [marker_from_row(r) for r in rows]

    def get_activity_marker(self, marker_id: int) -> ActivityMarker:
        rows = self.store.select("activity_markers", eq("id", marker_id))
        if not rows:
            raise NotFoundError(f"Marker #{marker_id} not found")
        return marker_from_row(rows[0])

    def update_marker_target(self, marker_id: int, target: int | None) -> ActivityMarker:
        rows = self.store.update("activity_markers", {"target": target}, eq("id", marker_id))
        if not rows:
            raise NotFoundError(f"Marker #{marker_id} not found")
        return marker_from_row(rows[0])

    # --- daily records ---

    def create_daily_record(
        self,
        user_id: int,
        activity_marker_id: int,
        day: date | datetime | str,
        completed: bool = True,
        target: int | None = None,
    ) -> DailyRecord:
        values: dict[str, Any] = {
            "user_id": user_id,
            "activity_marker_id": activity_marker_id,
            "date": format_date_local(day),
            "completed": completed,
        }
        if completed:
            values["completed_at"] = datetime.now(timezone.utc)
        if target is not None:
            values["target"] = target
        return record_from_row(self.store.insert("daily_records", values))

    def update_daily_record(self, record_id: int, completed: bool) -> DailyRecord:
        values = {
            "completed": completed,
            "completed_at": datetime.now(timezone.utc) if completed else None,
        }
        rows = self.store.update("daily_records", values, eq("id", record_id))
        if not rows:
            raise NotFoundError(f"Daily record #{record_id} not found")
        return record_from_row(rows[0])

    def delete_daily_record(self, record_id: int) -> None:
        deleted = self.store.delete("daily_records", eq("id", record_id))
        if deleted == 0:
            raise NotFoundError(f"Daily record #{record_id} not found")
        logger.info("Deleted daily record #%s", record_id)

    def get_daily_records(self, user_id: int, day: date | datetime | str) -> list[DailyRecord]:
        rows = self.store.select(
            "daily_records", eq("user_id", user_id), eq("date", format_date_local(day))
        )
        return [record_from_row(r) for r in rows]

    def get_daily_records_for_activity(
        self,
        user_id: int,
        start: date | datetime | str,
        end: date | datetime | str,
    ) -> list[DailyRecord]:
        """Records with start <= date <= end, compared as YYYY-MM-DD strings"""
        rows = self.store.select(
            "daily_records",
            eq("user_id", user_id),
            gte("date", format_date_local(start)),
            lte("date", format_date_local(end)),
        )
        return [record_from_row(r) for r in rows]
