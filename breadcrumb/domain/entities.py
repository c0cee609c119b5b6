"""
Application entities.

Optional row fields are explicit here with defined defaults, so call sites
never probe for presence.
"""
from dataclasses import dataclass
from datetime import date, datetime

from breadcrumb.domain.schedule import Schedule


@dataclass(frozen=True)
class User:
    id: int
    username: str

    def to_dict(self) -> dict:
        return {"id": self.id, "username": self.username}


@dataclass(frozen=True)
class Activity:
    id: int
    user_id: int
    name: str
    schedule: Schedule | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class ActivityMarker:
    id: int
    activity_id: int
    label: str
    is_default: bool = False
    target: int | None = None  # daily completion goal, positive when set
    created_at: datetime | None = None


@dataclass(frozen=True)
class DailyRecord:
    id: int
    user_id: int
    activity_marker_id: int
    date_string: str  # local calendar date, YYYY-MM-DD
    completed: bool = True
    target: int | None = None  # marker target at creation time, never rewritten
    completed_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def date(self) -> date:
        return date.fromisoformat(self.date_string)


def creation_order_key(record: DailyRecord) -> tuple:
    """Stable sort key: creation time, then id for records created in the same instant"""
    return (record.created_at or datetime.min, record.id)
