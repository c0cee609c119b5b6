"""
Response models shared by the v1 routers
"""
from datetime import datetime

from pydantic import BaseModel

from breadcrumb.domain.entities import User, Activity, ActivityMarker, DailyRecord
from breadcrumb.domain.schedule import schedule_to_dict


class UserResponse(BaseModel):
    id: int
    username: str


class ActivityResponse(BaseModel):
    id: int
    user_id: int
    name: str
    schedule: dict | None = None  # {"type": ..., "daysOfWeek"?: [...], "customDays"?: N}
    created_at: datetime | None = None


class MarkerResponse(BaseModel):
    id: int
    activity_id: int
    label: str
    is_default: bool
    target: int | None = None
    created_at: datetime | None = None


class RecordResponse(BaseModel):
    id: int
    user_id: int
    activity_marker_id: int
    date: str
    completed: bool
    target: int | None = None
    completed_at: datetime | None = None
    created_at: datetime | None = None


def user_out(user: User) -> UserResponse:
    return UserResponse(id=user.id, username=user.username)


def activity_out(activity: Activity) -> ActivityResponse:
    return ActivityResponse(
        id=activity.id,
        user_id=activity.user_id,
        name=activity.name,
        schedule=schedule_to_dict(activity.schedule) if activity.schedule else None,
        created_at=activity.created_at,
    )


def marker_out(marker: ActivityMarker) -> MarkerResponse:
    return MarkerResponse(
        id=marker.id,
        activity_id=marker.activity_id,
        label=marker.label,
        is_default=marker.is_default,
        target=marker.target,
        created_at=marker.created_at,
    )


def record_out(record: DailyRecord) -> RecordResponse:
    return RecordResponse(
        id=record.id,
        user_id=record.user_id,
        activity_marker_id=record.activity_marker_id,
        date=record.date_string,
        completed=record.completed,
        target=record.target,
        completed_at=record.completed_at,
        created_at=record.created_at,
    )
