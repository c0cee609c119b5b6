"""
Activity and marker API endpoints
"""
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from breadcrumb.api.deps import get_db, get_current_user
from breadcrumb.api.schemas import (
    ActivityResponse, MarkerResponse, activity_out, marker_out,
)
from breadcrumb.application.activities import (
    CreateActivityUseCase, CreateMarkerUseCase, SetMarkerTargetUseCase,
    list_activities_with_markers,
)
from breadcrumb.domain.entities import User
from breadcrumb.domain.schedule import build_schedule


router = APIRouter(prefix="/api/v1", tags=["activities"])


# === Request/Response models ===

class ScheduleRequest(BaseModel):
    type: Literal["daily", "weekly", "custom"] = "daily"
    daysOfWeek: list[int] | None = None  # 0 = Sunday
    customDays: int | None = None


class CreateActivityRequest(BaseModel):
    name: str
    schedule: ScheduleRequest | None = None


class CreateMarkerRequest(BaseModel):
    label: str
    is_default: bool | None = None
    target: int | None = None


class SetTargetRequest(BaseModel):
    target: int | str | None = None  # blank or null clears


class ActivityWithMarkersResponse(ActivityResponse):
    markers: list[MarkerResponse]


# === Endpoints ===

@router.get("/activities", response_model=list[ActivityWithMarkersResponse])
def list_activities(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Activities of the current user with their markers"""
    return [
        ActivityWithMarkersResponse(
            **activity_out(activity).model_dump(),
            markers=[marker_out(m) for m in markers],
        )
        for activity, markers in list_activities_with_markers(db, user.id)
    ]


@router.post("/activities", response_model=ActivityResponse)
def create_activity(
    req: CreateActivityRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    schedule = None
    if req.schedule is not None:
        schedule = build_schedule(
            req.schedule.type,
            days_of_week=req.schedule.daysOfWeek,
            custom_days=req.schedule.customDays,
        )
    activity = CreateActivityUseCase(db).execute(user.id, req.name, schedule)
    return activity_out(activity)


@router.post("/activities/{activity_id}/markers", response_model=MarkerResponse)
def create_marker(
    activity_id: int,
    req: CreateMarkerRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    marker = CreateMarkerUseCase(db).execute(
        user.id, activity_id, req.label, is_default=req.is_default, target=req.target,
    )
    return marker_out(marker)


@router.put("/markers/{marker_id}/target", response_model=MarkerResponse)
def set_marker_target(
    marker_id: int,
    req: SetTargetRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Set or clear the daily target; past records keep their snapshot"""
    marker = SetMarkerTargetUseCase(db).execute(user.id, marker_id, req.target)
    return marker_out(marker)
