"""
Daily, weekly and per-activity (solo) views
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from breadcrumb.api.deps import get_db, get_client_state, get_current_user, resolve_day
from breadcrumb.api.schemas import activity_out, marker_out, record_out, MarkerResponse, RecordResponse
from breadcrumb.application.checklist import (
    AddMarkerFromChecklistUseCase, ClearMarkerDayUseCase, ToggleCheckboxUseCase,
    build_activity_view, change_checkbox_count, get_marker_suggestions, set_marker_visibility,
    show_all_markers,
)
from breadcrumb.application.client_state import ClientState
from breadcrumb.application.views import (
    ToggleDailyMarkerUseCase, build_daily_view, build_weekly_view, next_week, previous_week,
)
from breadcrumb.domain.dates import to_local_date, today_local, week_start
from breadcrumb.domain.entities import User
from breadcrumb.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/views", tags=["views"])

DAILY_VIEW_URL = "/api/v1/views/daily"


class AddMarkerRequest(BaseModel):
    label: str


class CheckboxCountRequest(BaseModel):
    delta: int


# === Daily ===

@router.get("/daily")
def daily_view(
    day: str | None = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    view = build_daily_view(db, user.id, resolve_day(day))
    return {
        "date": view["date"],
        "activities": [
            {
                "activity": activity_out(item["activity"]),
                "markers": [
                    {
                        "marker": marker_out(row["marker"]),
                        "record_id": row["record_id"],
                        "completed": row["completed"],
                    }
                    for row in item["markers"]
                ],
            }
            for item in view["activities"]
        ],
    }


@router.post("/daily/markers/{marker_id}/toggle", response_model=RecordResponse)
def toggle_daily_marker(
    marker_id: int,
    day: str | None = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    record = ToggleDailyMarkerUseCase(db).execute(user.id, marker_id, resolve_day(day))
    return record_out(record)


# === Weekly ===

def _week_link(step, start_day) -> str | None:
    """Navigation target, None at the edge of the calendar"""
    try:
        return step(start_day).isoformat()
    except ValidationError:
        return None


@router.get("/weekly")
def weekly_view(
    start: str | None = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Week grid; `start` defaults to the Sunday of the current week"""
    start_day = to_local_date(start) if start else week_start(today_local())
    view = build_weekly_view(db, user.id, start_day)
    return {
        "start": view["start"],
        "end": view["end"],
        "dates": view["dates"],
        "previous_start": _week_link(previous_week, start_day),
        "next_start": _week_link(next_week, start_day),
        "activities": [
            {
                "activity": activity_out(item["activity"]),
                "markers": [
                    {"marker": marker_out(row["marker"]), "cells": row["cells"]}
                    for row in item["markers"]
                ],
            }
            for item in view["activities"]
        ],
    }


# === Solo view ===

@router.get("/activity/{activity_id}")
def activity_view(
    activity_id: int,
    day: str | None = None,
    user: User = Depends(get_current_user),
    state: ClientState = Depends(get_client_state),
    db: Session = Depends(get_db),
):
    """Checklist of one activity; unknown activities send the client back to the daily view"""
    try:
        view = build_activity_view(db, state, user.id, activity_id, resolve_day(day))
    except NotFoundError:
        logger.info("Activity #%s not found for user #%s, redirecting", activity_id, user.id)
        return RedirectResponse(DAILY_VIEW_URL, status_code=302)

    return {
        "activity": activity_out(view["activity"]),
        "date": view["date"],
        "markers": [
            {**{k: v for k, v in row.items() if k != "marker"}, "marker": marker_out(row["marker"])}
            for row in view["markers"]
        ],
        "hidden_markers": [marker_out(m) for m in view["hidden_markers"]],
    }


@router.post("/activity/{activity_id}/markers", response_model=MarkerResponse)
def add_marker(
    activity_id: int,
    req: AddMarkerRequest,
    day: str | None = None,
    user: User = Depends(get_current_user),
    state: ClientState = Depends(get_client_state),
    db: Session = Depends(get_db),
):
    marker = AddMarkerFromChecklistUseCase(db).execute(
        user.id, activity_id, req.label, resolve_day(day), state
    )
    return marker_out(marker)


@router.post("/activity/{activity_id}/markers/{marker_id}/checkboxes/{index}/toggle")
def toggle_checkbox(
    activity_id: int,
    marker_id: int,
    index: int,
    day: str | None = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    checked = ToggleCheckboxUseCase(db).execute(
        user.id, marker_id, resolve_day(day), index, activity_id=activity_id
    )
    return {"marker_id": marker_id, "checked_count": checked}


@router.post("/activity/{activity_id}/markers/{marker_id}/clear")
def clear_marker_day(
    activity_id: int,
    marker_id: int,
    day: str | None = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    deleted = ClearMarkerDayUseCase(db).execute(
        user.id, marker_id, resolve_day(day), activity_id=activity_id
    )
    return {"marker_id": marker_id, "deleted": deleted}


@router.post("/activity/{activity_id}/markers/{marker_id}/checkbox-count")
def checkbox_count(
    activity_id: int,
    marker_id: int,
    req: CheckboxCountRequest,
    user: User = Depends(get_current_user),
    state: ClientState = Depends(get_client_state),
    db: Session = Depends(get_db),
):
    count = change_checkbox_count(db, state, user.id, activity_id, marker_id, req.delta)
    return {"marker_id": marker_id, "checkbox_count": count}


@router.post("/activity/{activity_id}/markers/show-all")
def show_all(
    activity_id: int,
    day: str | None = None,
    user: User = Depends(get_current_user),
    state: ClientState = Depends(get_client_state),
    db: Session = Depends(get_db),
):
    visible = show_all_markers(db, state, user.id, activity_id, resolve_day(day))
    return {"visible_marker_ids": sorted(visible)}


@router.post("/activity/{activity_id}/markers/{marker_id}/show")
def show_marker(
    activity_id: int,
    marker_id: int,
    day: str | None = None,
    user: User = Depends(get_current_user),
    state: ClientState = Depends(get_client_state),
    db: Session = Depends(get_db),
):
    visible = set_marker_visibility(db, state, user.id, activity_id, marker_id, resolve_day(day), True)
    return {"visible_marker_ids": sorted(visible)}


@router.post("/activity/{activity_id}/markers/{marker_id}/hide")
def hide_marker(
    activity_id: int,
    marker_id: int,
    day: str | None = None,
    user: User = Depends(get_current_user),
    state: ClientState = Depends(get_client_state),
    db: Session = Depends(get_db),
):
    visible = set_marker_visibility(db, state, user.id, activity_id, marker_id, resolve_day(day), False)
    return {"visible_marker_ids": sorted(visible)}


@router.get("/activity/{activity_id}/suggestions", response_model=list[MarkerResponse])
def marker_suggestions(
    activity_id: int,
    q: str = "",
    day: str | None = None,
    user: User = Depends(get_current_user),
    state: ClientState = Depends(get_client_state),
    db: Session = Depends(get_db),
):
    """Hidden markers whose label contains `q`"""
    markers = get_marker_suggestions(db, state, user.id, activity_id, resolve_day(day), q)
    return [marker_out(m) for m in markers]
