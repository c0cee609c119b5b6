"""Daily and weekly views"""
from datetime import date

from sqlalchemy.orm import Session

from breadcrumb.domain.dates import format_date_local, shift_days, week_dates
from breadcrumb.domain.entities import DailyRecord
from breadcrumb.infrastructure.db.row_store import RowStore
from breadcrumb.infrastructure.repository import TrackerRepository


def _first_record_for_marker(records: list[DailyRecord], marker_id: int) -> DailyRecord | None:
    for r in records:
        if r.activity_marker_id == marker_id:
            return r
    return None


# --- Daily ---

def build_daily_view(db: Session, user_id: int, day: date) -> dict:
    """All activities with a single completed flag per marker for one date"""
    repo = TrackerRepository(RowStore(db))
    date_string = format_date_local(day)
    records = repo.get_daily_records(user_id, date_string)

    activities = []
    for activity in repo.get_activities(user_id):
        markers = []
        for marker in repo.get_activity_markers(activity.id):
            record = _first_record_for_marker(records, marker.id)
            markers.append({
                "marker": marker,
                "record_id": record.id if record else None,
                "completed": record.completed if record else False,
            })
        activities.append({"activity": activity, "markers": markers})

    return {"date": date_string, "activities": activities}


class ToggleDailyMarkerUseCase:
    """
    Flip a marker's completed flag for a date: an existing record is updated
    in place, otherwise a completed record is created.
    """
    def __init__(self, db: Session):
        self.repo = TrackerRepository(RowStore(db))

    def execute(self, user_id: int, marker_id: int, day: date | str) -> DailyRecord:
        marker = self.repo.get_activity_marker(marker_id)
        self.repo.get_activity(user_id, marker.activity_id)

        date_string = format_date_local(day)
        existing = _first_record_for_marker(self.repo.get_daily_records(user_id, date_string), marker_id)
        if existing:
            return self.repo.update_daily_record(existing.id, not existing.completed)
        return self.repo.create_daily_record(user_id, marker_id, date_string, True)


# --- Weekly ---

def previous_week(start: date) -> date:
    return shift_days(start, -7)


def next_week(start: date) -> date:
    return shift_days(start, 7)


def build_weekly_view(db: Session, user_id: int, start: date) -> dict:
    """
    7-day grid starting at `start`: activity -> marker -> one cell per date.
    A cell is checked when the marker has a completed record that day.
    """
    repo = TrackerRepository(RowStore(db))
    dates = week_dates(start)
    date_strings = [d.isoformat() for d in dates]
    records = repo.get_daily_records_for_activity(user_id, dates[0], dates[-1])

    counts: dict[tuple[int, str], int] = {}
    for r in records:
        if r.completed:
            key = (r.activity_marker_id, r.date_string)
            counts[key] = counts.get(key, 0) + 1

    activities = []
    for activity in repo.get_activities(user_id):
        rows = []
        for marker in repo.get_activity_markers(activity.id):
            cells = []
            for ds in date_strings:
                count = counts.get((marker.id, ds), 0)
                cells.append({"date": ds, "checked": count > 0, "count": count})
            rows.append({"marker": marker, "cells": cells})
        activities.append({"activity": activity, "markers": rows})

    return {
        "start": date_strings[0],
        "end": date_strings[-1],
        "dates": date_strings,
        "activities": activities,
    }
