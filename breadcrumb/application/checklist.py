"""
Per-activity checklist ("solo view").

Each marker on a date is a row of N checkboxes. Checkboxes are positional:
the completed records of (marker, date), ordered by creation, fill the row
left to right. Checkbox i is checked iff there are more than i records, and
unchecking it deletes the i-th record of that order.

Row length and which markers are shown live in ClientState, not the store.
"""
import logging
from datetime import date

from sqlalchemy.orm import Session

from breadcrumb.application.activities import CreateMarkerUseCase
from breadcrumb.application.aggregation import effective_target, is_target_met
from breadcrumb.application.client_state import ClientState, DEFAULT_CHECKBOX_COUNT
from breadcrumb.domain.dates import format_date_local
from breadcrumb.domain.entities import ActivityMarker, DailyRecord, creation_order_key
from breadcrumb.errors import NotFoundError, StoreError, ValidationError
from breadcrumb.infrastructure.db.row_store import RowStore
from breadcrumb.infrastructure.repository import TrackerRepository

logger = logging.getLogger(__name__)


def ordered_checks(records: list[DailyRecord], marker_id: int, date_string: str) -> list[DailyRecord]:
    """Completed records of one marker on one date, in checkbox order"""
    matching = [
        r for r in records
        if r.activity_marker_id == marker_id and r.date_string == date_string and r.completed
    ]
    return sorted(matching, key=creation_order_key)


def checkbox_states(checked_count: int, checkbox_count: int) -> list[bool]:
    """Row of checkboxes; records beyond the row length still count but are not drawn"""
    return [i < checked_count for i in range(checkbox_count)]


def is_checkbox_checked(records: list[DailyRecord], marker_id: int, date_string: str, index: int) -> bool:
    return len(ordered_checks(records, marker_id, date_string)) > index


# --- visibility ---

def visible_marker_ids(
    state: ClientState,
    activity_id: int,
    date_string: str,
    markers: list[ActivityMarker],
) -> set[int]:
    """Stored set for (activity, date); by default only the first-created marker"""
    stored = state.visible_markers(activity_id, date_string)
    if stored is not None:
        return stored
    return {markers[0].id} if markers else set()


def show_marker(state: ClientState, activity_id: int, date_string: str,
                markers: list[ActivityMarker], marker_id: int) -> set[int]:
    visible = visible_marker_ids(state, activity_id, date_string, markers)
    visible.add(marker_id)
    state.set_visible_markers(activity_id, date_string, visible)
    return visible


def hide_marker(state: ClientState, activity_id: int, date_string: str,
                markers: list[ActivityMarker], marker_id: int) -> set[int]:
    visible = visible_marker_ids(state, activity_id, date_string, markers)
    visible.discard(marker_id)
    state.set_visible_markers(activity_id, date_string, visible)
    return visible


def marker_suggestions(markers: list[ActivityMarker], visible: set[int], query: str = "") -> list[ActivityMarker]:
    """Hidden markers matching the query; every hidden marker for a blank query"""
    hidden = [m for m in markers if m.id not in visible]
    query = (query or "").strip().lower()
    if not query:
        return hidden
    return [m for m in hidden if query in m.label.lower()]


def adjust_checkbox_count(state: ClientState, marker_id: int, delta: int) -> int:
    return state.set_checkbox_count(marker_id, state.checkbox_count(marker_id) + delta)


# --- view ---

def build_activity_view(db: Session, state: ClientState, user_id: int, activity_id: int, day: date) -> dict:
    """
    Solo view of one activity on one date.

    Raises:
        NotFoundError: activity missing or owned by another user
    """
    repo = TrackerRepository(RowStore(db))
    activity = repo.get_activity(user_id, activity_id)
    markers = repo.get_activity_markers(activity_id)
    date_string = format_date_local(day)
    records = repo.get_daily_records(user_id, date_string)
    visible = visible_marker_ids(state, activity_id, date_string, markers)

    rows = []
    for marker in markers:
        checks = ordered_checks(records, marker.id, date_string)
        count = state.checkbox_count(marker.id)
        target = effective_target(marker, checks)
        rows.append({
            "marker": marker,
            "visible": marker.id in visible,
            "checked_count": len(checks),
            "checkbox_count": count,
            "checkboxes": checkbox_states(len(checks), count),
            "target": target,
            "target_met": is_target_met(len(checks), target),
        })

    return {
        "activity": activity,
        "date": date_string,
        "markers": rows,
        "hidden_markers": [m for m in markers if m.id not in visible],
    }


# --- use cases ---

def _owned_marker(repo: TrackerRepository, user_id: int, marker_id: int,
                  activity_id: int | None = None) -> ActivityMarker:
    """Marker of one of the user's activities; `activity_id` pins which one"""
    marker = repo.get_activity_marker(marker_id)
    if activity_id is not None and marker.activity_id != activity_id:
        raise NotFoundError(f"Marker #{marker_id} not found in activity #{activity_id}")
    repo.get_activity(user_id, marker.activity_id)
    return marker


class ToggleCheckboxUseCase:
    """
    Toggle checkbox `index` of a marker's row on a date.

    Checked -> delete the record at that position.
    Unchecked -> add a record carrying the marker's current target as snapshot.
    Returns the checked count after the change.
    """
    def __init__(self, db: Session):
        self.repo = TrackerRepository(RowStore(db))

    def execute(self, user_id: int, marker_id: int, day: date | str, index: int,
                activity_id: int | None = None) -> int:
        if index < 0:
            raise ValidationError("Checkbox index must be >= 0")

        marker = _owned_marker(self.repo, user_id, marker_id, activity_id)

        date_string = format_date_local(day)
        checks = ordered_checks(self.repo.get_daily_records(user_id, date_string), marker_id, date_string)

        if index < len(checks):
            self.repo.delete_daily_record(checks[index].id)
        else:
            self.repo.create_daily_record(user_id, marker_id, date_string, True, marker.target)

        # refetch; the store is the only source of truth
        return len(ordered_checks(self.repo.get_daily_records(user_id, date_string), marker_id, date_string))


class ClearMarkerDayUseCase:
    """
    Delete every check of a marker on a date, one record at a time.
    A failure part way leaves the rest in place and is reported, not retried.
    """
    def __init__(self, db: Session):
        self.repo = TrackerRepository(RowStore(db))

    def execute(self, user_id: int, marker_id: int, day: date | str, activity_id: int | None = None) -> int:
        _owned_marker(self.repo, user_id, marker_id, activity_id)

        date_string = format_date_local(day)
        checks = ordered_checks(self.repo.get_daily_records(user_id, date_string), marker_id, date_string)

        deleted = 0
        for record in checks:
            try:
                self.repo.delete_daily_record(record.id)
            except StoreError as exc:
                raise StoreError(
                    f"Cleared {deleted} of {len(checks)} checks before failing: {exc}"
                ) from exc
            deleted += 1
        return deleted


class AddMarkerFromChecklistUseCase:
    """New marker from the solo view: visible on the current date, default row length"""
    def __init__(self, db: Session):
        self.create_marker = CreateMarkerUseCase(db)
        self.repo = self.create_marker.repo

    def execute(self, user_id: int, activity_id: int, label: str, day: date | str, state: ClientState) -> ActivityMarker:
        marker = self.create_marker.execute(user_id, activity_id, label)
        markers = self.repo.get_activity_markers(activity_id)

        date_string = format_date_local(day)
        state.set_checkbox_count(marker.id, DEFAULT_CHECKBOX_COUNT)
        show_marker(state, activity_id, date_string, markers, marker.id)
        return marker


def set_marker_visibility(
    db: Session,
    state: ClientState,
    user_id: int,
    activity_id: int,
    marker_id: int,
    day: date | str,
    visible: bool,
) -> set[int]:
    repo = TrackerRepository(RowStore(db))
    repo.get_activity(user_id, activity_id)
    markers = repo.get_activity_markers(activity_id)
    if marker_id not in {m.id for m in markers}:
        raise NotFoundError(f"Marker #{marker_id} not found in activity #{activity_id}")

    date_string = format_date_local(day)
    if visible:
        return show_marker(state, activity_id, date_string, markers, marker_id)
    return hide_marker(state, activity_id, date_string, markers, marker_id)


def get_marker_suggestions(
    db: Session,
    state: ClientState,
    user_id: int,
    activity_id: int,
    day: date | str,
    query: str = "",
) -> list[ActivityMarker]:
    repo = TrackerRepository(RowStore(db))
    repo.get_activity(user_id, activity_id)
    markers = repo.get_activity_markers(activity_id)
    visible = visible_marker_ids(state, activity_id, format_date_local(day), markers)
    return marker_suggestions(markers, visible, query)


def show_all_markers(
    db: Session,
    state: ClientState,
    user_id: int,
    activity_id: int,
    day: date | str,
) -> set[int]:
    """Every marker of the activity becomes visible on that date"""
    repo = TrackerRepository(RowStore(db))
    repo.get_activity(user_id, activity_id)
    visible = {m.id for m in repo.get_activity_markers(activity_id)}
    state.set_visible_markers(activity_id, format_date_local(day), visible)
    return visible


def change_checkbox_count(
    db: Session,
    state: ClientState,
    user_id: int,
    activity_id: int,
    marker_id: int,
    delta: int,
) -> int:
    _owned_marker(TrackerRepository(RowStore(db)), user_id, marker_id, activity_id)
    return adjust_checkbox_count(state, marker_id, delta)
