"""Activity and marker use cases"""
import logging

from sqlalchemy.orm import Session

from breadcrumb.domain.entities import Activity, ActivityMarker
from breadcrumb.domain.schedule import Schedule
from breadcrumb.errors import ValidationError
from breadcrumb.infrastructure.db.row_store import RowStore
from breadcrumb.infrastructure.repository import TrackerRepository

logger = logging.getLogger(__name__)


def validate_target(target) -> int | None:
    """None clears the target, otherwise a positive int"""
    if target is None:
        return None
    if isinstance(target, bool) or not isinstance(target, int) or target < 1:
        raise ValidationError("Target must be a positive whole number")
    return target


def parse_target_input(raw: str | int | None) -> int | None:
    """Target as typed into the editor: blank clears it"""
    if raw is None:
        return None
    if isinstance(raw, int):
        return validate_target(raw)
    raw = raw.strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError("Target must be a positive whole number")
    return validate_target(value)


class CreateActivityUseCase:
    def __init__(self, db: Session):
        self.repo = TrackerRepository(RowStore(db))

    def execute(self, user_id: int, name: str, schedule: Schedule | None = None) -> Activity:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Activity name cannot be empty")

        activity = self.repo.create_activity(user_id, name, schedule)
        logger.info("Created activity #%s for user #%s", activity.id, user_id)
        return activity


class CreateMarkerUseCase:
    def __init__(self, db: Session):
        self.repo = TrackerRepository(RowStore(db))

    def execute(
        self,
        user_id: int,
        activity_id: int,
        label: str,
        is_default: bool | None = None,
        target: int | None = None,
    ) -> ActivityMarker:
        label = (label or "").strip()
        if not label:
            raise ValidationError("Marker label cannot be empty")
        target = validate_target(target)

        # ownership check, raises NotFoundError
        self.repo.get_activity(user_id, activity_id)
        return self.repo.create_activity_marker(activity_id, label, is_default=is_default, target=target)


class SetMarkerTargetUseCase:
    """
    Change the marker's current target. Existing records keep their own
    snapshot, so past days are still judged against the old value.
    """
    def __init__(self, db: Session):
        self.repo = TrackerRepository(RowStore(db))

    def execute(self, user_id: int, marker_id: int, raw_target: str | int | None) -> ActivityMarker:
        target = parse_target_input(raw_target)
        marker = self.repo.get_activity_marker(marker_id)
        self.repo.get_activity(user_id, marker.activity_id)
        return self.repo.update_marker_target(marker_id, target)


def list_activities_with_markers(db: Session, user_id: int) -> list[tuple[Activity, list[ActivityMarker]]]:
    repo = TrackerRepository(RowStore(db))
    return [(a, repo.get_activity_markers(a.id)) for a in repo.get_activities(user_id)]
