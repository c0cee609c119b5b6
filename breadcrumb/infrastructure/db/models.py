"""
SQLAlchemy ORM models: the four tables the tracker reads and writes.

Column names are the wire names used by the row store (snake_case).
"""
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Boolean, TIMESTAMP, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from breadcrumb.infrastructure.db.session import Base


def _utcnow() -> datetime:
    # Python-side default keeps microseconds, checkbox order relies on it
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=_utcnow, nullable=False
    )


class ActivityModel(Base):
    """
    User-defined habit/category, e.g. "Exercise"
    """
    __tablename__ = "activities"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # JSON text: {"type": "daily"} | {"type": "weekly", "daysOfWeek": [...]} | {"type": "custom", "customDays": N}
    schedule: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=_utcnow, nullable=False
    )


class ActivityMarkerModel(Base):
    """
    Labeled sub-item of an activity, e.g. "Pushups"
    """
    __tablename__ = "activity_markers"

    id: Mapped[int] = mapped_column(primary_key=True)
    activity_id: Mapped[int] = mapped_column(ForeignKey("activities.id"), nullable=False, index=True)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    is_default: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    target: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=_utcnow, nullable=False
    )


class DailyRecordModel(Base):
    """
    One completion ("breadcrumb") of a marker on a local calendar date.
    Several rows per (marker, date) are expected.
    """
    __tablename__ = "daily_records"
    __table_args__ = (
        Index("ix_daily_records_user_id_date", "user_id", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    activity_marker_id: Mapped[int] = mapped_column(
        ForeignKey("activity_markers.id"), nullable=False, index=True
    )
    # YYYY-MM-DD, compared as a string
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # Marker target snapshot at creation time
    target: Mapped[int | None] = mapped_column(Integer, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=_utcnow, nullable=False
    )
