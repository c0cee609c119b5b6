"""
Seed demo data: one user, two activities, a week of breadcrumbs.
Run:  python seed_test_data.py [username]
"""
import sys
from datetime import timedelta

from sqlalchemy.orm import Session

from breadcrumb.application.activities import CreateActivityUseCase, CreateMarkerUseCase
from breadcrumb.application.client_state import ClientState
from breadcrumb.application.identity import LoginUseCase
from breadcrumb.domain.dates import today_local
from breadcrumb.domain.schedule import DailySchedule, WeeklySchedule
from breadcrumb.domain.entities import User
from breadcrumb.infrastructure.db.row_store import RowStore
from breadcrumb.infrastructure.repository import TrackerRepository

DEMO_USERNAME = "demo"


def seed(db: Session, username: str = DEMO_USERNAME, days: int = 7) -> User:
    """Creates the demo data once; a user that already has activities is left untouched"""
    user = LoginUseCase(db).execute(username, ClientState())
    repo = TrackerRepository(RowStore(db))
    if repo.get_activities(user.id):
        print(f"User {username} already has activities, skipping")
        return user

    exercise = CreateActivityUseCase(db).execute(user.id, "Exercise", DailySchedule())
    pushups = CreateMarkerUseCase(db).execute(user.id, exercise.id, "Pushups", target=5)
    stretch = CreateMarkerUseCase(db).execute(user.id, exercise.id, "Stretch")

    reading = CreateActivityUseCase(db).execute(
        user.id, "Reading", WeeklySchedule(days_of_week=frozenset({1, 3, 5}))
    )
    chapter = CreateMarkerUseCase(db).execute(user.id, reading.id, "Chapter", target=1)

    today = today_local()
    for i in range(days):
        day = today - timedelta(days=i)
        # alternate full and partial days so analytics have something to show
        for _ in range(5 if i % 2 == 0 else 3):
            repo.create_daily_record(user.id, pushups.id, day, True, pushups.target)
        if i % 3 == 0:
            repo.create_daily_record(user.id, stretch.id, day, True)
        if day.weekday() in (0, 2, 4):
            repo.create_daily_record(user.id, chapter.id, day, True, chapter.target)

    print(f"Seeded {username} (ID: {user.id}) with {days} days of records")
    return user


if __name__ == "__main__":
    from breadcrumb.infrastructure.db.session import get_session_factory

    db = get_session_factory()()
    try:
        seed(db, sys.argv[1] if len(sys.argv) > 1 else DEMO_USERNAME)
    finally:
        db.close()
