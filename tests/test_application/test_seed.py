"""
Tests for the demo data seeder
"""
from seed_test_data import seed
from breadcrumb.infrastructure.db.row_store import RowStore
from breadcrumb.infrastructure.repository import TrackerRepository


def test_seed_creates_demo_data(db_session):
    user = seed(db_session, "demo", days=3)

    repo = TrackerRepository(RowStore(db_session))
    activities = repo.get_activities(user.id)
    assert [a.name for a in activities] == ["Exercise", "Reading"]
    assert len(repo.get_activity_markers(activities[0].id)) == 2


def test_seed_is_idempotent(db_session):
    user = seed(db_session, "demo", days=2)
    again = seed(db_session, "demo", days=2)

    assert again.id == user.id
    assert len(TrackerRepository(RowStore(db_session)).get_activities(user.id)) == 2
