"""
Tests for the v1 HTTP API (session cookie identity, views, analytics)
"""
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from breadcrumb.api.deps import get_db
from breadcrumb.main import app


@pytest.fixture
def client(db_engine):
    """Test client wired to the in-memory database"""
    SessionLocal = sessionmaker(bind=db_engine)

    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def logged_in(client):
    response = client.post("/api/v1/login", json={"username": "alice"})
    assert response.status_code == 200
    return client


@pytest.fixture
def activity(logged_in):
    """Exercise with Pushups (target 5) and Stretch"""
    activity = logged_in.post("/api/v1/activities", json={"name": "Exercise"}).json()
    pushups = logged_in.post(
        f"/api/v1/activities/{activity['id']}/markers", json={"label": "Pushups", "target": 5}
    ).json()
    stretch = logged_in.post(
        f"/api/v1/activities/{activity['id']}/markers", json={"label": "Stretch"}
    ).json()
    return activity, pushups, stretch


class TestAuth:
    def test_login_and_me(self, client):
        user = client.post("/api/v1/login", json={"username": "alice"}).json()
        me = client.get("/api/v1/me")
        assert me.status_code == 200
        assert me.json() == user

    def test_login_twice_same_user(self, client):
        first = client.post("/api/v1/login", json={"username": "alice"}).json()
        client.post("/api/v1/logout")
        second = client.post("/api/v1/login", json={"username": "alice"}).json()
        assert first["id"] == second["id"]

    def test_blank_username_is_400(self, client):
        response = client.post("/api/v1/login", json={"username": "  "})
        assert response.status_code == 400
        assert response.json() == {"detail": "Username is required"}

    def test_requires_login(self, client):
        assert client.get("/api/v1/me").status_code == 401
        assert client.get("/api/v1/activities").status_code == 401

    def test_logout(self, logged_in):
        assert logged_in.post("/api/v1/logout").json() == {"status": "logged_out"}
        assert logged_in.get("/api/v1/me").status_code == 401


class TestActivities:
    def test_list_with_markers(self, logged_in, activity):
        [listed] = logged_in.get("/api/v1/activities").json()
        assert listed["name"] == "Exercise"
        assert [m["label"] for m in listed["markers"]] == ["Pushups", "Stretch"]

    def test_weekly_schedule(self, logged_in):
        response = logged_in.post(
            "/api/v1/activities",
            json={"name": "Reading", "schedule": {"type": "weekly", "daysOfWeek": [5, 1]}},
        )
        assert response.status_code == 200
        assert response.json()["schedule"] == {"type": "weekly", "daysOfWeek": [1, 5]}

    def test_invalid_schedule_is_400(self, logged_in):
        response = logged_in.post(
            "/api/v1/activities", json={"name": "Reading", "schedule": {"type": "weekly"}}
        )
        assert response.status_code == 400

    def test_marker_on_unknown_activity_is_404(self, logged_in):
        response = logged_in.post("/api/v1/activities/999/markers", json={"label": "X"})
        assert response.status_code == 404

    def test_set_and_clear_target(self, logged_in, activity):
        _, pushups, _ = activity
        url = f"/api/v1/markers/{pushups['id']}/target"
        assert logged_in.put(url, json={"target": "8"}).json()["target"] == 8
        assert logged_in.put(url, json={"target": ""}).json()["target"] is None
        assert logged_in.put(url, json={"target": "zero"}).status_code == 400


class TestSoloView:
    def test_checklist_flow(self, logged_in, activity):
        act, pushups, stretch = activity
        base = f"/api/v1/views/activity/{act['id']}"
        day = "?day=2026-03-07"

        view = logged_in.get(base + day).json()
        assert [m["id"] for m in view["hidden_markers"]] == [stretch["id"]]

        for i in range(5):
            response = logged_in.post(f"{base}/markers/{pushups['id']}/checkboxes/{i}/toggle{day}")
            assert response.json() == {"marker_id": pushups["id"], "checked_count": i + 1}

        row = logged_in.get(base + day).json()["markers"][0]
        assert row["checked_count"] == 5
        assert row["target_met"] is True

        cleared = logged_in.post(f"{base}/markers/{pushups['id']}/clear{day}").json()
        assert cleared == {"marker_id": pushups["id"], "deleted": 5}

    def test_visibility_and_row_length_live_in_the_session(self, logged_in, activity):
        act, pushups, stretch = activity
        base = f"/api/v1/views/activity/{act['id']}"

        shown = logged_in.post(f"{base}/markers/{stretch['id']}/show?day=2026-03-07").json()
        assert shown == {"visible_marker_ids": sorted([pushups["id"], stretch["id"]])}

        count = logged_in.post(f"{base}/markers/{pushups['id']}/checkbox-count", json={"delta": -3}).json()
        assert count == {"marker_id": pushups["id"], "checkbox_count": 7}

        view = logged_in.get(base + "?day=2026-03-07").json()
        assert view["hidden_markers"] == []
        assert len(view["markers"][0]["checkboxes"]) == 7

    def test_show_all(self, logged_in, activity):
        act, pushups, stretch = activity
        base = f"/api/v1/views/activity/{act['id']}"

        shown = logged_in.post(f"{base}/markers/show-all?day=2026-03-07").json()

        assert shown == {"visible_marker_ids": sorted([pushups["id"], stretch["id"]])}
        assert logged_in.get(base + "?day=2026-03-07").json()["hidden_markers"] == []

    def test_marker_through_other_activity_is_404(self, logged_in, activity):
        _, pushups, _ = activity
        other = logged_in.post("/api/v1/activities", json={"name": "Reading"}).json()
        base = f"/api/v1/views/activity/{other['id']}/markers/{pushups['id']}"

        assert logged_in.post(f"{base}/checkboxes/0/toggle?day=2026-03-07").status_code == 404
        assert logged_in.post(f"{base}/clear?day=2026-03-07").status_code == 404
        assert logged_in.post(f"{base}/checkbox-count", json={"delta": 1}).status_code == 404

    def test_session_cookie_stays_small(self, logged_in, activity):
        act, _, stretch = activity
        base = f"/api/v1/views/activity/{act['id']}/markers/{stretch['id']}/show"
        for i in range(120):
            day = date(2026, 1, 1) + timedelta(days=i)
            assert logged_in.post(f"{base}?day={day.isoformat()}").status_code == 200

        assert len(logged_in.cookies["session"]) < 4096
        assert logged_in.get("/api/v1/me").status_code == 200

    def test_suggestions(self, logged_in, activity):
        act, _, stretch = activity
        response = logged_in.get(f"/api/v1/views/activity/{act['id']}/suggestions?q=str&day=2026-03-07")
        assert [m["id"] for m in response.json()] == [stretch["id"]]

    def test_unknown_activity_redirects_to_daily_view(self, logged_in):
        response = logged_in.get("/api/v1/views/activity/999", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/api/v1/views/daily"

    def test_bad_day_is_400(self, logged_in, activity):
        act, _, _ = activity
        assert logged_in.get(f"/api/v1/views/activity/{act['id']}?day=07-03-2026").status_code == 400


class TestDailyWeekly:
    def test_daily_toggle(self, logged_in, activity):
        _, pushups, _ = activity
        record = logged_in.post(f"/api/v1/views/daily/markers/{pushups['id']}/toggle?day=2026-03-07").json()
        assert record["completed"] is True
        assert record["date"] == "2026-03-07"

        daily = logged_in.get("/api/v1/views/daily?day=2026-03-07").json()
        row = daily["activities"][0]["markers"][0]
        assert row["record_id"] == record["id"]
        assert row["completed"] is True

    def test_weekly_navigation(self, logged_in, activity):
        week = logged_in.get("/api/v1/views/weekly?start=2026-03-01").json()
        assert week["dates"][0] == "2026-03-01"
        assert week["end"] == "2026-03-07"
        assert week["previous_start"] == "2026-02-22"
        assert week["next_start"] == "2026-03-08"

    def test_week_past_end_of_calendar_is_400(self, logged_in):
        assert logged_in.get("/api/v1/views/weekly?start=9999-12-30").status_code == 400

    def test_last_week_has_no_next_link(self, logged_in):
        week = logged_in.get("/api/v1/views/weekly?start=9999-12-25").json()
        assert week["end"] == "9999-12-31"
        assert week["next_start"] is None
        assert week["previous_start"] == "9999-12-18"


class TestAnalytics:
    def test_monthly(self, logged_in, activity):
        act, pushups, _ = activity
        for i in range(5):
            logged_in.post(f"/api/v1/views/activity/{act['id']}/markers/{pushups['id']}/checkboxes/{i}/toggle?day=2026-03-07")

        summary = logged_in.get("/api/v1/analytics?view=monthly&month=2026-03").json()

        assert summary["start"] == "2026-03-01"
        assert summary["total_completions"] == 5
        [stats] = summary["activities"]
        assert stats["percentage"] == 100
        assert stats["days_target_met"] == 1
        assert stats["has_targets"] is True

    def test_unknown_view_is_400(self, logged_in):
        assert logged_in.get("/api/v1/analytics?view=weekly").status_code == 400

    def test_year_beyond_calendar_is_400(self, logged_in):
        assert logged_in.get("/api/v1/analytics?view=yearly&year=10000").status_code == 400


def test_health(client):
    assert client.get("/health").text == "ok"
