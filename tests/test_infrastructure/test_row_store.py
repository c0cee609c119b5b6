"""
Tests for the table-level row store
"""
import pytest

from breadcrumb.errors import StoreError
from breadcrumb.infrastructure.db.row_store import Filter, eq, gte, lte


@pytest.fixture
def user_row(store):
    return store.insert("users", {"username": "alice"})


class TestInsert:
    def test_returns_stored_row_with_defaults(self, store, user_row):
        assert user_row["id"] is not None
        assert user_row["username"] == "alice"
        assert user_row["created_at"] is not None

    def test_unique_username_violation_is_store_error(self, store, user_row):
        with pytest.raises(StoreError):
            store.insert("users", {"username": "alice"})

    def test_session_usable_after_failure(self, store, user_row):
        with pytest.raises(StoreError):
            store.insert("users", {"username": "alice"})
        assert store.insert("users", {"username": "bob"})["username"] == "bob"

    def test_unknown_table(self, store):
        with pytest.raises(StoreError):
            store.insert("habits", {"title": "x"})

    def test_unknown_column(self, store):
        with pytest.raises(StoreError):
            store.insert("users", {"username": "x", "password": "secret"})


class TestSelect:
    def test_equality_and_range_filters(self, store, user_row):
        activity = store.insert("activities", {"user_id": user_row["id"], "name": "Exercise"})
        marker = store.insert("activity_markers", {"activity_id": activity["id"], "label": "Pushups"})
        for day in ("2026-02-28", "2026-03-01", "2026-03-15", "2026-03-31", "2026-04-01"):
            store.insert("daily_records", {
                "user_id": user_row["id"],
                "activity_marker_id": marker["id"],
                "date": day,
                "completed": True,
            })

        rows = store.select(
            "daily_records",
            eq("user_id", user_row["id"]),
            gte("date", "2026-03-01"),
            lte("date", "2026-03-31"),
        )
        assert [r["date"] for r in rows] == ["2026-03-01", "2026-03-15", "2026-03-31"]

    def test_rows_come_back_in_id_order(self, store):
        ids = [store.insert("users", {"username": name})["id"] for name in ("c", "a", "b")]
        assert [r["id"] for r in store.select("users")] == ids

    def test_no_match_is_empty(self, store):
        assert store.select("users", eq("username", "nobody")) == []

    def test_unknown_operator(self, store):
        with pytest.raises(StoreError):
            store.select("users", Filter("id", "like", 1))

    def test_unknown_filter_column(self, store):
        with pytest.raises(StoreError):
            store.select("users", eq("email", "a@b.c"))


class TestUpdateDelete:
    def test_update_returns_updated_rows(self, store, user_row):
        activity = store.insert("activities", {"user_id": user_row["id"], "name": "Exercise"})
        marker = store.insert("activity_markers", {"activity_id": activity["id"], "label": "Pushups", "target": 5})

        rows = store.update("activity_markers", {"target": None}, eq("id", marker["id"]))

        assert len(rows) == 1
        assert rows[0]["target"] is None

    def test_update_without_match(self, store):
        assert store.update("activity_markers", {"target": 3}, eq("id", 999)) == []

    def test_delete_returns_count(self, store, user_row):
        assert store.delete("users", eq("id", user_row["id"])) == 1
        assert store.select("users", eq("id", user_row["id"])) == []
        assert store.delete("users", eq("id", user_row["id"])) == 0
