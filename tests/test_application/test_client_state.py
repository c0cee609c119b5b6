"""
Tests for client-local settings
"""
from breadcrumb.application.client_state import ClientState, DEFAULT_CHECKBOX_COUNT, MAX_VISIBILITY_ENTRIES


class TestCheckboxCount:
    def test_default(self, client_state):
        assert client_state.checkbox_count(1) == DEFAULT_CHECKBOX_COUNT

    def test_never_below_one(self, client_state):
        assert client_state.set_checkbox_count(1, 0) == 1
        assert client_state.set_checkbox_count(1, -5) == 1
        assert client_state.checkbox_count(1) == 1

    def test_corrupt_value_falls_back_to_default(self):
        state = ClientState({"marker_1_count": "many"})
        assert state.checkbox_count(1) == DEFAULT_CHECKBOX_COUNT

    def test_stored_value_clamped_on_read(self):
        assert ClientState({"marker_1_count": 0}).checkbox_count(1) == 1


class TestVisibleMarkers:
    def test_unset_is_none(self, client_state):
        assert client_state.visible_markers(1, "2026-03-07") is None

    def test_keyed_by_activity_and_date(self, client_state):
        client_state.set_visible_markers(1, "2026-03-07", {3, 2})
        assert client_state.visible_markers(1, "2026-03-07") == {2, 3}
        assert client_state.visible_markers(1, "2026-03-08") is None
        assert client_state.visible_markers(2, "2026-03-07") is None

    def test_stored_as_json_friendly_list(self, client_state):
        client_state.set_visible_markers(1, "2026-03-07", {3, 2})
        assert client_state.storage["1_visible_markers_2026-03-07"] == [2, 3]

    def test_malformed_is_none(self):
        state = ClientState({"1_visible_markers_2026-03-07": ["x"]})
        assert state.visible_markers(1, "2026-03-07") is None


class TestVisibilityBound:
    def test_old_dates_evicted(self, client_state):
        for day in range(1, 29):
            client_state.set_visible_markers(1, f"2026-02-{day:02d}", {1, 2})

        kept = [k for k in client_state.storage if "_visible_markers_" in k]
        assert len(kept) == MAX_VISIBILITY_ENTRIES
        assert client_state.visible_markers(1, "2026-02-28") == {1, 2}
        assert client_state.visible_markers(1, "2026-02-01") is None

    def test_rewrite_refreshes_entry(self, client_state):
        client_state.set_visible_markers(1, "2026-01-01", {1})
        for day in range(2, MAX_VISIBILITY_ENTRIES + 1):
            client_state.set_visible_markers(1, f"2026-01-{day:02d}", {1})
        client_state.set_visible_markers(1, "2026-01-01", {1, 2})
        client_state.set_visible_markers(1, "2026-02-01", {1})

        assert client_state.visible_markers(1, "2026-01-01") == {1, 2}
        assert client_state.visible_markers(1, "2026-01-02") is None

    def test_other_keys_survive_eviction(self, client_state):
        client_state.storage["breadcrumbUser"] = {"id": 1, "username": "alice"}
        client_state.set_checkbox_count(5, 3)
        for day in range(1, 29):
            client_state.set_visible_markers(1, f"2026-02-{day:02d}", {1})

        assert client_state.active_user == {"id": 1, "username": "alice"}
        assert client_state.checkbox_count(5) == 3
