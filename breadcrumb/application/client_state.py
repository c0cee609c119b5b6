"""
Client-local state: active user, checkbox row lengths, visible markers.

A best-effort cache owned by one client, never authoritative. The backing
storage is any mutable mapping of JSON-serializable values: the signed
session cookie over HTTP, a plain dict in tests.
"""
from typing import Any, MutableMapping

from breadcrumb.domain.entities import User

ACTIVE_USER_KEY = "breadcrumbUser"
DEFAULT_CHECKBOX_COUNT = 10
MIN_CHECKBOX_COUNT = 1
# visibility sets kept in the session cookie, oldest written evicted first
MAX_VISIBILITY_ENTRIES = 14

_VISIBLE_MARKERS_INFIX = "_visible_markers_"


def _checkbox_count_key(marker_id: int) -> str:
    return f"marker_{marker_id}_count"


def _visible_markers_key(activity_id: int, date_string: str) -> str:
    return f"{activity_id}{_VISIBLE_MARKERS_INFIX}{date_string}"


class ClientState:
    def __init__(self, storage: MutableMapping[str, Any] | None = None):
        self.storage = storage if storage is not None else {}

    # --- identity ---

    @property
    def active_user(self) -> dict | None:
        """Raw persisted identity ({"id": ..., "username": ...}), unvalidated"""
        return self.storage.get(ACTIVE_USER_KEY)

    def set_active_user(self, user: User) -> None:
        self.storage[ACTIVE_USER_KEY] = user.to_dict()

    def clear_active_user(self) -> None:
        self.storage.pop(ACTIVE_USER_KEY, None)

    # --- checkbox row length per marker ---

    def checkbox_count(self, marker_id: int) -> int:
        value = self.storage.get(_checkbox_count_key(marker_id))
        try:
            count = int(value)
        except (TypeError, ValueError):
            return DEFAULT_CHECKBOX_COUNT
        return max(MIN_CHECKBOX_COUNT, count)

    def set_checkbox_count(self, marker_id: int, count: int) -> int:
        count = max(MIN_CHECKBOX_COUNT, count)
        self.storage[_checkbox_count_key(marker_id)] = count
        return count

    # --- visible markers per (activity, date) ---

    def visible_markers(self, activity_id: int, date_string: str) -> set[int] | None:
        """None when nothing was stored for this activity and date"""
        value = self.storage.get(_visible_markers_key(activity_id, date_string))
        if value is None:
            return None
        try:
            return {int(v) for v in value}
        except (TypeError, ValueError):
            return None

    def set_visible_markers(self, activity_id: int, date_string: str, marker_ids: set[int]) -> None:
        """Keeps only the most recently written MAX_VISIBILITY_ENTRIES sets"""
        key = _visible_markers_key(activity_id, date_string)
        # re-insert so key order is write order
        self.storage.pop(key, None)
        self.storage[key] = sorted(marker_ids)
        self._evict_visibility()

    def _evict_visibility(self) -> None:
        keys = [k for k in self.storage if _VISIBLE_MARKERS_INFIX in k]
        for key in keys[:-MAX_VISIBILITY_ENTRIES]:
            del self.storage[key]

    def clear(self) -> None:
        self.storage.clear()
