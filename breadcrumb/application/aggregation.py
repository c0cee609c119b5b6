"""
Completion statistics over daily records.

Pure functions: inputs are entities already fetched for a date window,
nothing is queried or mutated here.

Rules:
- only completed records count
- a marker's effective target on a date is the snapshot stored on that
  date's records, falling back to the marker's current target
- markers without an effective target keep their raw counts but are left
  out of every percentage and target figure
- any ratio with a zero denominator is 0
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from breadcrumb.domain.entities import Activity, ActivityMarker, DailyRecord, creation_order_key


def percent(numerator: int, denominator: int) -> int:
    """round(numerator / denominator * 100), halves rounded up; 0 when denominator is 0"""
    if not denominator:
        return 0
    value = Decimal(numerator) * 100 / Decimal(denominator)
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def is_target_met(count: int, target: int | None) -> bool:
    return target is not None and count >= target


@dataclass(frozen=True)
class DayProgress:
    date_string: str
    count: int
    target: int | None
    target_met: bool
    percentage: int | None  # None for untargeted days


@dataclass(frozen=True)
class MarkerStats:
    marker_id: int
    label: str
    target: int | None  # current target
    completions: int
    days_used: int
    target_met_days: int
    days: list[DayProgress] = field(default_factory=list)

    def day(self, date_string: str) -> DayProgress | None:
        for d in self.days:
            if d.date_string == date_string:
                return d
        return None


@dataclass(frozen=True)
class ActivityStats:
    activity_id: int
    name: str
    completions: int
    active_days: int
    days_with_targets: int
    days_target_met: int
    percentage: int
    target_met_percentage: int
    markers: list[MarkerStats] = field(default_factory=list)

    @property
    def has_targets(self) -> bool:
        return any(m.target is not None for m in self.markers)


@dataclass(frozen=True)
class AnalyticsSummary:
    start: date
    end: date
    total_completions: int
    unique_active_days: int
    activities: list[ActivityStats] = field(default_factory=list)


def completed_records_for_marker(marker: ActivityMarker, records: Iterable[DailyRecord]) -> list[DailyRecord]:
    return [r for r in records if r.activity_marker_id == marker.id and r.completed]


def group_by_date(records: Iterable[DailyRecord]) -> dict[str, list[DailyRecord]]:
    by_date: dict[str, list[DailyRecord]] = defaultdict(list)
    for r in records:
        by_date[r.date_string].append(r)
    return dict(by_date)


def effective_target(marker: ActivityMarker, day_records: list[DailyRecord]) -> int | None:
    """Snapshot of the latest record that has one, else the marker's current target"""
    snapshots = [r for r in day_records if r.target is not None]
    if snapshots:
        return max(snapshots, key=creation_order_key).target
    return marker.target


def compute_marker_stats(marker: ActivityMarker, records: Iterable[DailyRecord]) -> MarkerStats:
    by_date = group_by_date(completed_records_for_marker(marker, records))

    days = []
    for date_string in sorted(by_date):
        day_records = by_date[date_string]
        count = len(day_records)
        target = effective_target(marker, day_records)
        days.append(DayProgress(
            date_string=date_string,
            count=count,
            target=target,
            target_met=is_target_met(count, target),
            percentage=percent(count, target) if target is not None else None,
        ))

    return MarkerStats(
        marker_id=marker.id,
        label=marker.label,
        target=marker.target,
        completions=sum(d.count for d in days),
        days_used=len(days),
        target_met_days=sum(1 for d in days if d.target_met),
        days=days,
    )


def compute_activity_stats(
    activity: Activity,
    markers: list[ActivityMarker],
    records: Iterable[DailyRecord],
) -> ActivityStats:
    records = list(records)
    marker_stats = [compute_marker_stats(m, records) for m in markers]

    # date -> target_met flag of every marker that had an effective target that day
    targeted_by_date: dict[str, list[bool]] = defaultdict(list)
    active_dates: set[str] = set()
    for ms in marker_stats:
        for d in ms.days:
            active_dates.add(d.date_string)
            if d.target is not None:
                targeted_by_date[d.date_string].append(d.target_met)

    days_target_met = sum(1 for flags in targeted_by_date.values() if all(flags))

    # overall ratio uses the current target of currently-targeted markers
    targeted = [ms for ms in marker_stats if ms.target is not None]
    done = sum(ms.completions for ms in targeted)
    expected = sum(ms.target * ms.days_used for ms in targeted)

    return ActivityStats(
        activity_id=activity.id,
        name=activity.name,
        completions=sum(ms.completions for ms in marker_stats),
        active_days=len(active_dates),
        days_with_targets=len(targeted_by_date),
        days_target_met=days_target_met,
        percentage=percent(done, expected),
        target_met_percentage=percent(days_target_met, len(targeted_by_date)),
        markers=marker_stats,
    )


def compute_analytics(
    activities: list[Activity],
    markers_by_activity: dict[int, list[ActivityMarker]],
    records: Iterable[DailyRecord],
    start: date,
    end: date,
) -> AnalyticsSummary:
    records = list(records)
    stats = [
        compute_activity_stats(a, markers_by_activity.get(a.id, []), records)
        for a in activities
    ]

    known_markers = {m.id for markers in markers_by_activity.values() for m in markers}
    active_dates = {
        r.date_string for r in records
        if r.completed and r.activity_marker_id in known_markers
    }
    return AnalyticsSummary(
        start=start,
        end=end,
        total_completions=sum(s.completions for s in stats),
        unique_active_days=len(active_dates),
        activities=stats,
    )
