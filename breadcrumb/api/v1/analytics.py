"""
Analytics dashboard endpoint
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from breadcrumb.api.deps import get_db, get_current_user
from breadcrumb.application.analytics import build_analytics_view
from breadcrumb.domain.entities import User


router = APIRouter(prefix="/api/v1", tags=["analytics"])


@router.get("/analytics")
def analytics(
    view: str = "monthly",
    month: str | None = None,
    year: int | None = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    view=monthly&month=YYYY-MM | view=yearly&year=YYYY | view=alltime
    """
    summary = build_analytics_view(db, user.id, view_type=view, month=month, year=year)
    return {
        "start": summary.start.isoformat(),
        "end": summary.end.isoformat(),
        "total_completions": summary.total_completions,
        "unique_active_days": summary.unique_active_days,
        "activities": [
            {
                "activity_id": s.activity_id,
                "name": s.name,
                "completions": s.completions,
                "active_days": s.active_days,
                "days_with_targets": s.days_with_targets,
                "days_target_met": s.days_target_met,
                "percentage": s.percentage,
                "target_met_percentage": s.target_met_percentage,
                "has_targets": s.has_targets,
                "markers": [
                    {
                        "marker_id": m.marker_id,
                        "label": m.label,
                        "target": m.target,
                        "completions": m.completions,
                        "days_used": m.days_used,
                        "target_met_days": m.target_met_days,
                    }
                    for m in s.markers
                ],
            }
            for s in summary.activities
        ],
    }
