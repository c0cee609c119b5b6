"""
FastAPI dependencies (DB session, client state, current user)
"""
from datetime import date

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from breadcrumb.application.client_state import ClientState
from breadcrumb.application.identity import RestoreSessionUseCase
from breadcrumb.domain.dates import to_local_date, today_local
from breadcrumb.domain.entities import User
from breadcrumb.infrastructure.db.session import get_db as _get_db


# Re-export get_db for routers and test overrides
get_db = _get_db


def get_client_state(request: Request) -> ClientState:
    """
    Client-local state backed by the signed session cookie
    """
    return ClientState(request.session)


def get_current_user(
    state: ClientState = Depends(get_client_state),
    db: Session = Depends(get_db),
) -> User:
    """
    Re-validate the identity stored in the session against the store

    Raises:
        HTTPException(401): nothing stored, or the stored identity is stale
    """
    user = RestoreSessionUseCase(db).execute(state)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    return user


def resolve_day(day: str | None) -> date:
    """?day=YYYY-MM-DD, default today in the configured timezone"""
    return to_local_date(day) if day else today_local()
