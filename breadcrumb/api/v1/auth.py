"""
Authentication routes (username login, logout, current user)
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from breadcrumb.api.deps import get_db, get_client_state, get_current_user
from breadcrumb.api.schemas import UserResponse, user_out
from breadcrumb.application.client_state import ClientState
from breadcrumb.application.identity import LoginUseCase, LogoutUseCase
from breadcrumb.domain.entities import User


router = APIRouter(prefix="/api/v1", tags=["auth"])


class LoginRequest(BaseModel):
    username: str


@router.post("/login", response_model=UserResponse)
def login(
    req: LoginRequest,
    state: ClientState = Depends(get_client_state),
    db: Session = Depends(get_db),
):
    """Log in by username; unknown usernames are registered on the fly"""
    user = LoginUseCase(db).execute(req.username, state)
    return user_out(user)


@router.post("/logout")
def logout(state: ClientState = Depends(get_client_state)):
    """Forget the identity and every other client-side setting"""
    LogoutUseCase().execute(state)
    return {"status": "logged_out"}


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return user_out(user)
