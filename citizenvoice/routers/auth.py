"""Authentication routes: sign-up, password grant and the current user."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import User
from ..schemas import PasswordGrantRequest, SessionResponse, SignUpRequest, UserResponse, UserUpdateRequest
from ..services import (
    authenticate_user,
    create_access_token,
    get_current_user,
    sign_up,
    token_lifetime_seconds,
    update_user_metadata,
)

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_response(user: User, token: str) -> SessionResponse:
    return SessionResponse(
        access_token=token,
        expires_in=token_lifetime_seconds(),
        user=UserResponse.model_validate(user),
    )


@router.post("/signup", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def signup_endpoint(
    payload: SignUpRequest,
    db: Session = Depends(get_session),
) -> SessionResponse:
    user, token = sign_up(db, payload)
    return _session_response(user, token)


@router.post("/token", response_model=SessionResponse)
async def token_endpoint(
    payload: PasswordGrantRequest,
    db: Session = Depends(get_session),
) -> SessionResponse:
    user = authenticate_user(db, str(payload.email), payload.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid login credentials")
    return _session_response(user, create_access_token(user.id))


@router.get("/user", response_model=UserResponse)
async def current_user_endpoint(current_user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(current_user)


@router.patch("/user", response_model=UserResponse)
async def update_user_endpoint(
    payload: UserUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> UserResponse:
    user = update_user_metadata(db, current_user, payload.user_metadata)
    return UserResponse.model_validate(user)


__all__ = ["router"]
