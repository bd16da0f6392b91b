from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from zorax.core.config import settings
from zorax.core.errors import ValidationError
from zorax.core.security import session_cookie
from zorax.dependencies import get_db
from zorax.schemas.users import LoginRequest, MessageOut, UserOut
from zorax.services import auth_service

router = APIRouter()


@router.post("/login", response_model=UserOut)
def login(
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    """Check the credentials and bind a new server-side session to the user."""
    if not credentials.username or not credentials.password:
        raise ValidationError("Username and password are required")

    user, user_session = auth_service.login(db, credentials.username, credentials.password)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=user_session.id,
        max_age=settings.SESSION_MAX_AGE,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return user


@router.post("/logout", response_model=MessageOut)
def logout(
    response: Response,
    session_id: Optional[str] = Depends(session_cookie),
    db: Session = Depends(get_db),
):
    auth_service.logout(db, session_id)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}
