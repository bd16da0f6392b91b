import secrets
from datetime import timedelta
from typing import Optional

from fastapi import Depends
from fastapi.security import APIKeyCookie
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from zorax.core.config import settings
from zorax.core.errors import Forbidden, Unauthenticated
from zorax.dependencies import get_db
from zorax.logger import Logger
from zorax.models.sessions import UserSession, utcnow
from zorax.models.users import Role, User

logger = Logger.get_logger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_HASH_ROUNDS,
)
session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


def verify_password(plain, hashed):
    return pwd_context.verify(plain, hashed)


def hash_password(password):
    return pwd_context.hash(password)


def create_session(db: Session, user: User) -> UserSession:
    now = utcnow()
    user_session = UserSession(
        id=secrets.token_urlsafe(32),
        user_id=user.id,
        created_at=now,
        expires_at=now + timedelta(seconds=settings.SESSION_MAX_AGE),
    )
    db.add(user_session)
    db.commit()
    db.refresh(user_session)
    return user_session


def destroy_session(db: Session, session_id: Optional[str]) -> bool:
    """Delete the session row; False when there was nothing to delete."""
    if not session_id:
        return False
    deleted = db.query(UserSession).filter(UserSession.id == session_id).delete()
    db.commit()
    return deleted > 0


def get_current_user(
    session_id: Optional[str] = Depends(session_cookie),
    db: Session = Depends(get_db),
) -> User:
    if not session_id:
        raise Unauthenticated("Not authenticated")

    user_session = db.query(UserSession).filter(UserSession.id == session_id).first()
    if not user_session:
        raise Unauthenticated("Not authenticated")
    if user_session.is_expired():
        logger.info("Session for user %s expired", user_session.user_id)
        db.delete(user_session)
        db.commit()
        raise Unauthenticated("Not authenticated")

    user = db.query(User).filter(User.id == user_session.user_id).first()
    if not user:
        raise Unauthenticated("User not found")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != Role.admin:
        raise Forbidden("Forbidden: Admin access required")
    return user
