from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from zorax.core.errors import InvalidCredentials, SessionError
from zorax.core.security import create_session, destroy_session, pwd_context, verify_password
from zorax.logger import Logger
from zorax.models.sessions import UserSession
from zorax.models.users import User
from zorax.services.user_service import get_user_by_username

logger = Logger.get_logger(__name__)


def authenticate(db: Session, username: str, password: str) -> User:
    """
    Return the user whose credentials match.
    Unknown usernames and wrong passwords raise the same InvalidCredentials,
    and an unknown username still pays for one hash check.
    """
    user = get_user_by_username(db, username)
    if not user:
        pwd_context.dummy_verify()
        logger.info("Login failed for %r", username)
        raise InvalidCredentials()
    if not verify_password(password, user.hashed_password):
        logger.info("Login failed for %r", username)
        raise InvalidCredentials()
    return user


def login(db: Session, username: str, password: str) -> tuple[User, UserSession]:
    user = authenticate(db, username, password)
    user_session = create_session(db, user)
    logger.info("User %s logged in", user.username)
    return user, user_session


def logout(db: Session, session_id: Optional[str]) -> None:
    try:
        if destroy_session(db, session_id):
            logger.info("Session destroyed")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Logout error")
        raise SessionError("Failed to logout")
