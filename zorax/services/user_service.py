from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from zorax.core.errors import Conflict, InternalError
from zorax.core.security import hash_password
from zorax.logger import Logger
from zorax.models.users import Role, User
from zorax.schemas.users import UserCreate

logger = Logger.get_logger(__name__)

DEFAULT_USERS = (
    UserCreate(username="admin", password="786786", name="Admin User", role=Role.admin),
    UserCreate(username="staff1", password="1234", name="Staff User", role=Role.staff),
)


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, user_data: UserCreate) -> User:
    if get_user_by_username(db, user_data.username):
        raise Conflict("Username already exists")

    user = User(
        username=user_data.username,
        name=user_data.name,
        hashed_password=hash_password(user_data.password),
        role=user_data.role or Role.staff,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with another request creating the same username
        db.rollback()
        raise Conflict("Username already exists")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Create user error")
        raise InternalError("Failed to create user")
    db.refresh(user)
    logger.info("Created user %s (%s)", user.username, user.role.value)
    return user


def seed_default_users(db: Session) -> int:
    """Create the stock admin and staff accounts when they are missing. Returns how many were created."""
    created = 0
    for user_data in DEFAULT_USERS:
        if get_user_by_username(db, user_data.username):
            continue
        create_user(db, user_data)
        created += 1
    return created
