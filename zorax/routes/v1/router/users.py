from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from zorax.core.security import get_current_user, require_admin
from zorax.dependencies import get_db
from zorax.models.users import User
from zorax.schemas.users import UserCreate, UserOut
from zorax.services.user_service import create_user

router = APIRouter()


@router.get("/me", response_model=UserOut)
def read_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.post(
    "",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Admin-only: create a new user account
    """
    return create_user(db, user_data)
