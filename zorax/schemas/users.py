from typing import Optional

from pydantic import BaseModel, Field

from zorax.models.users import Role


class UserBase(BaseModel):
    username: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


class UserCreate(UserBase):
    password: str = Field(..., min_length=1)
    role: Role = Role.staff


class UserOut(UserBase):
    id: int
    role: Role

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    # Both optional so a missing field gets the login-specific 400 message.
    username: Optional[str] = None
    password: Optional[str] = None


class MessageOut(BaseModel):
    message: str
