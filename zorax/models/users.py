import enum
from sqlalchemy import Column, String, Integer, Enum
from sqlalchemy.orm import relationship
from zorax.db.session import Base


class Role(str, enum.Enum):
    admin = "admin"
    staff = "staff"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(Enum(Role, native_enum=False, length=16), default=Role.staff, nullable=False)
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")
