from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from zorax.db.session import Base


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the sessions table."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserSession(Base):
    """Server-side session: the cookie carries ``id``, the row carries the user binding."""

    __tablename__ = "sessions"

    id         = Column(String(64), primary_key=True)
    user_id    = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)

    user = relationship("User", back_populates="sessions")

    def is_expired(self, now: datetime = None) -> bool:
        return (now or utcnow()) >= self.expires_at
