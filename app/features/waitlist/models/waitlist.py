from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String

from app.platform.db.base import BaseModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WaitlistEntry(BaseModel):
    __tablename__ = "waitlist"
    email = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=True)
    joined_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    # Only changed by processes outside this service
    status = Column(String, default="pending", nullable=False)

    def __repr__(self) -> str:
        return f"<WaitlistEntry(email='{self.email}', status='{self.status}')>"
