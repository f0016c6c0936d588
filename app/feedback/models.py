"""Feedback database model"""
from datetime import datetime, timezone
from uuid import uuid4
from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint, Uuid
from app.db.base import Base

MEMBER_PROVIDER_CONSTRAINT = "uq_feedback_member_provider"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Feedback(Base):
    """A patient's rating and optional comment for one provider"""
    __tablename__ = "feedback"
    __table_args__ = (
        UniqueConstraint("member_id", "provider_name", name=MEMBER_PROVIDER_CONSTRAINT),
    )

    id = Column(Uuid, primary_key=True, default=uuid4)
    member_id = Column(String(36), nullable=False, index=True)
    provider_name = Column(String(80), nullable=False, index=True)
    rating = Column(Integer, nullable=False)  # 1-5 stars
    comment = Column(String(200), nullable=True)
    submitted_at = Column(DateTime(timezone=True), default=utc_now, nullable=False, index=True)

    def __repr__(self) -> str:
        return (
            f"Feedback(id={self.id}, member_id={self.member_id!r}, "
            f"provider_name={self.provider_name!r}, rating={self.rating}, "
            f"submitted_at={self.submitted_at})"
        )
