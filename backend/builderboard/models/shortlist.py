"""Shortlist model: a user's bookmark of a job."""

from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint, Uuid, func
from sqlalchemy.orm import relationship

from builderboard.models.base import Base, UUIDMixin


class Shortlist(UUIDMixin, Base):
    __tablename__ = "shortlists"
    __mapper_args__ = {"eager_defaults": True}

    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    user_profile_id = Column(Uuid(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    job = relationship("Job", back_populates="shortlists")
    user_profile = relationship("Profile", back_populates="shortlists")

    __table_args__ = (
        UniqueConstraint("job_id", "user_profile_id", name="uq_shortlists_job_user"),
    )
