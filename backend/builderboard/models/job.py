"""Job model: a project posting owned by its creator."""

from sqlalchemy import Column, String, Text, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from builderboard.models.base import Base, TimestampMixin, UUIDMixin, JSONList


class Job(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "jobs"

    owner_profile_id = Column(Uuid(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(255))
    skills_needed = Column(JSONList, default=list, nullable=False)
    commitment = Column(String(20), nullable=False)
    resource_links = Column(JSONList, default=list, nullable=False)  # [{name, url}]
    status = Column(String(10), default="active", nullable=False)  # active, inactive

    # Relationships
    owner = relationship("Profile", back_populates="jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")
    shortlists = relationship("Shortlist", back_populates="job", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_jobs_status_created", "status", "created_at"),
    )
