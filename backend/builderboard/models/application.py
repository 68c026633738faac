"""Application model: a request to join a job, decided once by its owner."""

from sqlalchemy import Column, String, Text, ForeignKey, UniqueConstraint, Index, Uuid
from sqlalchemy.orm import relationship

from builderboard.models.base import Base, TimestampMixin, UUIDMixin, JSONList

PENDING = "pending"
ACCEPTED = "accepted"
REJECTED = "rejected"


class Application(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "applications"

    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    applicant_user_id = Column(Uuid(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    applicant_email = Column(String(255), nullable=False)
    applicant_name = Column(String(100), nullable=False)
    profile_links = Column(JSONList, default=list, nullable=False)
    application_message = Column(Text, nullable=False)
    phone_country_code = Column(String(8))
    phone_number = Column(String(32))
    status = Column(String(10), default=PENDING, nullable=False)  # pending, accepted, rejected

    # Relationships
    job = relationship("Job", back_populates="applications")
    applicant = relationship("Profile")
    tokens = relationship("ApplicationToken", back_populates="application", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("job_id", "applicant_user_id", name="uq_applications_job_applicant"),
        Index("idx_applications_applicant_created", "applicant_user_id", "created_at"),
    )
