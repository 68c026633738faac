"""Decision token record: server-side state of a single-use emailed link."""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Index, Uuid, func
from sqlalchemy.orm import relationship

from builderboard.models.base import Base

ACCEPT = "accept"
REJECT = "reject"
DECISION_ACTIONS = (ACCEPT, REJECT)


class ApplicationToken(Base):
    __tablename__ = "application_tokens"
    __mapper_args__ = {"eager_defaults": True}

    token_id = Column(String(64), primary_key=True)
    application_id = Column(Uuid(as_uuid=True), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False)
    action = Column(String(10), nullable=False)  # accept, reject
    used = Column(Boolean, default=False, nullable=False)
    used_at = Column(DateTime(timezone=True))
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    application = relationship("Application", back_populates="tokens")

    __table_args__ = (
        Index("idx_application_tokens_app_action", "application_id", "action"),
    )
