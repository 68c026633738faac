"""Profile model: one row per authenticated identity."""

from sqlalchemy import Column, String, Text, Uuid
from sqlalchemy.orm import relationship

from builderboard.models.base import Base, TimestampMixin, JSONList


class Profile(TimestampMixin, Base):
    __tablename__ = "profiles"

    # Same id as the auth provider's user id
    id = Column(Uuid(as_uuid=True), primary_key=True)
    email = Column(String(255), nullable=False, index=True)
    full_name = Column(String(100), nullable=False)
    avatar_url = Column(Text)
    bio = Column(Text)
    portfolio_url = Column(JSONList, default=list, nullable=False)
    skills = Column(JSONList, default=list, nullable=False)
    phone_number = Column(String(32))

    # Relationships
    jobs = relationship("Job", back_populates="owner")
    shortlists = relationship("Shortlist", back_populates="user_profile", cascade="all, delete-orphan")
