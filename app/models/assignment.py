from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime, UTC

from app.db import Base


class Assignment(Base):
    __tablename__ = "assignments"

    assignment_id = Column(Integer, primary_key=True, autoincrement=True)
    mentor_id = Column(String, ForeignKey("profiles.profile_id"), nullable=False, index=True)
    mentee_id = Column(String, ForeignKey("profiles.profile_id"), nullable=False, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC))

    mentor = relationship("Profile", foreign_keys=[mentor_id])
    mentee = relationship("Profile", foreign_keys=[mentee_id])

    __table_args__ = (
        UniqueConstraint('mentor_id', 'mentee_id', name='uq_assignment_pair'),
    )
