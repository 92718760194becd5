from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from datetime import datetime, UTC

from app.db import Base


class Note(Base):
    __tablename__ = "notes"

    note_id = Column(Integer, primary_key=True, autoincrement=True)
    content_type = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    level = Column(String, nullable=True)

    visible_to_admin = Column(Boolean, nullable=False, default=True)
    visible_to_moderator = Column(Boolean, nullable=False, default=False)
    visible_to_mentor = Column(Boolean, nullable=False, default=False)

    profile_id_mentor = Column(String, ForeignKey("profiles.profile_id"), nullable=True, index=True)
    profile_id_mentee = Column(String, ForeignKey("profiles.profile_id"), nullable=True, index=True)

    created_at = Column(DateTime, default=lambda: datetime.now(UTC))
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))
