from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, UTC

from app.db import Base


class Resource(Base):
    __tablename__ = "resources"

    resource_id = Column(Integer, primary_key=True, autoincrement=True)
    resource_name = Column(String(200), nullable=False)
    category = Column(String, nullable=False, index=True)
    condition = Column(String, nullable=False)

    assigned = Column(Boolean, nullable=False, default=False)
    # Only meaningful while assigned is true
    current_assignee = Column(String, ForeignKey("profiles.profile_id"), nullable=True, index=True)
    previous_assignee = Column(String, ForeignKey("profiles.profile_id"), nullable=True)

    monetary_value = Column(String, nullable=True)
    deductible_donation = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=lambda: datetime.now(UTC))
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))

    assignee = relationship("Profile", foreign_keys=[current_assignee])
