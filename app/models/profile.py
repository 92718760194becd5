from sqlalchemy import Column, String, DateTime, Enum, Boolean
import enum
from datetime import datetime, UTC

from app.db import Base


class ProfileRole(enum.Enum):
    mentee = "mentee"
    mentor = "mentor"
    moderator = "moderator"
    admin = "admin"
    super_admin = "super_admin"

    @property
    def rank(self) -> int:
        return ROLE_RANK[self]

    def at_least(self, other: "ProfileRole") -> bool:
        return self.rank >= other.rank


# Privilege order, lowest first
ROLE_RANK = {
    ProfileRole.mentee: 1,
    ProfileRole.mentor: 2,
    ProfileRole.moderator: 3,
    ProfileRole.admin: 4,
    ProfileRole.super_admin: 5,
}


class Profile(Base):
    __tablename__ = "profiles"

    # Subject id issued by the identity provider; never reassigned
    profile_id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)
    role = Column(Enum(ProfileRole), nullable=False, default=ProfileRole.mentee)
    is_active = Column(Boolean, nullable=False, default=True)
    pending = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=lambda: datetime.now(UTC))
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))

    @property
    def name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)
