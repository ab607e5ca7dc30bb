from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Enum
import enum

from mini_jira.db.base import Base


class UserRole(enum.Enum):
    """Global role, independent of any project role"""
    ADMIN = "admin"
    MEMBER = "member"


class User(Base):
    """Registered user account"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.MEMBER)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
