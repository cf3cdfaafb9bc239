"""
User model - SQLAlchemy ORM
"""
from sqlalchemy import Column, String, Boolean, DateTime
from datetime import datetime
import uuid

from goodwill.core.database import Base


class User(Base):
    """User identified by phone number"""

    __tablename__ = "users"

    # Primary Key
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Basic Info
    phone_number = Column(String, unique=True, nullable=False, index=True)
    full_name = Column(String, nullable=True)

    # False for placeholder accounts provisioned by an incoming like
    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, phone_number={self.phone_number}, is_active={self.is_active})>"
