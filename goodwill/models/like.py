"""
Like model - a directed endorsement from one phone number to another
"""
from sqlalchemy import Column, String, Boolean, DateTime, JSON
from datetime import datetime
import uuid

from goodwill.core.database import Base


class Like(Base):
    """Model for likes between users"""
    __tablename__ = "likes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Soft references to users.phone_number, no foreign key
    from_phone_number = Column(String, nullable=False, index=True)
    to_phone_number = Column(String, nullable=False, index=True)

    is_endorsed = Column(Boolean, default=False, nullable=False)
    used_search = Column(Boolean, default=False, nullable=False)
    # Legacy flag stored as sent by the client, the scorer does not read it
    is_mother_quality = Column(Boolean, default=False, nullable=False)
    is_notified = Column(Boolean, default=False, nullable=False)

    # List of QualityWithMetadata dicts
    qualities = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<Like(id={self.id}, from={self.from_phone_number}, to={self.to_phone_number}, endorsed={self.is_endorsed})>"
