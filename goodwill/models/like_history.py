"""
LikeHistory model - append-only audit log of like actions
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON
from datetime import datetime

from goodwill.core.database import Base


class LikeHistory(Base):
    """
    One row per LIKE / UNLIKE / ENDORSE / UNENDORSE action.

    Rows are never updated or deleted and have no reference to the likes
    table, so history survives an unlike.
    """
    __tablename__ = "like_history"

    # Autoincrement id doubles as insertion order for rows with equal timestamps
    id = Column(Integer, primary_key=True, autoincrement=True)

    from_phone_number = Column(String, nullable=False, index=True)
    to_phone_number = Column(String, nullable=False, index=True)

    action = Column(String(16), nullable=False)  # LikeActionType value

    # Snapshot of the like's qualities, LIKE actions only
    qualities = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<LikeHistory(id={self.id}, action={self.action}, from={self.from_phone_number}, to={self.to_phone_number})>"
