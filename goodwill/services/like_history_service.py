"""
Like History Service
Append-only audit trail of like actions
"""
from sqlalchemy.orm import Session, Query
from sqlalchemy import or_, and_
from typing import List, Optional, Dict, Any

from goodwill.models.like_history import LikeHistory
from goodwill.schemas.quality import LikeActionType


class LikeHistoryService:
    """Service for like history records"""

    @staticmethod
    def record_like_action(
        db: Session,
        from_phone_number: str,
        to_phone_number: str,
        action: LikeActionType,
        qualities: Optional[List[Dict[str, Any]]] = None
    ) -> LikeHistory:
        """
        Append a history row to the caller's transaction

        The row is flushed but not committed: the ledger operation that
        records it owns the transaction.

        Args:
            db: Database session
            from_phone_number: Sender of the like
            to_phone_number: Recipient of the like
            action: Action performed
            qualities: Qualities snapshot (LIKE actions only)

        Returns:
            Pending LikeHistory object
        """
        entry = LikeHistory(
            from_phone_number=from_phone_number,
            to_phone_number=to_phone_number,
            action=LikeActionType(action).value,
            qualities=qualities,
        )
        db.add(entry)
        db.flush()
        return entry

    @staticmethod
    def sent_history_query(db: Session, phone_number: str) -> Query:
        """LIKE actions sent by a phone number, newest first"""
        return db.query(LikeHistory).filter(
            LikeHistory.from_phone_number == phone_number,
            LikeHistory.action == LikeActionType.LIKE.value
        ).order_by(LikeHistory.created_at.desc(), LikeHistory.id.desc())

    @staticmethod
    def received_history_query(db: Session, phone_number: str) -> Query:
        """LIKE actions received by a phone number, newest first"""
        return db.query(LikeHistory).filter(
            LikeHistory.to_phone_number == phone_number,
            LikeHistory.action == LikeActionType.LIKE.value
        ).order_by(LikeHistory.created_at.desc(), LikeHistory.id.desc())

    @staticmethod
    def get_sent_history(db: Session, phone_number: str) -> List[LikeHistory]:
        return LikeHistoryService.sent_history_query(db, phone_number).all()

    @staticmethod
    def get_received_history(db: Session, phone_number: str) -> List[LikeHistory]:
        return LikeHistoryService.received_history_query(db, phone_number).all()

    @staticmethod
    def get_history_between_users(
        db: Session,
        first_phone_number: str,
        second_phone_number: str
    ) -> List[LikeHistory]:
        """All actions between two users in either direction, newest first"""
        return db.query(LikeHistory).filter(
            or_(
                and_(
                    LikeHistory.from_phone_number == first_phone_number,
                    LikeHistory.to_phone_number == second_phone_number,
                ),
                and_(
                    LikeHistory.from_phone_number == second_phone_number,
                    LikeHistory.to_phone_number == first_phone_number,
                ),
            )
        ).order_by(LikeHistory.created_at.desc(), LikeHistory.id.desc()).all()

    @staticmethod
    def get_most_recent_action(
        db: Session,
        from_phone_number: str,
        to_phone_number: str
    ) -> Optional[LikeHistory]:
        return db.query(LikeHistory).filter(
            LikeHistory.from_phone_number == from_phone_number,
            LikeHistory.to_phone_number == to_phone_number
        ).order_by(LikeHistory.created_at.desc(), LikeHistory.id.desc()).first()
