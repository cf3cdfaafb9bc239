"""
Like Service
Ledger of likes between users. Every mutation writes the like and its
history row in a single transaction.
"""
from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional
import logging

from goodwill.core.database import atomic
from goodwill.core.exceptions import NotFoundError
from goodwill.models.like import Like
from goodwill.models.user import User
from goodwill.schemas.like import CreateLikeRequest
from goodwill.schemas.quality import LikeActionType, qualities_to_storage
from goodwill.services.like_history_service import LikeHistoryService
from goodwill.services.rate_limiter import LikeRateLimiter
from goodwill.services.user_service import UserService

logger = logging.getLogger(__name__)


class LikeService:
    """Service for like operations"""

    @staticmethod
    def create_like(
        db: Session,
        data: CreateLikeRequest,
        now: Optional[datetime] = None
    ) -> Like:
        """
        Send a like

        The recipient does not have to be registered: an inactive
        placeholder user is created for unknown phone numbers.

        Args:
            db: Database session
            data: Like payload
            now: Reference time for the quota check

        Returns:
            Created Like object

        Raises:
            NotFoundError: If the sender does not exist
            QuotaExceededError: If the sender has no likes left in the period
        """
        with atomic(db):
            # Row lock serialises concurrent likes from one sender where supported
            from_user = db.query(User).filter(
                User.phone_number == data.from_phone_number
            ).with_for_update().first()

            if not from_user:
                raise NotFoundError("From user not found")

            if not UserService.find_by_phone_number(db, data.to_phone_number):
                UserService.create(db, data.to_phone_number, is_active=False, commit=False)
                logger.info(f"Created placeholder user {data.to_phone_number}")

            LikeRateLimiter.check_quota(db, from_user, now)

            qualities = qualities_to_storage(data.qualities)
            like = Like(
                from_phone_number=data.from_phone_number,
                to_phone_number=data.to_phone_number,
                is_notified=False,
                is_endorsed=data.is_endorsed,
                qualities=qualities,
                used_search=data.used_search,
                is_mother_quality=data.is_mother_quality,
            )
            db.add(like)
            db.flush()

            LikeHistoryService.record_like_action(
                db,
                data.from_phone_number,
                data.to_phone_number,
                LikeActionType.LIKE,
                qualities,
            )

        db.refresh(like)
        logger.info(f"Like {like.id} sent from {like.from_phone_number} to {like.to_phone_number}")
        return like

    @staticmethod
    def get_likes(db: Session, phone_number: str) -> List[Like]:
        """All likes received by a phone number"""
        return db.query(Like).filter(Like.to_phone_number == phone_number).all()

    @staticmethod
    def get_like(db: Session, like_id: str) -> Like:
        like = db.query(Like).filter(Like.id == like_id).first()
        if not like:
            raise NotFoundError("Like not found")
        return like

    @staticmethod
    def _get_like_by_pair(db: Session, from_phone_number: str, to_phone_number: str) -> Like:
        # Oldest like of the pair when there are several
        like = db.query(Like).filter(
            Like.from_phone_number == from_phone_number,
            Like.to_phone_number == to_phone_number
        ).order_by(Like.created_at.asc(), Like.id.asc()).first()
        if not like:
            raise NotFoundError("Like not found")
        return like

    @staticmethod
    def _delete(db: Session, like: Like) -> None:
        db.delete(like)
        LikeHistoryService.record_like_action(
            db, like.from_phone_number, like.to_phone_number, LikeActionType.UNLIKE
        )
        logger.info(f"Like {like.id} removed")

    @staticmethod
    def unlike(db: Session, like_id: str) -> None:
        """
        Remove a like by id

        Raises:
            NotFoundError: If the like does not exist
        """
        with atomic(db):
            LikeService._delete(db, LikeService.get_like(db, like_id))

    @staticmethod
    def unlike_by_pair(db: Session, from_phone_number: str, to_phone_number: str) -> None:
        """
        Remove the like sent from one phone number to another

        Raises:
            NotFoundError: If no like exists between the pair
        """
        with atomic(db):
            like = LikeService._get_like_by_pair(db, from_phone_number, to_phone_number)
            LikeService._delete(db, like)

    @staticmethod
    def _set_endorsed(db: Session, like: Like, is_endorsed: bool) -> None:
        like.is_endorsed = is_endorsed

        action = LikeActionType.ENDORSE if is_endorsed else LikeActionType.UNENDORSE
        LikeHistoryService.record_like_action(
            db, like.from_phone_number, like.to_phone_number, action
        )
        logger.info(f"{action.value} like {like.id} {like.from_phone_number} -> {like.to_phone_number}")

    @staticmethod
    def endorse(db: Session, like_id: str) -> Like:
        """
        Mark a like as endorsed

        Endorsing twice is allowed and records a second ENDORSE row.

        Raises:
            NotFoundError: If the like does not exist
        """
        with atomic(db):
            like = LikeService.get_like(db, like_id)
            LikeService._set_endorsed(db, like, True)

        db.refresh(like)
        return like

    @staticmethod
    def endorse_by_pair(db: Session, from_phone_number: str, to_phone_number: str) -> Like:
        """
        Endorse the oldest like sent from one phone number to another
        """
        with atomic(db):
            like = LikeService._get_like_by_pair(db, from_phone_number, to_phone_number)
            LikeService._set_endorsed(db, like, True)

        db.refresh(like)
        return like

    @staticmethod
    def unendorse(db: Session, like_id: str) -> Like:
        """
        Remove the endorsement from a like

        Raises:
            NotFoundError: If the like does not exist
        """
        with atomic(db):
            like = LikeService.get_like(db, like_id)
            LikeService._set_endorsed(db, like, False)

        db.refresh(like)
        return like

    @staticmethod
    def unendorse_by_pair(db: Session, from_phone_number: str, to_phone_number: str) -> Like:
        with atomic(db):
            like = LikeService._get_like_by_pair(db, from_phone_number, to_phone_number)
            LikeService._set_endorsed(db, like, False)

        db.refresh(like)
        return like
