"""
Like Rate Limiter
Bounds how many likes a sender may issue per rolling period
"""
from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from typing import Optional, Tuple
import logging

from goodwill.core.config import settings
from goodwill.core.exceptions import QuotaExceededError
from goodwill.models.like import Like
from goodwill.models.user import User
from goodwill.schemas.like import RemainingLikes

logger = logging.getLogger(__name__)


class LikeRateLimiter:
    """
    Quota of likes per period.

    Periods are LIKE_PERIOD_DAYS long and anchored on the sender's account
    creation, not on calendar months. Accounts younger than
    NEW_USER_HOURS_THRESHOLD get NEW_USER_LIKE_LIMIT likes, everyone else
    MONTHLY_LIKE_LIMIT.
    """

    @staticmethod
    def _period_index(user: User, now: datetime) -> int:
        days_since_creation = (now - user.created_at) // timedelta(days=1)
        return max(0, days_since_creation) // settings.LIKE_PERIOD_DAYS

    @staticmethod
    def get_period_bounds(user: User, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
        """
        Start and end of the sender's current period, end exclusive
        """
        now = now or datetime.utcnow()
        period = timedelta(days=settings.LIKE_PERIOD_DAYS)
        start = user.created_at + period * LikeRateLimiter._period_index(user, now)
        return start, start + period

    @staticmethod
    def get_next_refresh_date(user: User, now: Optional[datetime] = None) -> datetime:
        _, end = LikeRateLimiter.get_period_bounds(user, now)
        return end

    @staticmethod
    def is_within_new_user_window(user: User, now: Optional[datetime] = None) -> bool:
        now = now or datetime.utcnow()
        return now - user.created_at <= timedelta(hours=settings.NEW_USER_HOURS_THRESHOLD)

    @staticmethod
    def get_max_likes(user: User, now: Optional[datetime] = None) -> int:
        if LikeRateLimiter.is_within_new_user_window(user, now):
            return settings.NEW_USER_LIKE_LIMIT
        return settings.MONTHLY_LIKE_LIMIT

    @staticmethod
    def get_likes_in_current_period(
        db: Session,
        user: User,
        now: Optional[datetime] = None
    ) -> int:
        """
        Count likes sent by the user inside the current period

        Args:
            db: Database session
            user: Sender
            now: Reference time, defaults to utcnow

        Returns:
            Number of likes with start <= created_at < end
        """
        start, end = LikeRateLimiter.get_period_bounds(user, now)
        return db.query(Like).filter(
            Like.from_phone_number == user.phone_number,
            Like.created_at >= start,
            Like.created_at < end
        ).count()

    @staticmethod
    def check_quota(db: Session, user: User, now: Optional[datetime] = None) -> None:
        """
        Raise QuotaExceededError if the sender has no likes left
        """
        likes_count = LikeRateLimiter.get_likes_in_current_period(db, user, now)
        max_likes = LikeRateLimiter.get_max_likes(user, now)

        if likes_count >= max_likes:
            logger.warning(
                f"Like limit reached for {user.phone_number}: {likes_count}/{max_likes}"
            )
            raise QuotaExceededError("Monthly like limit reached")

    @staticmethod
    def get_remaining_likes_and_refresh_date(
        db: Session,
        user: User,
        now: Optional[datetime] = None
    ) -> RemainingLikes:
        """
        Likes left in the current period and when the next period starts
        """
        now = now or datetime.utcnow()
        likes_count = LikeRateLimiter.get_likes_in_current_period(db, user, now)
        max_likes = LikeRateLimiter.get_max_likes(user, now)

        return RemainingLikes(
            remaining_likes=max(0, max_likes - likes_count),
            likes_refreshed_at=LikeRateLimiter.get_next_refresh_date(user, now),
        )
