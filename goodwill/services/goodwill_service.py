"""
Goodwill Service
Reputation score computed from the likes a user has received.

Scores are computed on every call and never stored.
"""
from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from typing import List, Optional, Dict, Any
import logging

from goodwill.models.like import Like
from goodwill.models.user import User
from goodwill.schemas.goodwill import GoodwillBreakdown, GoodwillScore, QualityScore
from goodwill.schemas.quality import has_mother_qualities, is_mother_quality
from goodwill.services.quality_service import QualityService

logger = logging.getLogger(__name__)

# Base value of a like and the mother-quality bonus
NORMAL_LIKE_VALUE = 1
MOTHER_QUALITY_MULTIPLIER = 2

ENDORSEMENT_MULTIPLIER = 3
NO_SEARCH_PENALTY = 0.7
RETURN_LIKE_PENALTY = 0.85
FARM_ACCOUNT_PENALTY = 0.5

# Farm account thresholds
FARM_SENT_LIKES_THRESHOLD = 50
FARM_SENT_LIKES_MIN_AGE = timedelta(hours=24)
FARM_NEW_USER_LIKES_THRESHOLD = 10
FARM_NEW_USER_WINDOW = timedelta(hours=1)
FARM_DISCONNECTION_THRESHOLD = 0.8

# Highest threshold first, first match wins
GOODWILL_LEVELS = [
    (100, "Exceptional"),
    (60, "Very High"),
    (20, "High"),
    (3, "Moderate"),
]
DEFAULT_GOODWILL_LEVEL = "Developing"


def get_score_level(score: float) -> str:
    """Map a goodwill score to its level name"""
    for threshold, name in GOODWILL_LEVELS:
        if score >= threshold:
            return name
    return DEFAULT_GOODWILL_LEVEL


class CommunityDisconnectionCalculator:
    """
    How isolated a sender's like network is, from 0 (connected) to 1
    (completely disconnected).

    This implementation always reports 0. Subclass and pass an instance
    to GoodwillService to plug in a graph based metric.
    """

    def calculate(self, db: Session, phone_number: str) -> float:
        logger.debug(f"Calculating community disconnection for {phone_number}")
        return 0.0


class GoodwillService:
    """Service for goodwill scoring"""

    def __init__(
        self,
        community_disconnection: Optional[CommunityDisconnectionCalculator] = None
    ):
        self.community_disconnection = community_disconnection or CommunityDisconnectionCalculator()

    @staticmethod
    def _received_likes(db: Session, user: User) -> List[Like]:
        return db.query(Like).filter(
            Like.to_phone_number == user.phone_number
        ).order_by(Like.created_at.asc(), Like.id.asc()).all()

    def calculate_goodwill_score(
        self,
        db: Session,
        user: User,
        now: Optional[datetime] = None
    ) -> GoodwillScore:
        """
        Score, level, penalty breakdown and per-quality scores of a user

        Each received like starts at 1 and is multiplied in turn by the
        endorsement, mother-quality, no-search, return-like and farm-account
        factors. The breakdown records how much each penalty removed.

        Args:
            db: Database session
            user: Recipient to score
            now: Reference time for the farm-account heuristic

        Returns:
            GoodwillScore
        """
        now = now or datetime.utcnow()
        breakdown = GoodwillBreakdown()
        penalties = breakdown.penalties

        for like in self._received_likes(db, user):
            like_value = float(NORMAL_LIKE_VALUE)

            if like.is_endorsed:
                like_value *= ENDORSEMENT_MULTIPLIER

            # Membership is checked on the qualities, not the stored is_mother_quality flag
            if has_mother_qualities(like.qualities):
                like_value *= MOTHER_QUALITY_MULTIPLIER

            if not like.used_search:
                like_value *= NO_SEARCH_PENALTY
                penalties.no_search_penalty += (1 - NO_SEARCH_PENALTY) * like_value

            if self.is_return_like(db, like):
                like_value *= RETURN_LIKE_PENALTY
                penalties.return_like_penalty += (1 - RETURN_LIKE_PENALTY) * like_value

            if self.is_from_farm_account(db, like, now):
                like_value *= FARM_ACCOUNT_PENALTY
                penalties.farm_account_penalty += (1 - FARM_ACCOUNT_PENALTY) * like_value

            breakdown.base_score += like_value

        score = breakdown.base_score

        return GoodwillScore(
            score=score,
            level=get_score_level(score),
            breakdown=breakdown,
            quality_scores=self.calculate_quality_scores(db, user),
        )

    @staticmethod
    def is_return_like(db: Session, like: Like) -> bool:
        """True if the recipient had already liked the sender before this like"""
        previous_like = db.query(Like.id).filter(
            Like.from_phone_number == like.to_phone_number,
            Like.to_phone_number == like.from_phone_number,
            Like.created_at < like.created_at
        ).first()
        return previous_like is not None

    def is_from_farm_account(self, db: Session, like: Like, now: Optional[datetime] = None) -> bool:
        """
        Flag senders that look like like-farms

        A sender is a farm account if it sent more than 50 likes older than
        24 hours, or more than 10 likes to users in their first hour, or its
        community disconnection score is above 0.8.
        """
        now = now or datetime.utcnow()
        sender = like.from_phone_number

        old_likes = db.query(Like).filter(
            Like.from_phone_number == sender,
            Like.created_at < now - FARM_SENT_LIKES_MIN_AGE
        ).count()
        if old_likes > FARM_SENT_LIKES_THRESHOLD:
            logger.info(f"Farm account {sender}: {old_likes} likes older than 24h")
            return True

        new_user_likes = self.get_likes_to_new_users(db, sender)
        if new_user_likes > FARM_NEW_USER_LIKES_THRESHOLD:
            logger.info(f"Farm account {sender}: {new_user_likes} likes to new users")
            return True

        disconnection = self.community_disconnection.calculate(db, sender)
        if disconnection > FARM_DISCONNECTION_THRESHOLD:
            logger.info(f"Farm account {sender}: community disconnection {disconnection:.2f}")
            return True

        return False

    @staticmethod
    def get_likes_to_new_users(db: Session, from_phone_number: str) -> int:
        """
        Likes sent to recipients that were at most one hour old at the time
        of the like
        """
        rows = db.query(Like.created_at, User.created_at).join(
            User, User.phone_number == Like.to_phone_number
        ).filter(
            Like.from_phone_number == from_phone_number
        ).all()

        return sum(
            1 for liked_at, joined_at in rows
            if timedelta(0) <= liked_at - joined_at <= FARM_NEW_USER_WINDOW
        )

    def calculate_quality_scores(self, db: Session, user: User) -> List[QualityScore]:
        """
        Score each of the user's top three qualities

        Only the endorsement, mother-quality and no-search factors apply
        here. Return-like and farm penalties are left out on purpose.
        """
        qualities = QualityService.get_top_three_qualities(db, user)
        likes = self._received_likes(db, user)

        scores = []
        for quality in qualities:
            total = 0.0

            for like in likes:
                matching = self._find_matching_quality(like, quality.value, quality.category)
                if matching is None:
                    continue

                like_value = float(NORMAL_LIKE_VALUE)

                if like.is_endorsed:
                    like_value *= ENDORSEMENT_MULTIPLIER

                if is_mother_quality(matching.get("value")):
                    like_value *= MOTHER_QUALITY_MULTIPLIER

                # The quality's own search flag wins over the like's
                used_search = matching.get("used_search")
                if used_search is None:
                    used_search = like.used_search
                if not used_search:
                    like_value *= NO_SEARCH_PENALTY

                total += like_value

            scores.append(QualityScore(quality=quality, score=total))

        return scores

    @staticmethod
    def _find_matching_quality(like: Like, value: str, category: Any) -> Optional[Dict[str, Any]]:
        for stored in like.qualities or []:
            if stored.get("value") == value and stored.get("category") == category:
                return stored
        return None
