"""
Quality Service
Ranks the qualities attributed to users by how often they were given
"""
from sqlalchemy.orm import Session
from collections import Counter, defaultdict
from typing import List, Dict, Iterable, Tuple, Any

from goodwill.models.like import Like
from goodwill.models.user import User
from goodwill.schemas.quality import QualityWithMetadata, is_mother_quality

TOP_QUALITIES_LIMIT = 3

QualityKey = Tuple[Any, Any, Any, Any]


def _quality_key(quality: Dict[str, Any]) -> QualityKey:
    # is_default comes from the value, not the stored flag
    value = quality.get("value")
    return (
        value,
        quality.get("category"),
        is_mother_quality(value),
        bool(quality.get("is_grammar_corrected")),
    )


def rank_qualities(likes: Iterable[Like], limit: int = TOP_QUALITIES_LIMIT) -> List[QualityWithMetadata]:
    """
    Most frequent qualities across likes, highest count first

    Equal counts keep first-seen order, so likes must be passed in a
    deterministic order.
    """
    counts: Counter = Counter()
    for like in likes:
        for quality in like.qualities or []:
            counts[_quality_key(quality)] += 1

    # most_common is stable for equal counts
    return [
        QualityWithMetadata(
            value=value,
            category=category,
            is_default=is_default,
            is_grammar_corrected=bool(is_grammar_corrected),
        )
        for (value, category, is_default, is_grammar_corrected), _ in counts.most_common(limit)
    ]


class QualityService:
    """Service for quality aggregation"""

    @staticmethod
    def get_top_three_qualities(db: Session, user: User) -> List[QualityWithMetadata]:
        """
        Top three qualities received by a user

        Args:
            db: Database session
            user: Recipient

        Returns:
            Up to three qualities, most frequent first
        """
        likes = db.query(Like).filter(
            Like.to_phone_number == user.phone_number
        ).order_by(Like.created_at.asc(), Like.id.asc()).all()

        return rank_qualities(likes)

    @staticmethod
    def get_top_three_qualities_per_user(
        db: Session,
        users: List[User]
    ) -> Dict[str, List[QualityWithMetadata]]:
        """
        Batched variant of get_top_three_qualities

        Fetches the likes of all users in one query and ranks each
        recipient's likes separately.

        Returns:
            Mapping of phone number to top qualities
        """
        phone_numbers = [user.phone_number for user in users]
        if not phone_numbers:
            return {}

        likes = db.query(Like).filter(
            Like.to_phone_number.in_(phone_numbers)
        ).order_by(Like.created_at.asc(), Like.id.asc()).all()

        likes_by_phone: Dict[str, List[Like]] = defaultdict(list)
        for like in likes:
            likes_by_phone[like.to_phone_number].append(like)

        return {
            phone_number: rank_qualities(likes_by_phone.get(phone_number, []))
            for phone_number in phone_numbers
        }
