"""
User Service
Phone-number keyed user store and the profile read model
"""
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from goodwill.core.database import atomic
from goodwill.core.exceptions import ConflictError
from goodwill.models.user import User
from goodwill.schemas.goodwill import GoodwillSummary
from goodwill.schemas.user import UserProfile
from goodwill.services.goodwill_service import GoodwillService
from goodwill.services.quality_service import QualityService
from goodwill.services.rate_limiter import LikeRateLimiter

logger = logging.getLogger(__name__)


class UserService:
    """Service for user operations"""

    @staticmethod
    def find_by_phone_number(db: Session, phone_number: str) -> Optional[User]:
        return db.query(User).filter(User.phone_number == phone_number).first()

    @staticmethod
    def find_by_phone_numbers(db: Session, phone_numbers: List[str]) -> List[User]:
        if not phone_numbers:
            return []
        return db.query(User).filter(User.phone_number.in_(phone_numbers)).all()

    @staticmethod
    def create(
        db: Session,
        phone_number: str,
        full_name: Optional[str] = None,
        is_active: bool = True,
        commit: bool = True
    ) -> User:
        """
        Create a user

        Args:
            db: Database session
            phone_number: Unique phone number
            full_name: Optional display name
            is_active: False for placeholder accounts
            commit: Commit immediately, or only flush into the caller's transaction

        Returns:
            Created User object
        """
        user = User(phone_number=phone_number, full_name=full_name, is_active=is_active)
        db.add(user)

        if commit:
            db.commit()
            db.refresh(user)
        else:
            db.flush()

        return user

    @staticmethod
    def register(db: Session, phone_number: str, full_name: Optional[str] = None) -> User:
        """
        Register a phone number

        A placeholder account created by an incoming like is activated
        instead of duplicated, so likes received before sign-up are kept.

        Raises:
            ConflictError: If an active account already uses the phone number
        """
        with atomic(db):
            user = UserService.find_by_phone_number(db, phone_number)

            if user and user.is_active:
                raise ConflictError("Phone number already registered")

            if user:
                user.is_active = True
                if full_name:
                    user.full_name = full_name
                logger.info(f"Activated placeholder user {phone_number}")
            else:
                user = UserService.create(db, phone_number, full_name=full_name, commit=False)
                logger.info(f"Registered user {phone_number}")

        db.refresh(user)
        return user

    @staticmethod
    def get_profile(db: Session, user: User, include_quota: bool = False) -> UserProfile:
        """
        Profile with goodwill, top qualities and optionally the like quota

        Args:
            db: Database session
            user: User to describe
            include_quota: Add remaining likes, only for the user's own profile
        """
        goodwill = GoodwillService().calculate_goodwill_score(db, user)

        profile = UserProfile.model_validate(user)
        profile.goodwill = GoodwillSummary(score=goodwill.score, level=goodwill.level)
        profile.top_three_qualities = QualityService.get_top_three_qualities(db, user)

        if include_quota:
            quota = LikeRateLimiter.get_remaining_likes_and_refresh_date(db, user)
            profile.remaining_likes = quota.remaining_likes
            profile.likes_refreshed_at = quota.likes_refreshed_at

        return profile

    @staticmethod
    def get_profiles(db: Session, phone_numbers: List[str]) -> List[UserProfile]:
        """
        Profiles with top qualities for several users, in one likes query

        Profiles follow the order of phone_numbers. Unknown and repeated
        phone numbers are skipped.
        """
        users = UserService.find_by_phone_numbers(db, phone_numbers)
        users_by_phone = {user.phone_number: user for user in users}
        qualities = QualityService.get_top_three_qualities_per_user(db, users)

        profiles = []
        for phone_number in dict.fromkeys(phone_numbers):
            user = users_by_phone.get(phone_number)
            if user is None:
                continue
            profile = UserProfile.model_validate(user)
            profile.top_three_qualities = qualities.get(phone_number, [])
            profiles.append(profile)
        return profiles
