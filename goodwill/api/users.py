"""
User API endpoints
Registration, profiles and goodwill scores
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from goodwill.core.database import get_db
from goodwill.core.dependencies import get_current_user
from goodwill.models.user import User
from goodwill.schemas.user import UserRegister, UserResponse
from goodwill.services.goodwill_service import GoodwillService
from goodwill.services.quality_service import QualityService
from goodwill.services.user_service import UserService

router = APIRouter()


def _get_user_or_404(db: Session, phone_number: str) -> User:
    user = UserService.find_by_phone_number(db, phone_number)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user


@router.post("/users", response_model=dict, status_code=status.HTTP_201_CREATED)
async def register_user(
    data: UserRegister,
    db: Session = Depends(get_db)
):
    """
    Register a phone number

    - **phone_number**: Unique phone number
    - **full_name**: Optional display name

    Activates the placeholder account if the phone number already received likes
    """
    user = UserService.register(db, data.phone_number, data.full_name)

    return {
        "ok": True,
        "message": "User registered successfully",
        "data": UserResponse.model_validate(user).model_dump(mode="json")
    }


@router.get("/users/me", response_model=dict)
async def get_my_profile(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Caller's profile

    Includes goodwill score and level, top three qualities, remaining likes
    and the date the like quota refreshes
    """
    profile = UserService.get_profile(db, current_user, include_quota=True)

    return {
        "ok": True,
        "data": profile.model_dump(mode="json")
    }


@router.get("/users", response_model=dict)
async def get_profiles(
    phone_numbers: str = Query(..., description="Comma separated phone numbers"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Profiles with top qualities for several phone numbers, in request order. Unknown numbers are left out"""
    numbers = [number.strip() for number in phone_numbers.split(",") if number.strip()]
    profiles = UserService.get_profiles(db, numbers)

    return {
        "ok": True,
        "data": [profile.model_dump(mode="json") for profile in profiles]
    }


@router.get("/users/{phone_number}", response_model=dict)
async def get_profile(
    phone_number: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Public profile with goodwill level and top qualities"""
    user = _get_user_or_404(db, phone_number)
    profile = UserService.get_profile(db, user)

    return {
        "ok": True,
        "data": profile.model_dump(mode="json")
    }


@router.get("/users/{phone_number}/goodwill", response_model=dict)
async def get_goodwill(
    phone_number: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Goodwill score of a user

    Returns score, level, penalty breakdown and the scores of the top three qualities
    """
    user = _get_user_or_404(db, phone_number)
    goodwill = GoodwillService().calculate_goodwill_score(db, user)

    return {
        "ok": True,
        "data": goodwill.model_dump(mode="json")
    }


@router.get("/users/{phone_number}/qualities", response_model=dict)
async def get_top_qualities(
    phone_number: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Top three qualities of a user"""
    user = _get_user_or_404(db, phone_number)
    qualities = QualityService.get_top_three_qualities(db, user)

    return {
        "ok": True,
        "data": [quality.model_dump(mode="json") for quality in qualities]
    }
