"""
Likes API endpoints
Sending, removing and endorsing likes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from goodwill.core.database import get_db
from goodwill.core.dependencies import get_current_user
from goodwill.models.user import User
from goodwill.schemas.like import CreateLikeRequest, LikeResponse
from goodwill.services.like_service import LikeService
from goodwill.services.rate_limiter import LikeRateLimiter

router = APIRouter()


@router.post("/likes", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_like(
    data: CreateLikeRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Send a like

    - **from_phone_number**: Must be the caller's phone number
    - **to_phone_number**: Recipient, registered or not
    - **qualities**: Qualities attributed to the recipient
    - **is_endorsed**: Send as an endorsement
    - **used_search**: Qualities were picked through search
    """
    if data.from_phone_number != current_user.phone_number:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot send likes on behalf of another user"
        )

    like = LikeService.create_like(db, data)

    return {
        "ok": True,
        "message": "Like sent successfully",
        "data": {
            "like": LikeResponse.model_validate(like).model_dump(mode="json")
        }
    }


@router.get("/likes/received", response_model=dict)
async def get_received_likes(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Likes received by the caller"""
    likes = LikeService.get_likes(db, current_user.phone_number)

    return {
        "ok": True,
        "data": [LikeResponse.model_validate(like).model_dump(mode="json") for like in likes]
    }


@router.get("/likes/remaining", response_model=dict)
async def get_remaining_likes(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Likes the caller can still send and when the quota refreshes"""
    quota = LikeRateLimiter.get_remaining_likes_and_refresh_date(db, current_user)

    return {
        "ok": True,
        "data": quota.model_dump(mode="json")
    }


def _ensure_sender(from_phone_number: str, current_user: User) -> None:
    """Only the sender of a like may remove or endorse it"""
    if from_phone_number != current_user.phone_number:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot change likes sent by another user"
        )


@router.delete("/likes/{like_id}", response_model=dict)
async def unlike(
    like_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a like by id"""
    _ensure_sender(LikeService.get_like(db, like_id).from_phone_number, current_user)
    LikeService.unlike(db, like_id)

    return {"ok": True, "message": "Like removed successfully"}


@router.put("/likes/{like_id}/endorse", response_model=dict)
async def endorse(
    like_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Endorse a like by id"""
    _ensure_sender(LikeService.get_like(db, like_id).from_phone_number, current_user)
    like = LikeService.endorse(db, like_id)

    return {
        "ok": True,
        "message": "Like endorsed successfully",
        "data": LikeResponse.model_validate(like).model_dump(mode="json")
    }


@router.put("/likes/{from_phone_number}/{to_phone_number}/endorse", response_model=dict)
async def endorse_by_pair(
    from_phone_number: str,
    to_phone_number: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Endorse the oldest like sent from one phone number to another"""
    _ensure_sender(from_phone_number, current_user)
    like = LikeService.endorse_by_pair(db, from_phone_number, to_phone_number)

    return {
        "ok": True,
        "message": "Like endorsed successfully",
        "data": LikeResponse.model_validate(like).model_dump(mode="json")
    }


@router.delete("/likes/{like_id}/endorse", response_model=dict)
async def unendorse(
    like_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove the endorsement from a like"""
    _ensure_sender(LikeService.get_like(db, like_id).from_phone_number, current_user)
    like = LikeService.unendorse(db, like_id)

    return {
        "ok": True,
        "message": "Endorsement removed successfully",
        "data": LikeResponse.model_validate(like).model_dump(mode="json")
    }


# Must stay below DELETE /likes/{like_id}/endorse
@router.delete("/likes/{from_phone_number}/{to_phone_number}", response_model=dict)
async def unlike_by_pair(
    from_phone_number: str,
    to_phone_number: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove the oldest like sent from one phone number to another"""
    _ensure_sender(from_phone_number, current_user)
    LikeService.unlike_by_pair(db, from_phone_number, to_phone_number)

    return {"ok": True, "message": "Like removed successfully"}


@router.delete("/likes/{from_phone_number}/{to_phone_number}/endorse", response_model=dict)
async def unendorse_by_pair(
    from_phone_number: str,
    to_phone_number: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    _ensure_sender(from_phone_number, current_user)
    like = LikeService.unendorse_by_pair(db, from_phone_number, to_phone_number)

    return {
        "ok": True,
        "message": "Endorsement removed successfully",
        "data": LikeResponse.model_validate(like).model_dump(mode="json")
    }
