"""
History API endpoints
Audit trail of like actions
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from goodwill.core.database import get_db
from goodwill.core.dependencies import get_current_user
from goodwill.models.user import User
from goodwill.schemas.like import LikeHistoryResponse
from goodwill.services.like_history_service import LikeHistoryService
from goodwill.utils.pagination import paginate, get_pagination_params
from goodwill.utils.responses import paginated_response

router = APIRouter()


@router.get("/likes/history/sent/{phone_number}", response_model=dict)
async def get_sent_history(
    phone_number: str,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Likes sent by a phone number

    - **page**: Page number
    - **per_page**: Items per page

    Returns paginated LIKE actions, most recent first
    """
    query = LikeHistoryService.sent_history_query(db, phone_number)

    page, per_page = get_pagination_params(page, per_page)
    items, total = paginate(query, page, per_page)

    data = [LikeHistoryResponse.model_validate(entry).model_dump(mode="json") for entry in items]
    return paginated_response(data, page, per_page, total)


@router.get("/likes/history/received/{phone_number}", response_model=dict)
async def get_received_history(
    phone_number: str,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Likes received by a phone number

    Returns paginated LIKE actions, most recent first
    """
    query = LikeHistoryService.received_history_query(db, phone_number)

    page, per_page = get_pagination_params(page, per_page)
    items, total = paginate(query, page, per_page)

    data = [LikeHistoryResponse.model_validate(entry).model_dump(mode="json") for entry in items]
    return paginated_response(data, page, per_page, total)


@router.get("/likes/history/between/{first_phone_number}/{second_phone_number}", response_model=dict)
async def get_history_between_users(
    first_phone_number: str,
    second_phone_number: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Every action between two users in either direction, most recent first"""
    entries = LikeHistoryService.get_history_between_users(db, first_phone_number, second_phone_number)

    return {
        "ok": True,
        "data": [LikeHistoryResponse.model_validate(entry).model_dump(mode="json") for entry in entries]
    }
