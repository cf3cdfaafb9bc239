"""
Like Pydantic schemas for request/response validation
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Any, Dict
from datetime import datetime

from goodwill.schemas.common import ORMConfig
from goodwill.schemas.quality import QualityWithMetadata


# ============ Request Schemas ============

class CreateLikeRequest(BaseModel):
    """Schema for sending a like"""
    from_phone_number: str = Field(..., min_length=1, max_length=20)
    to_phone_number: str = Field(..., min_length=1, max_length=20)
    qualities: List[QualityWithMetadata] = Field(..., min_length=1)
    is_endorsed: bool = False
    used_search: bool = False
    is_mother_quality: bool = False


# ============ Response Schemas ============

class LikeResponse(BaseModel):
    """Like as returned to clients"""
    id: str
    from_phone_number: str
    to_phone_number: str
    is_endorsed: bool
    used_search: bool
    is_mother_quality: bool
    is_notified: bool
    qualities: Optional[List[Dict[str, Any]]] = None
    created_at: datetime

    model_config = ORMConfig


class LikeHistoryResponse(BaseModel):
    """Audit trail entry"""
    id: int
    from_phone_number: str
    to_phone_number: str
    action: str
    qualities: Optional[List[Dict[str, Any]]] = None
    created_at: datetime

    model_config = ORMConfig


class RemainingLikes(BaseModel):
    """Likes left in the sender's current period"""
    remaining_likes: int
    likes_refreshed_at: datetime
