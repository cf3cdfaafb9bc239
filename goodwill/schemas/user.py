"""
User Pydantic schemas for request/response validation
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from goodwill.schemas.common import ORMConfig
from goodwill.schemas.goodwill import GoodwillSummary
from goodwill.schemas.quality import QualityWithMetadata


# ============ Request Schemas ============

class UserRegister(BaseModel):
    """Schema for user registration"""
    phone_number: str = Field(..., min_length=5, max_length=20)
    full_name: Optional[str] = Field(None, min_length=2, max_length=100)

    @field_validator('phone_number')
    @classmethod
    def validate_phone(cls, v):
        cleaned = v.strip()
        if not any(ch.isdigit() for ch in cleaned):
            raise ValueError('Phone number must contain digits')
        return cleaned


# ============ Response Schemas ============

class UserResponse(BaseModel):
    """Stored user fields"""
    id: str
    phone_number: str
    full_name: Optional[str] = None
    is_active: bool
    created_at: datetime

    model_config = ORMConfig


class UserProfile(UserResponse):
    """User with goodwill read model"""
    goodwill: Optional[GoodwillSummary] = None
    top_three_qualities: List[QualityWithMetadata] = []
    remaining_likes: Optional[int] = None
    likes_refreshed_at: Optional[datetime] = None
