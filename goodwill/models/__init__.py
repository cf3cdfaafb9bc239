"""
Models package - Import all models here for easy access
"""
from goodwill.models.user import User
from goodwill.models.like import Like
from goodwill.models.like_history import LikeHistory

__all__ = [
    "User",
    "Like",
    "LikeHistory",
]
