"""
Goodwill score schemas
"""
from pydantic import BaseModel, Field
from typing import List, Dict

from goodwill.schemas.quality import QualityWithMetadata


class GoodwillPenalties(BaseModel):
    """Total score removed by each penalty"""
    no_search_penalty: float = 0.0
    return_like_penalty: float = 0.0
    farm_account_penalty: float = 0.0


class GoodwillBreakdown(BaseModel):
    base_score: float = 0.0
    penalties: GoodwillPenalties = Field(default_factory=GoodwillPenalties)
    adjustments: Dict[str, float] = Field(default_factory=dict)


class QualityScore(BaseModel):
    quality: QualityWithMetadata
    score: float


class GoodwillScore(BaseModel):
    """Goodwill score computed from all likes received by a user"""
    score: float
    level: str
    breakdown: GoodwillBreakdown
    quality_scores: List[QualityScore]


class GoodwillSummary(BaseModel):
    """Score and level only, embedded in profiles"""
    score: float
    level: str
