"""
Quality vocabulary and the QualityWithMetadata value object
"""
from enum import Enum
from typing import Optional, List, Iterable, Any, Dict

from pydantic import BaseModel, Field, model_validator


class DefaultQuality(str, Enum):
    """The 22 canonical "mother" qualities"""
    KIND = "Kind"
    INTELLIGENT = "Intelligent"
    CONFIDENT = "Confident"
    HARD_WORKING = "Hard-Working"
    FUN_LOVING = "Fun-Loving"
    HONEST = "Honest"
    CREATIVE = "Creative"
    WISE = "Wise"
    PRACTICAL = "Practical"
    CLASSY = "Classy"
    ORGANIZED = "Organized"
    WARM = "Warm"
    RATIONAL = "Rational"
    BOLD = "Bold"
    DETERMINED = "Determined"
    CHARMING = "Charming"
    PURE_HEARTED = "Pure-Hearted"
    ARTISTIC = "Artistic"
    HUMBLE = "Humble"
    RESOURCEFUL = "Resourceful"
    GRACEFUL = "Graceful"
    RELIABLE = "Reliable"


class QualityCategory(str, Enum):
    WISDOM = "☯️"
    PRACTICAL = "🔧"
    INTELLECTUAL = "🧠"
    EMOTIONAL = "💛"
    CONFIDENCE = "💯"
    PLAYFUL = "😉"
    DRIVEN = "🎯"
    ELEGANT = "🦩"
    ORGANIZED = "📐"
    CREATIVE = "🌈"
    PURE = "🤍"


class SubQuality(str, Enum):
    """Known sub-qualities offered by clients. Free text is accepted too."""
    # Wisdom
    CALM = "Calm"
    OPEN_MINDED = "Open-Minded"
    FREETHINKER = "Freethinker"
    PERCEPTIVE = "Perceptive"
    DIGNIFIED = "Dignified"
    EQUANIMOUS = "Equanimous"
    BALANCED = "Balanced"
    MEDITATIVE = "Meditative"
    SELF_AWARE = "Self-Aware"
    PATIENT = "Patient"
    INSIGHTFUL = "Insightful"
    REFLECTIVE = "Reflective"
    MATURE = "Mature"

    # Grammar corrected roles
    MENTOR = "A Mentor"
    COACH = "A Coach"
    GUIDE = "A Guide"
    POLYMATH = "A Polymath"
    FREETHINKER_ROLE = "A Freethinker"
    INDEPENDENT_THINKER = "An Independent Thinker"
    GOOD_LISTENER = "A Good Listener"
    RISK_TAKER = "A Risk Taker"
    LEADER = "A Leader"
    PERFECTIONIST = "A Perfectionist"
    HIGH_ACHIEVER = "A High-Achiever"
    GO_GETTER = "A Go-Getter"


class LikeActionType(str, Enum):
    LIKE = "LIKE"
    UNLIKE = "UNLIKE"
    ENDORSE = "ENDORSE"
    UNENDORSE = "UNENDORSE"


MOTHER_QUALITIES = frozenset(q.value for q in DefaultQuality)


def is_mother_quality(value: Any) -> bool:
    """Check a quality value against the closed mother-quality set"""
    if isinstance(value, Enum):
        value = value.value
    return value in MOTHER_QUALITIES


def has_mother_qualities(qualities: Optional[Iterable[Dict[str, Any]]]) -> bool:
    """True if any stored quality dict carries a mother-quality value"""
    return any(is_mother_quality(q.get("value")) for q in qualities or [])


class QualityWithMetadata(BaseModel):
    """A quality attributed to a user, as stored on a like"""
    value: str = Field(..., min_length=1, max_length=100)
    category: Optional[QualityCategory] = None
    is_default: Optional[bool] = None
    is_grammar_corrected: Optional[bool] = None
    used_search: Optional[bool] = None

    @model_validator(mode="after")
    def derive_is_default(self):
        # Always mirrors mother-quality membership, whatever the client sent
        self.is_default = is_mother_quality(self.value)
        return self

    def to_storage(self) -> Dict[str, Any]:
        """Dict form persisted in the JSON column"""
        return self.model_dump(mode="json", exclude_none=True)


def qualities_to_storage(qualities: List[QualityWithMetadata]) -> List[Dict[str, Any]]:
    return [q.to_storage() for q in qualities]
