"""
Per-request user preferences for the halal engine.
Supplied fresh on every call; never stored by the engine.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

from core.config import get_default_strictness, get_default_school_of_thought

logger = logging.getLogger(__name__)

NO_PREFERENCE = "no-preference"


class StrictnessLevel(str, Enum):
    FLEXIBLE = "flexible"
    STANDARD = "standard"
    STRICT = "strict"


def _parse_strictness(value) -> StrictnessLevel:
    if isinstance(value, StrictnessLevel):
        return value
    raw = str(value or "").strip().lower()
    try:
        return StrictnessLevel(raw)
    except ValueError:
        logger.warning("PREFERENCES unknown strictness=%s; using standard", raw[:30])
        return StrictnessLevel.STANDARD


def _parse_school(value) -> str:
    raw = str(value or "").strip().lower()
    return raw or NO_PREFERENCE


@dataclass(frozen=True)
class UserPreferences:
    strictness_level: StrictnessLevel = StrictnessLevel.STANDARD
    school_of_thought: str = NO_PREFERENCE

    @property
    def has_school(self) -> bool:
        return self.school_of_thought != NO_PREFERENCE

    def to_dict(self) -> dict:
        return {
            "strictnessLevel": self.strictness_level.value,
            "schoolOfThought": self.school_of_thought,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "UserPreferences":
        """Accepts camelCase, snake_case and the legacy `strictness` / `madhab` keys."""
        data = data or {}
        strictness = (
            data.get("strictnessLevel")
            or data.get("strictness_level")
            or data.get("strictness")
            or get_default_strictness()
        )
        school = (
            data.get("schoolOfThought")
            or data.get("school_of_thought")
            or data.get("madhab")
            or get_default_school_of_thought()
        )
        return cls(
            strictness_level=_parse_strictness(strictness),
            school_of_thought=_parse_school(school),
        )
