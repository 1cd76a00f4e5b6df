"""
Halal conversion engine. Single pipeline for every caller.
Detect -> convert -> score; each step runs fully on the previous step's output.
Never raises: internal faults are logged and answered with a safe fallback.
"""
from functools import lru_cache
from typing import Any, Optional, Union
import logging
import time

from core.evaluation.confidence import compute_confidence
from core.evaluation.converter import convert
from core.evaluation.detector import detect
from core.knowledge.knowledge_base import KnowledgeBase, get_knowledge_base
from core.models.detection import ConversionResult, Detection, Issue, RecipeConversion
from core.models.preferences import UserPreferences

logger = logging.getLogger(__name__)

PreferencesInput = Optional[Union[UserPreferences, dict]]


def _as_preferences(user_preferences: PreferencesInput) -> UserPreferences:
    if isinstance(user_preferences, UserPreferences):
        return user_preferences
    return UserPreferences.from_dict(user_preferences if isinstance(user_preferences, dict) else None)


class HalalEngine:
    """
    Pipeline: detect (knowledge base + inheritance + policy) -> convert -> score.
    The knowledge base is injected so tests can run against their own data;
    by default the process-wide instance is used.
    """

    def __init__(self, knowledge_base: Optional[KnowledgeBase] = None):
        self._knowledge = knowledge_base if knowledge_base is not None else get_knowledge_base()

    @property
    def knowledge_base(self) -> KnowledgeBase:
        return self._knowledge

    def detect(self, text: str, preferences: PreferencesInput = None) -> list[Detection]:
        return detect(self._knowledge, text, _as_preferences(preferences))

    def convert(self, text: str, detections: list[Detection]) -> ConversionResult:
        return convert(text, detections)

    def score(self, detections: list[Detection], conversion: ConversionResult) -> Optional[int]:
        return compute_confidence(detections, conversion.replacements, conversion.unresolved)

    def convert_recipe(
        self,
        recipe_text: Any,
        user_preferences: PreferencesInput = None,
    ) -> RecipeConversion:
        """
        Convert recipe text under the given preferences.
        - Blank or non-string text -> empty result, score 0, pipeline not run.
        - A None score (nothing detected) is reported as 0.
        """
        if not isinstance(recipe_text, str) or not recipe_text.strip():
            return RecipeConversion()

        text = recipe_text.strip()
        started = time.perf_counter()
        try:
            preferences = _as_preferences(user_preferences)
            detections = self.detect(text, preferences)
            conversion = self.convert(text, detections)
            score = self.score(detections, conversion)
            issues = [
                Issue(detection=d, was_replaced=conversion.was_replaced(d.matched_term))
                for d in detections
            ]
        except Exception:
            logger.exception("CONVERT pipeline failed chars=%d; returning original text", len(text))
            return RecipeConversion(original_text=text, converted_text=text)

        logger.info(
            "CONVERT chars=%d issues=%d replaced=%d unresolved=%d score=%s elapsed_ms=%.1f",
            len(text), len(detections), len(conversion.replacements), len(conversion.unresolved),
            score, (time.perf_counter() - started) * 1000,
        )
        return RecipeConversion(
            original_text=text,
            converted_text=conversion.converted_text,
            issues=issues,
            confidence_score=0 if score is None else score,
        )


@lru_cache(maxsize=1)
def get_default_engine() -> HalalEngine:
    return HalalEngine()


def convert_recipe(recipe_text: Any, user_preferences: PreferencesInput = None) -> dict[str, Any]:
    """Entry point for callers that want the plain API shape."""
    return get_default_engine().convert_recipe(recipe_text, user_preferences).to_dict()
