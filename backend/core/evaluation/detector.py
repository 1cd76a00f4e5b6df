"""
Detects haram and conditional ingredients in recipe text.
Detection only: nothing is replaced and nothing is scored here.
"""
from typing import Optional
import logging
import re

from core.knowledge.knowledge_base import KnowledgeBase
from core.knowledge.knowledge_schema import IngredientStatus, KnowledgeEntry
from core.models.detection import Detection
from core.models.preferences import UserPreferences
from core.normalization.normalizer import normalize_ingredient_name
from core.policy.policy_adjuster import adjust_status, infer_tags, severity_for_basis
from core.resolution.inheritance import inheritance_trace, resolve_inheritance

logger = logging.getLogger(__name__)

_REPORTABLE = (IngredientStatus.HARAM, IngredientStatus.CONDITIONAL)
_QURAN_MARKERS = ("qur'an", "quran")
_HADITH_MARKERS = ("hadith", "bukhari", "muslim")


def term_pattern(term: str) -> re.Pattern:
    """Whole-word, case-insensitive pattern for a search term."""
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)


def _first_reference(references: tuple, markers: tuple) -> str:
    for ref in references:
        lowered = ref.lower()
        if any(m in lowered for m in markers):
            return ref
    return ""


def build_detection(
    knowledge_base: KnowledgeBase,
    term: str,
    entry: KnowledgeEntry,
    preferences: UserPreferences,
) -> Optional[Detection]:
    """Resolve one matched entry. Returns None when its final status is not reportable."""
    source = resolve_inheritance(knowledge_base, entry.key)
    # Trace names the text the recipe used; the source is always an entry key
    label = normalize_ingredient_name(term) or entry.key
    trace = inheritance_trace(label, entry.inheritance, source, entry.is_haram)
    status = adjust_status(entry, source, infer_tags(entry), preferences, trace=trace)
    if status not in _REPORTABLE:
        return None
    return Detection(
        matched_term=term,
        key=entry.key,
        name=entry.display_name,
        status=status,
        alternatives=list(entry.alternatives),
        inherited_from=source,
        severity=severity_for_basis(entry.confidence_basis),
        confidence=entry.confidence_basis,
        trace=trace,
        references=list(entry.references),
        quran_reference=_first_reference(entry.references, _QURAN_MARKERS),
        hadith_reference=_first_reference(entry.references, _HADITH_MARKERS),
        notes=entry.notes,
        eli5=entry.eli5,
    )


def detect(
    knowledge_base: KnowledgeBase,
    text: str,
    preferences: Optional[UserPreferences] = None,
) -> list[Detection]:
    """
    Scan text against every key and alias, in lookup-table order.
    Each owning entry is considered once per call; the first matching term wins.
    """
    if not text or not isinstance(text, str):
        return []
    preferences = preferences or UserPreferences()

    detections: list[Detection] = []
    processed: set[str] = set()
    for term, owner_key in knowledge_base.search_terms():
        if owner_key in processed or not term.strip():
            continue
        if not term_pattern(term).search(text):
            continue
        processed.add(owner_key)
        entry = knowledge_base.get(owner_key)
        if entry is None:
            continue
        detection = build_detection(knowledge_base, term, entry, preferences)
        if detection is not None:
            detections.append(detection)

    logger.debug("DETECT matched=%d reported=%d prefs=%s",
                 len(processed), len(detections), preferences.to_dict())
    return detections
