"""
Applies user policy (strictness level, school of thought) to ingredients whose
raw status is conditional or unknown. Haram and halal entries pass through.
"""
from typing import Optional
import logging

from core.knowledge.knowledge_schema import IngredientStatus, KnowledgeEntry
from core.models.detection import Severity
from core.models.preferences import UserPreferences
from core.policy.halal_rules import (
    ANIMAL_DERIVED_CATEGORY,
    ALCOHOL_TRACE,
    ALCOHOL_TRACE_MARKERS,
    GELATIN_MARKERS,
    GELATIN_UNKNOWN,
    SEAFOOD_SHELLFISH,
    SHELLFISH_MARKERS,
    STRICTNESS_TAGS,
    school_rule,
    strictness_rule,
)

logger = logging.getLogger(__name__)

_ADJUSTABLE = (IngredientStatus.CONDITIONAL, IngredientStatus.UNKNOWN)


def infer_tags(entry: KnowledgeEntry) -> tuple[str, ...]:
    """Declared tags win; otherwise infer from category and key."""
    if entry.tags:
        return entry.tags
    key = entry.key
    tags: list[str] = []
    if entry.category.strip().lower() == ANIMAL_DERIVED_CATEGORY or any(m in key for m in GELATIN_MARKERS):
        tags.append(GELATIN_UNKNOWN)
    if any(m in key for m in ALCOHOL_TRACE_MARKERS):
        tags.append(ALCOHOL_TRACE)
    if any(m in key for m in SHELLFISH_MARKERS):
        tags.append(SEAFOOD_SHELLFISH)
    return tuple(tags)


def severity_for_basis(basis: float) -> Severity:
    if basis == 0.1:
        return Severity.HIGH
    if basis == 0.5:
        return Severity.MEDIUM
    return Severity.LOW


def adjust_status(
    entry: KnowledgeEntry,
    inherited_from: Optional[str],
    tags: tuple[str, ...],
    preferences: UserPreferences,
    trace: Optional[list] = None,
) -> IngredientStatus:
    """
    Final status for one entry under the given preferences.
    - unknown + haram source in the inheritance chain -> haram (policy skipped).
    - Strictness table for gelatin_unknown, then alcohol_trace; "conditional"
      is a no-op, "questionable" means conditional.
    - School table for seafood_shellfish, applied last and unconditionally,
      only when a school is chosen.
    """
    status = entry.status
    if status not in _ADJUSTABLE:
        return status

    def note(step: str) -> None:
        if trace is not None:
            trace.append(step)

    if status == IngredientStatus.UNKNOWN and inherited_from:
        note(f"{entry.key} is unclassified and inherits haram from {inherited_from}")
        return IngredientStatus.HARAM

    level = preferences.strictness_level.value
    for tag in STRICTNESS_TAGS:
        if tag not in tags:
            continue
        rule = strictness_rule(level, tag)
        if not rule or rule == IngredientStatus.CONDITIONAL.value:
            continue
        status = IngredientStatus.parse(rule)
        note(f"Strictness '{level}' maps {tag} to {status.value}")

    if preferences.has_school and SEAFOOD_SHELLFISH in tags:
        rule = school_rule(preferences.school_of_thought, SEAFOOD_SHELLFISH)
        if rule:
            status = IngredientStatus.parse(rule)
            note(f"School '{preferences.school_of_thought}' maps {SEAFOOD_SHELLFISH} to {status.value}")

    if status != entry.status:
        logger.debug("POLICY key=%s %s -> %s prefs=%s", entry.key, entry.status.value, status.value,
                     preferences.to_dict())
    return status
