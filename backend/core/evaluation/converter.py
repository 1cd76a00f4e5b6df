"""
Replaces detected ingredients with their primary alternative.
Replacement only: scoring reads the result afterwards.
"""
from typing import Optional
import logging

from core.evaluation.detector import term_pattern
from core.models.detection import ConversionResult, Detection, Replacement, UnresolvedIngredient

logger = logging.getLogger(__name__)

# Placeholder some older knowledge sources use instead of a real alternative
_PLACEHOLDER = "Halal alternative needed"


def usable_replacement(detection: Detection) -> Optional[str]:
    replacement = detection.replacement
    if not replacement or not replacement.strip() or replacement == _PLACEHOLDER:
        return None
    return replacement


def match_case(match: str, replacement: str) -> str:
    """Carry the case pattern of the matched run over to the replacement."""
    if match == match.upper():
        return replacement.upper()
    if match[:1] == match[:1].upper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def convert(text: str, detections: list[Detection]) -> ConversionResult:
    """
    Apply replacements one detection at a time, in detection order; each pass
    runs over the text produced by the previous one.
    """
    if not text or not isinstance(text, str) or not detections:
        return ConversionResult(converted_text=text or "")

    result = ConversionResult(converted_text=text)
    for item in detections:
        term = item.matched_term
        replacement = usable_replacement(item)
        if replacement is None:
            result.unresolved.append(UnresolvedIngredient(term, item.status, term))
            continue

        converted, count = term_pattern(term).subn(
            lambda m: match_case(m.group(0), replacement),
            result.converted_text,
        )
        if count == 0:
            logger.info("CONVERT no substitution fired term=%s; marking unresolved", term)
            result.unresolved.append(UnresolvedIngredient(term, item.status, term))
            continue
        result.converted_text = converted
        result.replacements.append(Replacement(term, replacement, item.status, term))

    return result
