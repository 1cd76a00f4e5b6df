"""
Confidence score from the final conversion state.
Weights: unresolved haram = -20, unresolved conditional = -10, replaced = 0.
"""
from typing import List, Optional

from core.knowledge.knowledge_schema import IngredientStatus
from core.models.detection import Detection, Replacement, UnresolvedIngredient

HARAM_PENALTY = 20
CONDITIONAL_PENALTY = 10


def compute_confidence(
    detections: List[Detection],
    replacements: List[Replacement],
    unresolved: List[UnresolvedIngredient],
) -> Optional[int]:
    """
    score = clamp(100 - 20 * unresolved_haram - 10 * unresolved_conditional, 0, 100)
    - No detections -> None (not evaluated), which is not the same as 100.
    - Every haram detection replaced -> exactly 100, whatever else remains.
    """
    if not detections:
        return None

    unresolved_haram = sum(1 for u in unresolved if u.status == IngredientStatus.HARAM)
    unresolved_conditional = sum(1 for u in unresolved if u.status == IngredientStatus.CONDITIONAL)
    score = 100 - unresolved_haram * HARAM_PENALTY - unresolved_conditional * CONDITIONAL_PENALTY
    score = max(0, min(100, round(score)))

    total_haram = sum(1 for d in detections if d.status == IngredientStatus.HARAM)
    replaced_haram = sum(1 for r in replacements if r.status == IngredientStatus.HARAM)
    if total_haram > 0 and replaced_haram == total_haram and unresolved_haram == 0:
        score = 100
    return score
