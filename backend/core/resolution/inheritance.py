"""
Inheritance chain resolution: walk declared parents to the ultimate haram source.
"""
from typing import Optional
import logging

from core.knowledge.knowledge_base import KnowledgeBase
from core.normalization.normalizer import normalize_ingredient_name

logger = logging.getLogger(__name__)


def resolve_inheritance(
    knowledge_base: KnowledgeBase,
    name: str,
    visited: frozenset = frozenset(),
) -> Optional[str]:
    """
    Return the key of the first haram ingredient reachable from `name`, or None.
    - A haram entry is its own source and is never expanded further.
    - Parents are tried in declared order; the first non-None source wins.
    - Each branch gets its own copy of the visited set, so a cycle only ends
      the branch it occurs in.
    """
    normalized = normalize_ingredient_name(name)
    if not normalized or normalized in visited:
        return None

    entry = knowledge_base.get(normalized) or knowledge_base.find_by_alias(normalized)
    if entry is None:
        return None
    if entry.is_haram:
        return entry.key

    branch_visited = visited | {normalized, entry.key}
    for parent in entry.inheritance:
        source = resolve_inheritance(knowledge_base, parent, branch_visited)
        if source:
            logger.debug("INHERITANCE %s -> %s via %s", normalized, source, parent)
            return source
    return None


def inheritance_trace(name: str, parents: tuple, source: Optional[str], is_haram: bool) -> list[str]:
    """Human-readable resolution steps for one matched name (alias or key)."""
    trace: list[str] = []
    if parents:
        trace.append(f"{name} inherits from {', '.join(parents)}")
        if source:
            trace.append(f"Ultimate source: {source} (haram)")
    elif is_haram:
        trace.append(f"{name} is explicitly haram")
    return trace
