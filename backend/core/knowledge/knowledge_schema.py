"""
Strict contract for one halal knowledge-base entry.
Loaded once from data/halal_knowledge.json and never mutated afterwards.
"""
from dataclasses import dataclass, field
from enum import Enum
import logging

from core.normalization.normalizer import normalize_ingredient_name

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_BASIS = 0.5


class IngredientStatus(str, Enum):
    HARAM = "haram"
    HALAL = "halal"
    CONDITIONAL = "conditional"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value) -> "IngredientStatus":
        """Map a raw status string onto the enum; anything unrecognised is UNKNOWN."""
        if isinstance(value, cls):
            return value
        raw = str(value or "").strip().lower()
        if raw == "questionable":
            return cls.CONDITIONAL
        try:
            return cls(raw)
        except ValueError:
            if raw:
                logger.warning("KNOWLEDGE_BASE unknown status=%s; treating as unknown", raw)
            return cls.UNKNOWN


def _string_list(value) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [str(v) for v in value if v is not None]


def _confidence_basis(value) -> float:
    try:
        basis = float(value)
    except (TypeError, ValueError):
        return DEFAULT_CONFIDENCE_BASIS
    if not 0.0 < basis <= 1.0:
        return DEFAULT_CONFIDENCE_BASIS
    return basis


@dataclass(frozen=True)
class KnowledgeEntry:
    key: str
    display_name: str
    status: IngredientStatus = IngredientStatus.UNKNOWN
    aliases: tuple[str, ...] = ()
    # Parents by key or display name; order matters for resolution
    inheritance: tuple[str, ...] = ()
    # First alternative is the primary replacement
    alternatives: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    confidence_basis: float = DEFAULT_CONFIDENCE_BASIS
    references: tuple[str, ...] = ()
    notes: str = ""
    eli5: str = ""
    category: str = ""

    @property
    def is_haram(self) -> bool:
        return self.status == IngredientStatus.HARAM

    def to_dict(self) -> dict:
        return {
            "display_name": self.display_name,
            "status": self.status.value,
            "aliases": list(self.aliases),
            "inheritance": list(self.inheritance),
            "alternatives": list(self.alternatives),
            "tags": list(self.tags),
            "confidence_score_base": self.confidence_basis,
            "references": list(self.references),
            "notes": self.notes,
            "eli5": self.eli5,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, key: str, d: dict) -> "KnowledgeEntry":
        """Build from a source record. `key` must already be normalized."""
        aliases: list[str] = []
        for alias in _string_list(d.get("aliases")):
            norm = normalize_ingredient_name(alias)
            if norm and norm != key and norm not in aliases:
                aliases.append(norm)
        display = d.get("display_name") or d.get("displayName")
        return cls(
            key=key,
            display_name=str(display) if display else key.replace("_", " "),
            status=IngredientStatus.parse(d.get("status")),
            aliases=tuple(aliases),
            inheritance=tuple(p for p in _string_list(d.get("inheritance")) if p.strip()),
            alternatives=tuple(_string_list(d.get("alternatives"))),
            tags=tuple(t.strip().lower() for t in _string_list(d.get("tags")) if t.strip()),
            confidence_basis=_confidence_basis(d.get("confidence_score_base")),
            references=tuple(_string_list(d.get("references"))),
            notes=str(d.get("notes") or ""),
            eli5=str(d.get("eli5") or ""),
            category=str(d.get("category") or ""),
        )
