"""
Request-scoped records: detections, conversion result, and the API response shape.
Nothing here is persisted; everything is discarded once the response is built.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from core.knowledge.knowledge_schema import IngredientStatus

NO_REPLACEMENT = "No replacement available"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class Detection:
    matched_term: str
    key: str
    name: str
    status: IngredientStatus
    alternatives: list[str] = field(default_factory=list)
    inherited_from: Optional[str] = None
    severity: Severity = Severity.MEDIUM
    confidence: float = 0.5
    trace: list[str] = field(default_factory=list)
    references: list[str] = field(default_factory=list)
    quran_reference: str = ""
    hadith_reference: str = ""
    notes: str = ""
    eli5: str = ""

    @property
    def replacement(self) -> Optional[str]:
        return self.alternatives[0] if self.alternatives else None


@dataclass
class Replacement:
    original: str
    replacement: str
    status: IngredientStatus
    matched_term: str


@dataclass
class UnresolvedIngredient:
    ingredient: str
    status: IngredientStatus
    matched_term: str


@dataclass
class ConversionResult:
    converted_text: str
    replacements: list[Replacement] = field(default_factory=list)
    unresolved: list[UnresolvedIngredient] = field(default_factory=list)

    def was_replaced(self, term: str) -> bool:
        return any(r.original == term for r in self.replacements)


@dataclass
class Issue:
    """One detected ingredient as presented to API callers."""
    detection: Detection
    was_replaced: bool = False

    def to_dict(self) -> dict[str, Any]:
        d = self.detection
        return {
            "ingredient": d.matched_term,
            "replacement": d.replacement or NO_REPLACEMENT,
            "notes": d.notes,
            "severity": d.severity.value,
            "confidence": d.confidence or 0.5,
            "quranReference": d.quran_reference,
            "hadithReference": d.hadith_reference,
            "reference": "; ".join(r for r in (d.quran_reference, d.hadith_reference) if r),
            "inheritedFrom": d.inherited_from,
            "alternatives": list(d.alternatives),
            "eli5": d.eli5,
            "trace": list(d.trace),
            "status": d.status.value,
            "references": list(d.references),
            "wasReplaced": self.was_replaced,
        }


@dataclass
class RecipeConversion:
    original_text: str = ""
    converted_text: str = ""
    issues: list[Issue] = field(default_factory=list)
    confidence_score: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "originalText": self.original_text,
            "convertedText": self.converted_text,
            "issues": [i.to_dict() for i in self.issues],
            "confidenceScore": self.confidence_score,
        }
