"""
Unit tests for detection (word boundaries, dedup, policy filter) and conversion (case, order).
Run from backend: python -m pytest tests/test_detector_converter.py -v
"""
import pytest

from core.evaluation.converter import convert, match_case
from core.evaluation.detector import detect
from core.knowledge.knowledge_base import KnowledgeBase
from core.knowledge.knowledge_schema import IngredientStatus
from core.models.detection import Detection, Severity
from core.models.preferences import UserPreferences


def _keys(detections):
    return [d.key for d in detections]


# ---------------------------------------------------------------------------
# Detector
# ---------------------------------------------------------------------------
def test_whole_word_only(knowledge_base):
    assert detect(knowledge_base, "A porkish flavour") == []
    assert _keys(detect(knowledge_base, "Add the Pork.")) == ["pork"]


def test_case_insensitive_multiword(knowledge_base):
    detections = detect(knowledge_base, "Deglaze with RED WINE")
    assert _keys(detections) == ["red_wine"]
    assert detections[0].matched_term == "red wine"


def test_owner_processed_once_first_term_wins(knowledge_base):
    detections = detect(knowledge_base, "pork belly, then more pork and a whole pig")
    assert _keys(detections) == ["pork"]
    assert detections[0].matched_term == "pork"


def test_alias_match_reports_alias_term(knowledge_base):
    detections = detect(knowledge_base, "Grill the prawn", UserPreferences())
    assert _keys(detections) == ["shrimp"]
    assert detections[0].matched_term == "prawn"
    assert detections[0].status == IngredientStatus.CONDITIONAL


def test_halal_and_unresolved_unknown_skipped(knowledge_base):
    assert detect(knowledge_base, "beef with tofu") == []


def test_detection_fields(knowledge_base):
    (bacon,) = detect(knowledge_base, "crispy bacon")
    assert bacon.name == "bacon"
    assert bacon.status == IngredientStatus.HARAM
    assert bacon.alternatives == ["turkey bacon"]
    assert bacon.replacement == "turkey bacon"
    assert bacon.inherited_from == "bacon"
    assert bacon.severity == Severity.HIGH
    assert bacon.confidence == 0.1
    assert bacon.trace == ["bacon inherits from pork", "Ultimate source: bacon (haram)"]
    assert bacon.quran_reference == "Qur'an 2:173"
    assert bacon.hadith_reference == "Sahih Muslim 2003"


def test_trace_names_the_matched_alias(knowledge_base):
    (pork,) = detect(knowledge_base, "Roast the pig")
    assert pork.key == "pork"
    assert pork.trace == ["pig is explicitly haram"]

    kb = KnowledgeBase.from_mapping({
        "pork": {"status": "haram"},
        "ham": {"status": "haram", "aliases": ["smoked gammon"], "inheritance": ["pork"]},
    })
    (ham,) = detect(kb, "Glaze the smoked gammon")
    assert ham.key == "ham"
    assert ham.trace == ["smoked_gammon inherits from pork", "Ultimate source: ham (haram)"]


def test_unknown_chorizo_inherits_haram(knowledge_base):
    (chorizo,) = detect(knowledge_base, "sliced chorizo")
    assert chorizo.status == IngredientStatus.HARAM
    assert chorizo.inherited_from == "pork"
    assert chorizo.trace[-1] == "chorizo is unclassified and inherits haram from pork"


def test_preferences_change_detection(knowledge_base):
    text = "vanilla extract and shrimp"
    assert _keys(detect(knowledge_base, text)) == ["vanilla_extract", "shrimp"]
    flexible = UserPreferences.from_dict({"strictnessLevel": "flexible"})
    assert _keys(detect(knowledge_base, text, flexible)) == ["shrimp"]
    shafii = UserPreferences.from_dict({"schoolOfThought": "shafii"})
    assert _keys(detect(knowledge_base, text, shafii)) == ["vanilla_extract"]
    hanafi = detect(knowledge_base, text, UserPreferences.from_dict({"schoolOfThought": "hanafi"}))
    assert hanafi[1].status == IngredientStatus.HARAM


def test_strict_gelatin_is_haram(knowledge_base):
    strict = UserPreferences.from_dict({"strictnessLevel": "strict"})
    (gelatin,) = detect(knowledge_base, "1 tbsp gelatin", strict)
    assert gelatin.status == IngredientStatus.HARAM
    assert "Strictness 'strict' maps gelatin_unknown to haram" in gelatin.trace


def test_detect_rejects_non_text(knowledge_base):
    assert detect(knowledge_base, "") == []
    assert detect(knowledge_base, None) == []
    assert detect(KnowledgeBase(), "pork") == []


def test_alias_with_punctuation_matches_as_words():
    kb = KnowledgeBase.from_mapping({"rum": {"status": "haram", "aliases": ["Dark Rum (aged)"]}})
    assert kb.search_terms() == [("rum", "rum"), ("dark rum aged", "rum")]
    assert _keys(detect(kb, "a splash of rum")) == ["rum"]


# ---------------------------------------------------------------------------
# Converter
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("original, expected", [
    ("BACON", "TURKEY BACON"),
    ("Bacon", "Turkey bacon"),
    ("bacon", "turkey bacon"),
    ("bAcOn", "turkey bacon"),
])
def test_case_preservation(knowledge_base, original, expected):
    detections = detect(knowledge_base, f"Fry the {original}.")
    result = convert(f"Fry the {original}.", detections)
    assert result.converted_text == f"Fry the {expected}."


def test_match_case_helper():
    assert match_case("PORK", "beef") == "BEEF"
    assert match_case("Pork", "beef") == "Beef"
    assert match_case("pork", "beef") == "beef"


def test_global_replacement_and_punctuation(knowledge_base):
    text = "Pork. Then pork, then PORK!"
    result = convert(text, detect(knowledge_base, text))
    assert result.converted_text == "Beef. Then beef, then BEEF!"
    assert [r.original for r in result.replacements] == ["pork"]
    assert result.unresolved == []


def test_word_boundaries_respected_during_replacement(knowledge_base):
    text = "pork and porkish notes"
    result = convert(text, detect(knowledge_base, text))
    assert result.converted_text == "beef and porkish notes"


def test_missing_or_blank_alternative_unresolved(knowledge_base):
    text = "blood, carrion and sausage"
    result = convert(text, detect(knowledge_base, text))
    assert result.converted_text == text
    assert result.replacements == []
    assert [(u.ingredient, u.status) for u in result.unresolved] == [
        ("blood", IngredientStatus.HARAM),
        ("carrion", IngredientStatus.HARAM),
        ("sausage", IngredientStatus.CONDITIONAL),
    ]


def test_zero_substitutions_marks_unresolved():
    detection = Detection(
        matched_term="lard", key="lard", name="lard",
        status=IngredientStatus.HARAM, alternatives=["butter"],
    )
    result = convert("no match here", [detection])
    assert result.replacements == []
    assert result.unresolved[0].ingredient == "lard"


def test_sequential_application_in_detection_order():
    first = Detection("ham", "ham", "ham", IngredientStatus.HARAM, alternatives=["turkey ham hock"])
    second = Detection("hock", "hock", "hock", IngredientStatus.HARAM, alternatives=["shank"])
    result = convert("ham", [first, second])
    # The second pass sees the output of the first
    assert result.converted_text == "turkey ham shank"
    assert len(result.replacements) == 2


def test_convert_without_detections_returns_text():
    result = convert("plain rice", [])
    assert result.converted_text == "plain rice"
    assert result.replacements == [] and result.unresolved == []
