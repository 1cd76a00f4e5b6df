import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from core.knowledge.knowledge_base import KnowledgeBase


@pytest.fixture
def knowledge_data():
    """Small knowledge source covering every status, inheritance and tag path."""
    return {
        "pork": {
            "status": "haram",
            "aliases": ["pork_belly", "pig"],
            "alternatives": ["beef"],
            "confidence_score_base": 0.1,
            "references": ["Qur'an 2:173"],
        },
        "bacon": {
            "status": "haram",
            "inheritance": ["pork"],
            "alternatives": ["turkey bacon"],
            "confidence_score_base": 0.1,
            "references": ["Qur'an 2:173", "Sahih Muslim 2003"],
        },
        "red_wine": {
            "status": "haram",
            "alternatives": ["red grape juice"],
            "confidence_score_base": 0.1,
            "references": ["Qur'an 5:90"],
        },
        "blood": {
            "status": "haram",
            "alternatives": [],
            "confidence_score_base": 0.1,
        },
        "carrion": {
            "status": "haram",
            "alternatives": ["   "],
        },
        "chorizo": {
            "status": "unknown",
            "inheritance": ["pork"],
            "alternatives": ["beef chorizo"],
        },
        "gelatin": {
            "status": "conditional",
            "category": "animal-derived",
            "alternatives": ["agar-agar"],
        },
        "vanilla_extract": {
            "status": "conditional",
            "alternatives": ["vanilla bean"],
            "confidence_score_base": 0.9,
        },
        "shrimp": {
            "status": "conditional",
            "aliases": ["prawn"],
            "alternatives": ["white fish"],
        },
        "sausage": {
            "status": "conditional",
            "alternatives": [],
        },
        "beef": {
            "status": "halal",
        },
    }


@pytest.fixture
def knowledge_base(knowledge_data):
    return KnowledgeBase.from_mapping(knowledge_data)


@pytest.fixture
def shipped_knowledge_base():
    """Knowledge base from data/halal_knowledge.json (skips when the file is absent)."""
    from core.config import get_knowledge_path
    if not get_knowledge_path().exists():
        pytest.skip("halal_knowledge.json not found")
    return KnowledgeBase.load()
