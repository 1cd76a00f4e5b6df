from .knowledge_schema import IngredientStatus, KnowledgeEntry
from .knowledge_base import KnowledgeBase, get_knowledge_base

__all__ = [
    "IngredientStatus",
    "KnowledgeEntry",
    "KnowledgeBase",
    "get_knowledge_base",
]
