"""
Halal knowledge base. Loads data/halal_knowledge.json once per process.
Lookup by exact normalized key, then by alias; no substring guessing.
Read-only after construction, so concurrent requests share one instance.
"""
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Optional
import json
import logging

from .knowledge_schema import KnowledgeEntry
from core.config import get_knowledge_path
from core.normalization.normalizer import normalize_ingredient_name, key_to_search_term

logger = logging.getLogger(__name__)


class KnowledgeBase:
    """
    O(1) lookup by normalized key or alias.
    Also owns the flat (search_term, owner_key) table used for detection,
    built once here: each entry's key followed by its aliases, in load order.
    """

    def __init__(self, entries: Optional[dict[str, KnowledgeEntry]] = None, source: str = ""):
        self._by_key: dict[str, KnowledgeEntry] = dict(entries or {})
        self._source = source
        self._alias_owner: dict[str, str] = {}
        self._search_terms: list[tuple[str, str]] = []
        for key, entry in self._by_key.items():
            self._search_terms.append((key_to_search_term(key), key))
            for alias in entry.aliases:
                # First owner in load order wins
                self._alias_owner.setdefault(alias, key)
                self._search_terms.append((key_to_search_term(alias), key))

    @classmethod
    def from_mapping(cls, data: dict, source: str = "") -> "KnowledgeBase":
        entries: dict[str, KnowledgeEntry] = {}
        for raw_key, record in (data or {}).items():
            key = normalize_ingredient_name(raw_key)
            if not key or not isinstance(record, dict):
                logger.warning("KNOWLEDGE_BASE skipped malformed record key=%s", str(raw_key)[:60])
                continue
            if key in entries:
                logger.warning("KNOWLEDGE_BASE duplicate key=%s (raw=%s); keeping first", key, raw_key)
                continue
            entries[key] = KnowledgeEntry.from_dict(key, record)
        return cls(entries, source=source)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "KnowledgeBase":
        """
        Read the JSON source. Any failure degrades to an empty knowledge base
        so detection finds nothing rather than failing the request.
        """
        path = Path(path) if path else get_knowledge_path()
        if not path.exists():
            logger.warning("Knowledge base not found at %s; knowledge base empty.", path)
            return cls(source=str(path))
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Knowledge base load failed path=%s error=%s; knowledge base empty.", path, e)
            return cls(source=str(path))
        if not isinstance(data, dict):
            logger.error("Knowledge base at %s is not a JSON object; knowledge base empty.", path)
            return cls(source=str(path))
        kb = cls.from_mapping(data, source=str(path))
        logger.info("Loaded %d knowledge entries (%d search terms) from %s",
                    len(kb), len(kb.search_terms()), path)
        return kb

    def get(self, key: str) -> Optional[KnowledgeEntry]:
        return self._by_key.get(key)

    def find_by_alias(self, alias: str) -> Optional[KnowledgeEntry]:
        owner = self._alias_owner.get(alias)
        return self._by_key.get(owner) if owner else None

    def lookup(self, name: str) -> Optional[KnowledgeEntry]:
        """Normalize `name`, then direct key lookup, then alias lookup."""
        key = normalize_ingredient_name(name)
        if not key:
            return None
        return self._by_key.get(key) or self.find_by_alias(key)

    def search_terms(self) -> list[tuple[str, str]]:
        return self._search_terms

    def keys(self) -> list[str]:
        return list(self._by_key.keys())

    @property
    def source(self) -> str:
        return self._source

    def __contains__(self, key: str) -> bool:
        return key in self._by_key

    def __len__(self) -> int:
        return len(self._by_key)

    def __iter__(self) -> Iterator[KnowledgeEntry]:
        return iter(self._by_key.values())


@lru_cache(maxsize=1)
def get_knowledge_base() -> KnowledgeBase:
    """Process-wide knowledge base, loaded lazily on first use."""
    return KnowledgeBase.load()
