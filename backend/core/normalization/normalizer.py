"""
Deterministic name normalization for knowledge-base lookup.
No fuzzy matching; the output is only ever used as a dictionary key.
"""
import re

_WHITESPACE_RE = re.compile(r"\s+")
_DISALLOWED_RE = re.compile(r"[^a-z0-9_]")


def normalize_ingredient_name(name: str) -> str:
    """
    Canonicalize an ingredient name into a lookup key.
    - Lowercase and trim.
    - Collapse each whitespace run into a single underscore.
    - Drop anything outside [a-z0-9_].
    Idempotent: normalizing a key returns the same key.
    """
    if not name or not isinstance(name, str):
        return ""
    t = name.lower().strip()
    t = _WHITESPACE_RE.sub("_", t)
    return _DISALLOWED_RE.sub("", t)


def key_to_search_term(key: str) -> str:
    """Render a key (or alias) as the phrase searched for in recipe text."""
    return (key or "").lower().replace("_", " ")
