"""
Paths, defaults, and centralized configuration.
All resolution relative to the backend directory.
"""
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Repo root: backend/core/config.py -> parent=core, parent.parent=backend, parent.parent.parent=repo
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_REPO_ROOT = _BACKEND_DIR.parent


# --- Data paths ---
def get_knowledge_path() -> Path:
    override = os.environ.get("HALAL_KNOWLEDGE_PATH", "").strip()
    if override:
        return Path(override)
    return _REPO_ROOT / "data" / "halal_knowledge.json"


# --- Knowledge sheet sync (lazy read from env) ---
def get_knowledge_sheet_url() -> str:
    return os.environ.get("HALAL_KNOWLEDGE_SHEET_URL", "").strip()


def get_knowledge_sync_timeout() -> int:
    try:
        return int(os.environ.get("KNOWLEDGE_SYNC_TIMEOUT", "10"))
    except ValueError:
        logger.warning("CONFIG invalid KNOWLEDGE_SYNC_TIMEOUT; using 10s")
        return 10


# --- Preference defaults (used when a request omits a field) ---
def get_default_strictness() -> str:
    return os.environ.get("DEFAULT_STRICTNESS", "standard").strip().lower() or "standard"


def get_default_school_of_thought() -> str:
    return os.environ.get("DEFAULT_SCHOOL_OF_THOUGHT", "no-preference").strip().lower() or "no-preference"


# --- Startup logging ---
def log_config() -> None:
    path = get_knowledge_path()
    logger.info(
        "CONFIG: knowledge=%s exists=%s sheet_url=%s sync_timeout=%ds "
        "default_strictness=%s default_school=%s",
        path, path.exists(), bool(get_knowledge_sheet_url()),
        get_knowledge_sync_timeout(),
        get_default_strictness(), get_default_school_of_thought(),
    )
