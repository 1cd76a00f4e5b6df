"""
Pull rule rows from a published CSV sheet and fold them into the knowledge source.
Only the sync script calls this; the engine never touches the network.
"""
from typing import Optional, Tuple
import csv
import io
import logging

from core.config import get_knowledge_sync_timeout
from core.knowledge.http_retry import get_with_retries
from core.normalization.normalizer import normalize_ingredient_name

logger = logging.getLogger(__name__)

SEVERITY_TO_BASIS = {"high": 0.1, "medium": 0.5, "low": 0.9}


def _split(value: Optional[str], sep: str) -> list[str]:
    return [p.strip() for p in (value or "").split(sep) if p.strip()]


def parse_knowledge_sheet(text: str) -> dict[str, dict]:
    """
    CSV columns: aliases (comma separated; the first names the entry),
    halal_alternative (one alternative, taken verbatim), severity, and optional
    status, notes, references (";" separated).
    Rows without aliases are skipped.
    """
    records: dict[str, dict] = {}
    reader = csv.DictReader(io.StringIO(text or ""))
    for row_num, row in enumerate(reader, start=2):
        row = {(k or "").strip().lower(): (v or "").strip() for k, v in row.items()}
        names = [normalize_ingredient_name(a) for a in _split(row.get("aliases"), ",")]
        names = [n for n in names if n]
        if not names:
            logger.warning("KNOWLEDGE_SYNC row=%d skipped (no aliases)", row_num)
            continue
        key = names[0]
        severity = row.get("severity", "").lower()
        alternative = row.get("halal_alternative", "")
        record = {
            "status": row.get("status", "").lower() or "haram",
            "aliases": names[1:],
            "alternatives": [alternative] if alternative else [],
            "confidence_score_base": SEVERITY_TO_BASIS.get(severity, 0.5),
        }
        if row.get("notes"):
            record["notes"] = row["notes"]
        if row.get("references"):
            record["references"] = _split(row["references"], ";")
        records[key] = record
    return records


def fetch_knowledge_sheet(url: str, timeout: Optional[int] = None) -> Tuple[Optional[dict], Optional[str]]:
    """Download and parse the sheet. Returns (records, None) or (None, error)."""
    resp, err = get_with_retries(url, timeout=timeout or get_knowledge_sync_timeout())
    if resp is None:
        logger.error("KNOWLEDGE_SYNC fetch failed url=%s error=%s", url[:60], err)
        return (None, err)
    records = parse_knowledge_sheet(resp.text)
    logger.info("KNOWLEDGE_SYNC fetched rows=%d url=%s", len(records), url[:60])
    return (records, None)


def merge_knowledge(base: dict, incoming: dict) -> dict:
    """
    Return a new mapping: incoming records update existing ones field by field.
    Sheet alternatives go first; existing alternatives and aliases are kept behind them.
    """
    merged = {k: dict(v) for k, v in (base or {}).items()}
    for key, record in (incoming or {}).items():
        current = merged.get(key)
        if current is None:
            merged[key] = dict(record)
            continue
        for list_field in ("alternatives", "aliases", "references"):
            combined = list(record.get(list_field) or []) + list(current.get(list_field) or [])
            current[list_field] = list(dict.fromkeys(combined))
        for name, value in record.items():
            if name not in ("alternatives", "aliases", "references"):
                current[name] = value
    return merged
