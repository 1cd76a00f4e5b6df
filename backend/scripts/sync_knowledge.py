#!/usr/bin/env python3
"""
Sync the halal knowledge base from a published CSV sheet.
Sheet rows update matching entries; new rows are added. Run on demand or via cron.
Usage: cd backend && python scripts/sync_knowledge.py [--url URL] [--output PATH] [--dry-run]
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure backend is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main(argv=None):
    from core.config import get_knowledge_path, get_knowledge_sheet_url
    from core.knowledge.sheet_sync import fetch_knowledge_sheet, merge_knowledge

    parser = argparse.ArgumentParser(description="Merge a published CSV sheet into the halal knowledge base")
    parser.add_argument("--url", default=get_knowledge_sheet_url(), help="Published CSV URL (defaults to HALAL_KNOWLEDGE_SHEET_URL)")
    parser.add_argument("--output", type=Path, default=get_knowledge_path(), help="Knowledge JSON to update")
    parser.add_argument("--dry-run", action="store_true", help="Report changes without writing")
    args = parser.parse_args(argv)

    if not args.url:
        logger.error("No sheet URL: pass --url or set HALAL_KNOWLEDGE_SHEET_URL")
        return 1

    incoming, err = fetch_knowledge_sheet(args.url)
    if incoming is None:
        logger.error("Sync aborted: %s", err)
        return 1

    base = {}
    if args.output.exists():
        try:
            base = json.loads(args.output.read_text(encoding="utf-8"))
        except ValueError as e:
            logger.error("Existing knowledge file %s is not valid JSON: %s", args.output, e)
            return 1

    merged = merge_knowledge(base, incoming)
    added = len(set(merged) - set(base))
    logger.info("Sync: %d rows fetched, %d new entries, %d total", len(incoming), added, len(merged))
    if args.dry_run:
        logger.info("DRY-RUN not writing %s", args.output)
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(merged, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.info("Wrote %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
