"""
HTTP GET with retries and exponential backoff for knowledge sheet downloads.
"""
import logging
import time
from typing import Optional, Tuple

import requests

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_BACKOFF = 1.0


def get_with_retries(
    url: str,
    timeout: int = 10,
    max_retries: int = DEFAULT_MAX_RETRIES,
    initial_backoff: float = DEFAULT_INITIAL_BACKOFF,
) -> Tuple[Optional[requests.Response], Optional[str]]:
    """
    Retry timeouts, connection errors and 5xx answers with exponential backoff.
    Returns (response, None) on success, (None, error_message) on failure.
    4xx answers are returned as failures immediately.
    """
    last_error: Optional[str] = None
    for attempt in range(max_retries):
        try:
            resp = requests.get(url, timeout=timeout)
            if resp.status_code < 400:
                return (resp, None)
            last_error = f"HTTP {resp.status_code}"
            if resp.status_code < 500:
                logger.warning("KNOWLEDGE_SYNC giving up url=%s error=%s", url[:60], last_error)
                return (None, last_error)
        except requests.Timeout as e:
            last_error = f"Read timed out: {e}"
        except requests.RequestException as e:
            last_error = f"{type(e).__name__}: {e}"
        logger.warning(
            "KNOWLEDGE_SYNC retry attempt=%s/%s url=%s error=%s",
            attempt + 1, max_retries, url[:60], last_error,
        )
        if attempt < max_retries - 1:
            delay = initial_backoff * (2 ** attempt)
            logger.info("KNOWLEDGE_SYNC backoff %.1fs before retry", delay)
            time.sleep(delay)
    return (None, last_error)
