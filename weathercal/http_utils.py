# weathercal/http_utils.py
from __future__ import annotations

import logging
import httpx
from typing import Dict, Any, Tuple

log = logging.getLogger(__name__)


def get_json_with_retry(
    url: str,
    params: Dict[str, Any],
    retries: int = 3,
    timeout: float = 10.0,
) -> Tuple[Dict[str, Any], str]:
    """
    GET a JSON object, retrying on transport errors and non-200 responses.
    Returns (payload, "") on success or ({}, error) once retries run out.
    """
    last_err = ""

    for attempt in range(1, retries + 1):
        try:
            r = httpx.get(url, params=params, timeout=timeout)
        except httpx.HTTPError as e:
            last_err = type(e).__name__
            log.warning("Request to %s failed: %s [attempt %s/%s]", url, last_err, attempt, retries)
            continue

        if r.status_code != 200:
            # params carry API keys; log the URL only
            last_err = f"HTTP {r.status_code}"
            log.warning("%s from %s [attempt %s/%s]", last_err, url, attempt, retries)
            continue

        try:
            payload = r.json()
        except ValueError:
            return {}, "invalid JSON payload"
        if not isinstance(payload, dict):
            return {}, "unexpected JSON payload"
        return payload, ""

    log.error("Giving up on %s after %s attempts: %s", url, retries, last_err)
    return {}, last_err
