# weathercal/news_service.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

from weathercal.http_utils import get_json_with_retry
from weathercal.settings import settings

log = logging.getLogger(__name__)

MAX_AGE_DAYS = 2


def _parse_iso_date(value: Optional[str]) -> Optional[datetime]:
    # SerpAPI sends iso_date as "2026-10-18T09:00:00Z"
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def _source_name(item: Dict[str, Any]) -> Optional[str]:
    source = item.get("source")
    if isinstance(source, dict):
        return source.get("name")
    return source


def get_news_items(place: str, limit: int = 3) -> Tuple[List[Dict[str, Any]], str]:
    """
    Fetch Google News results for the place through SerpAPI, newest first.
    Items older than MAX_AGE_DAYS are dropped; undated items are kept.
    """
    params = {
        "engine": "google_news",
        "q": place,
        "hl": "en",
        "api_key": settings.serp_api_key,
    }

    data, err = get_json_with_retry(settings.serpapi_search_url, params)
    if err:
        log.error("SerpAPI error: %s", err)
        return [], err

    cutoff = datetime.now(timezone.utc) - timedelta(days=MAX_AGE_DAYS)
    epoch = datetime.min.replace(tzinfo=timezone.utc)
    items: List[Dict[str, Any]] = []

    for item in data.get("news_results") or []:
        title = item.get("title")
        if not title:
            continue
        published = _parse_iso_date(item.get("iso_date"))
        if published is not None and published < cutoff:
            continue
        items.append(
            {
                "title": title,
                "source": _source_name(item),
                "date": published,
                "link": item.get("link"),
            }
        )

    items.sort(key=lambda x: x["date"] or epoch, reverse=True)
    for item in items:
        item["date"] = item["date"].isoformat() if item["date"] else None
    return items[:limit], ""


def get_news_headlines(place: str, limit: int = 3) -> Tuple[List[str], str]:
    items, err = get_news_items(place, limit)
    return [item["title"] for item in items], err
