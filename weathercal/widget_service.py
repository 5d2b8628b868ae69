# weathercal/widget_service.py
from __future__ import annotations

import logging
from typing import Optional

from weathercal.fetcher import LayoutFetcher
from weathercal.layout_cache import LayoutCache
from weathercal.library import Widget, WidgetLibrary
from weathercal.llm_service import LLMClient
from weathercal.models import FALLBACK_DECISION, LayoutDecision
from weathercal.renderer import render_header, render_layout

log = logging.getLogger(__name__)

PREVIEW_SIZES = ("small", "medium", "large")


def _render_or_fallback(decision: LayoutDecision, library: WidgetLibrary, columns: int) -> tuple[LayoutDecision, str]:
    try:
        return decision, render_layout(decision, library, columns)
    except Exception:
        log.exception("Rendering layout failed; using fallback layout.")
        fallback = FALLBACK_DECISION.model_copy()
    try:
        return fallback, render_layout(fallback, library, columns)
    except Exception:
        log.exception("Rendering fallback layout failed; showing the message only.")
        return fallback, render_header(fallback.message)


async def build_widget(
    library: WidgetLibrary,
    llm: LLMClient,
    *,
    script_name: str,
    preview: Optional[str] = None,
    columns: int = 3,
    cache_minutes: int = 30,
) -> Widget:
    """
    Pick a layout (cached, or fresh from the model), render it to markup and
    let the library build the widget. `preview` is the size to present in,
    and also bypasses the cache.
    """
    if columns not in (2, 3):
        log.warning("Unsupported column count %s; using 3.", columns)
        columns = 3

    cache = LayoutCache(library.cache_dir, script_name, max_age_minutes=cache_minutes)
    fetcher = LayoutFetcher(library, llm, cache)

    decision = await fetcher.fetch(preview=preview is not None)
    decision, markup = _render_or_fallback(decision, library, columns)

    widget = await library.create_widget(markup, script_name, library.uses_remote_storage)
    widget.layout = decision
    widget.context = fetcher.context

    if preview is not None:
        size = preview if preview in PREVIEW_SIZES else "large"
        widget.present(size)
    return widget
