# weathercal/fetcher.py
from __future__ import annotations

import locale
import logging
from typing import Optional

from weathercal.context import gather_context, serialize_context
from weathercal.layout_cache import LayoutCache
from weathercal.library import WidgetLibrary
from weathercal.llm_service import GenerateRequest, LLMClient
from weathercal.models import FALLBACK_DECISION, LayoutDecision
from weathercal.prompts import LAYOUT_QUERY, LAYOUT_SYSTEM_PROMPT
from weathercal.response_parser import parse_layout_decision

log = logging.getLogger(__name__)


def _host_locale() -> str:
    lang, _ = locale.getlocale()
    return lang or "en_US"


class LayoutFetcher:
    """
    Returns a Layout Decision, from the cache when it is fresh and we are not
    previewing, otherwise from the model. Never raises: any failure on the way
    to the model and back yields FALLBACK_DECISION.
    """

    def __init__(self, library: WidgetLibrary, llm: LLMClient, cache: LayoutCache):
        self.library = library
        self.llm = llm
        self.cache = cache
        self.locale = ""
        self.context: Optional[str] = None

    async def fetch(self, preview: bool = False) -> LayoutDecision:
        try:
            cached = self.cache.read()
        except Exception:
            log.exception("Layout cache read failed; treating as a miss.")
            cached = None

        if cached and not cached.expired and not preview:
            log.info("Using cached layout (%.0fs old).", cached.age_seconds)
            return cached.decision

        log.info("Fetching new layout from the model.")
        try:
            request = await self._build_request()
            raw = await self.llm.generate(request)
            decision = parse_layout_decision(raw)
            log.debug("Parsed layout: %s", decision.model_dump())
            self.cache.write(decision)
            return decision
        except Exception:
            log.exception("Layout request failed; using fallback layout.")
            return FALLBACK_DECISION.model_copy()

    async def _build_request(self) -> GenerateRequest:
        prefs = await self.library.get_settings()
        self.locale = prefs.locale or _host_locale()

        await self.library.setup_weather()
        await self.library.setup_events()
        await self.library.setup_reminders()
        await self.library.setup_news()

        context = serialize_context(gather_context(self.library))
        self.context = context
        log.debug("Layout context:\n%s", context)

        return GenerateRequest(
            query=LAYOUT_QUERY,
            context=context,
            system_prompt=LAYOUT_SYSTEM_PROMPT,
        )
