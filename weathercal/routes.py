# weathercal/routes.py

from functools import lru_cache
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from pydantic import BaseModel

from weathercal.fetcher import LayoutFetcher
from weathercal.layout_cache import LayoutCache
from weathercal.library import ServiceWidgetLibrary, WidgetLibrary
from weathercal.llm_service import LLMClient, OpenRouterLLM
from weathercal.models import LayoutDecision
from weathercal.ratelimit import limiter
from weathercal.settings import settings
from weathercal.widget_service import build_widget


router = APIRouter()


# -----------------------------------------------------------
# Dependencies
# -----------------------------------------------------------
def require_api_key(x_api_key: str = Header(..., alias="x-api-key")):
    """
    Validates that the incoming request supplies a correct x-api-key header.
    """
    if not settings.api_key or x_api_key != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")


def get_library() -> WidgetLibrary:
    # fresh per request: data is reloaded by each setup_* call
    return ServiceWidgetLibrary(settings)


@lru_cache(maxsize=1)
def get_llm() -> LLMClient:
    return OpenRouterLLM(settings)


def _cache_for(library: WidgetLibrary) -> LayoutCache:
    return LayoutCache(library.cache_dir, settings.script_name, max_age_minutes=settings.cache_minutes)


# -----------------------------------------------------------
# Pydantic models
# -----------------------------------------------------------
class WidgetResponse(BaseModel):
    name: str
    markup: str
    layout: str
    message: str
    preview: Optional[str] = None


# -----------------------------------------------------------
# Endpoints
# -----------------------------------------------------------
@router.get("/health")
@limiter.limit("30/minute")
async def health(request: Request) -> Dict[str, str]:
    return {"status": "ok"}


@router.get("/widget", response_model=WidgetResponse, tags=["widget"], dependencies=[Depends(require_api_key)])
@limiter.limit("15/minute")
async def widget_endpoint(
    request: Request,
    preview: Optional[str] = Query(None, description="small, medium or large; bypasses the layout cache"),
    library: WidgetLibrary = Depends(get_library),
    llm: LLMClient = Depends(get_llm),
) -> WidgetResponse:
    widget = await build_widget(
        library,
        llm,
        script_name=settings.script_name,
        preview=preview,
        columns=settings.layout_columns,
        cache_minutes=settings.cache_minutes,
    )
    return WidgetResponse(
        name=widget.name,
        markup=widget.markup,
        layout=widget.layout.layout,
        message=widget.layout.message,
        preview=widget.preview,
    )


@router.get("/layout", response_model=LayoutDecision, tags=["widget"], dependencies=[Depends(require_api_key)])
@limiter.limit("15/minute")
async def layout_endpoint(
    request: Request,
    library: WidgetLibrary = Depends(get_library),
    llm: LLMClient = Depends(get_llm),
) -> LayoutDecision:
    return await LayoutFetcher(library, llm, _cache_for(library)).fetch()


@router.delete("/layout/cache", tags=["widget"], dependencies=[Depends(require_api_key)])
@limiter.limit("15/minute")
async def clear_layout_cache(
    request: Request,
    library: WidgetLibrary = Depends(get_library),
) -> Dict[str, bool]:
    return {"cleared": _cache_for(library).clear()}
