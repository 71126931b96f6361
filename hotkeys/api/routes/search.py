# hotkeys/api/routes/search.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from hotkeys.models import MatchResult, ShortcutRecord
from hotkeys.schemas.search_schema import (
    AbbreviationResponse,
    ReplaceShortcutsRequest,
    SearchRequest,
    SourceSummary,
    UsageRequest,
)
from hotkeys.services import (
    InMemoryShortcutRepository,
    SearchService,
    get_search_service,
    get_shortcut_repository,
)

router = APIRouter(prefix="/search", tags=["Search"])


@router.post("", response_model=List[MatchResult])
async def search_shortcuts(payload: SearchRequest, service: SearchService = Depends(get_search_service)):
    """
    Ranked shortcut search.

    Blends exact, substring, fuzzy and abbreviation matching into one score.
    Blank terms and internal failures both yield an empty list.
    """
    return await service.search(payload.term, payload.app_filter, payload.options)


@router.post("/usage", status_code=202)
async def record_usage(
    payload: UsageRequest,
    service: SearchService = Depends(get_search_service),
    repository: InMemoryShortcutRepository = Depends(get_shortcut_repository),
):
    """Count one use of a shortcut (boosts it in later searches)."""
    try:
        record = repository.find(payload.source, payload.shortcut, payload.description)
    except KeyError:
        raise HTTPException(status_code=404, detail="Shortcut not found")

    service.update_usage_statistics(record)
    return {"usage_count": record.usage_count}


@router.post("/cache/invalidate", status_code=204)
async def invalidate_cache(service: SearchService = Depends(get_search_service)):
    await service.invalidate_cache()


@router.post("/cache/warmup", status_code=204)
async def warmup_cache(service: SearchService = Depends(get_search_service)):
    await service.warmup_cache()


@router.get("/sources", response_model=List[SourceSummary])
async def list_sources(service: SearchService = Depends(get_search_service)):
    return [SourceSummary(source=s, count=c) for s, c in await service.list_sources()]


@router.get("/sources/{app}", response_model=List[ShortcutRecord])
async def source_records(app: str, service: SearchService = Depends(get_search_service)):
    return await service.get_source_records(app)


@router.get("/abbreviation", response_model=AbbreviationResponse)
async def abbreviation(
    text: str = Query(..., min_length=1, description="Text to abbreviate"),
    service: SearchService = Depends(get_search_service),
):
    return AbbreviationResponse(text=text, abbreviation=await service.get_abbreviation(text))


@router.put("/shortcuts", status_code=204)
async def replace_shortcuts(
    payload: ReplaceShortcutsRequest,
    service: SearchService = Depends(get_search_service),
    repository: InMemoryShortcutRepository = Depends(get_shortcut_repository),
):
    """Swap the whole record set and drop every cached entry."""
    repository.replace_all(payload.records)
    await service.invalidate_cache()
