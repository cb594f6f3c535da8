from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from models.country import CacheSnapshot, Country
from services import country_views
from services.country_events import stream_events
from services.country_store import CountryStore

router = APIRouter(prefix="/countries", tags=["countries"])

limiter = Limiter(key_func=get_remote_address)


def get_store(request: Request) -> CountryStore:
    return request.app.state.store


class SearchResponse(BaseModel):
    query: str
    results: list[Country]
    count: int


class CountResponse(BaseModel):
    count: int


@router.get("", response_model=CacheSnapshot)
async def list_countries(store: CountryStore = Depends(get_store)):
    store.get_or_load()
    # HTTP callers can't subscribe, so answer once the first load settles.
    await store.wait_idle()
    return store.snapshot()


@router.get("/search", response_model=SearchResponse)
async def search_countries(q: str = "", store: CountryStore = Depends(get_store)):
    term = q.strip()
    if not term:
        results = store.countries.value
    else:
        view = country_views.search(store, term)
        results = view.value
        view.close()
    return SearchResponse(query=term, results=results, count=len(results))


@router.get("/count", response_model=CountResponse)
async def count_countries(store: CountryStore = Depends(get_store)):
    return CountResponse(count=store.count())


@router.post("/refresh", response_model=CacheSnapshot)
@limiter.limit(settings.refresh_rate_limit)
async def refresh_countries(request: Request, store: CountryStore = Depends(get_store)):
    await store.refresh()
    return store.snapshot()


@router.get("/events")
async def country_events(store: CountryStore = Depends(get_store)):
    return StreamingResponse(
        stream_events(store),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
