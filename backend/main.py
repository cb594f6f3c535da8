import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from config import settings
from routers import countries, health
from services.country_fetcher import CountryFetcher
from services.country_store import CountryStore
from utils.http_client import close_client, get_client
from utils.logger import setup_logging

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

app = FastAPI(title="Countries Cache", version="0.1.0")

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(countries.router)


@app.get("/")
async def root():
    return {
        "name": "Countries Cache API",
        "version": "0.1.0",
        "endpoints": ["/health", "/countries", "/countries/search", "/countries/refresh"],
    }


@app.on_event("startup")
async def startup():
    setup_logging(settings.log_level)
    app.state.store = CountryStore(CountryFetcher(get_client()))
    if settings.prefetch_on_startup:
        app.state.store.get_or_load()
    logger.info("Countries Cache API is running")


@app.on_event("shutdown")
async def shutdown():
    store: CountryStore | None = getattr(app.state, "store", None)
    if store is not None:
        await store.wait_idle()
    await close_client()
