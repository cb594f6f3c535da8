import time
from fastapi import APIRouter, Depends

from routers.countries import get_store
from services.country_store import CountryStore

router = APIRouter()

_start_time = time.time()


@router.get("/health")
async def health_check(store: CountryStore = Depends(get_store)):
    error = store.error.value
    return {
        "status": "ok",
        "uptime_seconds": round(time.time() - _start_time),
        "version": "0.1.0",
        "cache": {
            "count": store.count(),
            "loading": store.loading.value,
            "error": error.message if error else None,
        },
    }
