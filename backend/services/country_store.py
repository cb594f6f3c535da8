import asyncio
import logging

from models.country import CacheSnapshot, Country
from models.errors import CountryFetchError, FetchError
from services.country_fetcher import CountryFetcher
from services.country_views import sort_countries
from utils.observable import Observable

logger = logging.getLogger(__name__)


class CountryStore:
    """In-memory cache of the country collection plus loading/error state.

    ``countries``, ``loading`` and ``error`` are observables; subscribers get
    the current value on subscribe and every change after it. A fetch
    attempt publishes, in order: error cleared, loading on, then either the
    new sorted collection or the error, then loading off.

    Overlapping fetches are not deduplicated: whichever attempt finishes
    last decides the final state.
    """

    def __init__(self, fetcher: CountryFetcher):
        self.fetcher = fetcher
        self.countries: Observable[list[Country]] = Observable([])
        self.loading: Observable[bool] = Observable(False)
        self.error: Observable[FetchError | None] = Observable(None)
        self._tasks: set[asyncio.Task] = set()

    async def request_fetch(self) -> list[Country] | None:
        """Fetch the collection into the cache.

        Returns the sorted collection, or None when the fetch failed (the
        failure is published on ``error``, not raised).
        """
        logger.info("Fetching countries from %s", self.fetcher.url)
        self.error.set(None)
        self.loading.set(True)
        try:
            fetched = await self.fetcher.fetch()
        except CountryFetchError as e:
            self.error.set(e.error)
            self.loading.set(False)
            return None
        except Exception:
            self.loading.set(False)
            raise

        countries = sort_countries(fetched)
        logger.info("Successfully fetched %d countries", len(countries))
        self.countries.set(countries)
        self.loading.set(False)
        return countries

    def get_or_load(self) -> Observable[list[Country]]:
        """Return the live collection, starting a background fetch if empty.

        Must be called from within a running event loop.
        """
        if not self.countries.value:
            task = asyncio.get_running_loop().create_task(self.request_fetch())
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)
        return self.countries

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Background countries fetch failed", exc_info=task.exception())

    async def refresh(self) -> list[Country] | None:
        """Empty the cache, then fetch again.

        Subscribers see the empty collection before the request goes out.
        """
        logger.info("Refreshing countries data")
        self.countries.set([])
        return await self.request_fetch()

    def count(self) -> int:
        return len(self.countries.value)

    def snapshot(self) -> CacheSnapshot:
        countries = self.countries.value
        return CacheSnapshot(
            countries=countries,
            count=len(countries),
            loading=self.loading.value,
            error=self.error.value,
        )

    async def wait_idle(self) -> None:
        """Wait for fetches started by ``get_or_load()`` to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
