import httpx
import pytest

from services.country_fetcher import CountryFetcher
from services.country_store import CountryStore

API_URL = "https://countries.test/v3.1/all"


def country(common: str, official: str = "", **extra) -> dict:
    return {"name": {"common": common, "official": official}, **extra}


@pytest.fixture
def make_store():
    """Build a store whose fetcher talks to an ``httpx.MockTransport``."""

    def _make(handler) -> CountryStore:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return CountryStore(CountryFetcher(client, url=API_URL, fields=["name"]))

    return _make


@pytest.fixture
def json_store(make_store):
    """Store whose endpoint always answers 200 with the given payload."""

    def _make(payload) -> CountryStore:
        return make_store(lambda request: httpx.Response(200, json=payload))

    return _make
