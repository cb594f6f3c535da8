"""Remote fetcher for the REST Countries collection endpoint."""

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from config import settings
from models.country import Country
from models.errors import CountryFetchError, FetchError

logger = logging.getLogger(__name__)

_COUNTRY_LIST = TypeAdapter(list[Country])


class CountryFetcher:
    """Performs the single outbound read of the country collection.

    Each ``fetch()`` issues exactly one GET: no retries and no timeout beyond
    the client's own. Failures are raised as ``CountryFetchError`` so the
    caller can publish the attached ``FetchError``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str | None = None,
        fields: list[str] | None = None,
    ):
        self._client = client
        self.url = url or settings.countries_api_url
        self.fields = list(fields if fields is not None else settings.countries_fields)
        self.calls = 0

    async def fetch(self) -> list[Country]:
        self.calls += 1
        params = {"fields": ",".join(self.fields)} if self.fields else None
        try:
            response = await self._client.get(self.url, params=params)
        except httpx.RequestError as e:
            detail = str(e) or type(e).__name__
            logger.error("Countries request could not be sent: %s", detail)
            raise CountryFetchError(FetchError.client(detail)) from e

        if not response.is_success:
            logger.error("Countries API error %s: %.200s", response.status_code, response.text)
            raise CountryFetchError(
                FetchError.server(response.status_code, response.reason_phrase or "Request failed")
            )

        try:
            countries = _COUNTRY_LIST.validate_json(response.content)
        except ValidationError as e:
            logger.error("Countries API returned an unusable body: %s", e)
            raise CountryFetchError(
                FetchError.server(
                    response.status_code,
                    f"Malformed response body: {e.error_count()} validation error(s)",
                )
            ) from e

        return countries
