from pydantic import BaseModel, ConfigDict

from models.errors import FetchError


class CountryName(BaseModel):
    model_config = ConfigDict(frozen=True)

    common: str
    official: str = ""


class Country(BaseModel):
    """A country as served by the collection endpoint.

    Only the name is consumed; any other fields in the payload are dropped.
    Two countries are equal when their common names are equal.
    """

    model_config = ConfigDict(frozen=True)

    name: CountryName

    def __eq__(self, other):
        if not isinstance(other, Country):
            return NotImplemented
        return self.name.common == other.name.common

    def __hash__(self):
        return hash(self.name.common)


class CacheSnapshot(BaseModel):
    countries: list[Country]
    count: int
    loading: bool
    error: FetchError | None = None
