import unicodedata

from models.country import Country
from utils.observable import DerivedObservable


def _collation_key(name: str) -> tuple[str, str]:
    # Accents and case only break ties, roughly like a locale-aware compare.
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


def sort_countries(countries: list[Country]) -> list[Country]:
    return sorted(countries, key=lambda c: _collation_key(c.name.common))


def matches(country: Country, term: str) -> bool:
    needle = term.lower()
    return needle in country.name.common.lower() or needle in country.name.official.lower()


def filter_countries(countries: list[Country], term: str) -> list[Country]:
    """Countries whose common or official name contains ``term``, in order.

    The term is used as given; trimming is left to the caller.
    """
    return [c for c in countries if matches(c, term)]


def search(store, term: str) -> DerivedObservable[list[Country]]:
    """Live search results over the store's cached countries.

    The view re-filters whenever the cache changes until ``close()`` is
    called on it. It never triggers a fetch.
    """
    return store.countries.map(lambda countries: filter_countries(countries, term))
