"""Fetcher registry: field/type dispatch and the per-category fetcher lists.

Every function builds fresh fetcher instances from the settings it is given.
Nothing is cached between calls, so a key entered in the settings is picked
up by the next call.

Lists meant for presentation are sorted by display name. The full-text list
is a fallback chain and keeps its curated order: callers try it front to back
and stop at the first hit (see :func:`bibfetchers.fulltext.find_fulltext`).
"""

from collections.abc import Iterable
from enum import Enum
from typing import TypeVar

from bibfetchers.config.settings import Settings
from bibfetchers.exceptions import UnknownFetcherError, UnsupportedIdentifierTypeError
from bibfetchers.fetchers.acm import ACMPortalFetcher
from bibfetchers.fetchers.acs import ACS
from bibfetchers.fetchers.ads import AstrophysicsDataSystem
from bibfetchers.fetchers.arxiv import ArXiv
from bibfetchers.fetchers.base import (
    EntryBasedFetcher,
    FulltextFetcher,
    IdBasedFetcher,
    IdFetcher,
    SearchBasedFetcher,
    WebFetcher,
)
from bibfetchers.fetchers.citeseer import CiteSeer
from bibfetchers.fetchers.crossref import CrossRef
from bibfetchers.fetchers.dblp import DBLPFetcher
from bibfetchers.fetchers.diva import DiVA
from bibfetchers.fetchers.doaj import DOAJFetcher
from bibfetchers.fetchers.doi import DoiFetcher, DoiResolution
from bibfetchers.fetchers.google_scholar import GoogleScholar
from bibfetchers.fetchers.gvk import GvkFetcher
from bibfetchers.fetchers.iacr import IacrEprintFetcher
from bibfetchers.fetchers.ieee import IEEE
from bibfetchers.fetchers.inspire import INSPIREFetcher
from bibfetchers.fetchers.isbn import IsbnFetcher
from bibfetchers.fetchers.loc import LibraryOfCongress
from bibfetchers.fetchers.mathscinet import MathSciNet
from bibfetchers.fetchers.medline import MedlineFetcher
from bibfetchers.fetchers.rfc import RfcFetcher
from bibfetchers.fetchers.sciencedirect import ScienceDirect
from bibfetchers.fetchers.springer import SpringerFetcher, SpringerLink
from bibfetchers.fetchers.title import TitleFetcher
from bibfetchers.fetchers.unpaywall import OpenAccessDoi
from bibfetchers.fetchers.zbmath import ZbMATH
from bibfetchers.identifiers import IDENTIFIER_CLASSES, IdentifierType
from bibfetchers.model import StandardField

F = TypeVar("F", bound=WebFetcher)


class FetcherCategory(str, Enum):
    """Retrieval modes a caller can ask the registry for."""

    SEARCH = "search"
    ID = "id"
    ENTRY = "entry"
    IDENTIFIER = "identifier"
    FULLTEXT = "fulltext"


def sort_by_name(fetchers: Iterable[F]) -> tuple[F, ...]:
    """Order fetchers for presentation.

    Ascending by display name; ties keep their original order.
    """
    return tuple(sorted(fetchers, key=lambda fetcher: fetcher.name))


def _as_field(field: StandardField | str) -> StandardField | None:
    if isinstance(field, StandardField):
        return field
    if isinstance(field, str):
        return StandardField.parse(field)
    return None


# =============================================================================
# Field/type dispatch
# =============================================================================


def id_based_fetcher_for_field(field: StandardField | str, settings: Settings) -> IdBasedFetcher | None:
    """Get the id-based fetcher that resolves values of a field.

    Args:
        field: Entry field holding an identifier-like value.
        settings: Settings passed to the fetcher.

    Returns:
        The fetcher bound to DOI, ISBN or EPRINT, or None for any other field.
    """
    field = _as_field(field)
    if field is StandardField.DOI:
        return DoiFetcher(settings)
    if field is StandardField.ISBN:
        return IsbnFetcher(settings)
    if field is StandardField.EPRINT:
        return ArXiv(settings)
    return None


def id_fetcher_for_identifier_type(identifier_type: object) -> IdFetcher:
    """Get the fetcher that finds identifiers of a given type.

    Args:
        identifier_type: An IdentifierType, an identifier class (e.g. DOI)
            or an identifier value.

    Returns:
        The fetcher for that type.

    Raises:
        UnsupportedIdentifierTypeError: If no fetcher finds that type.
    """
    if _as_identifier_type(identifier_type) is IdentifierType.DOI:
        return CrossRef()
    raise UnsupportedIdentifierTypeError(_describe_type(identifier_type))


def id_fetcher_for_field(field: StandardField | str) -> IdFetcher | None:
    """Get the identifier fetcher for a field, or None if the field is unmapped.

    Unlike :func:`id_fetcher_for_identifier_type` this never raises: fields
    come from users, identifier types from code.
    """
    if _as_field(field) is StandardField.DOI:
        return CrossRef()
    return None


def _as_identifier_type(value: object) -> IdentifierType | None:
    if isinstance(value, IdentifierType):
        return value
    if isinstance(value, str):
        try:
            return IdentifierType(value)
        except ValueError:
            return None
    # Only identifier classes and their values, never fetchers
    cls = value if isinstance(value, type) else type(value)
    if cls not in IDENTIFIER_CLASSES.values():
        return None
    found = getattr(value, "identifier_type", None)
    return found if isinstance(found, IdentifierType) else None


def _describe_type(identifier_type: object) -> str:
    if isinstance(identifier_type, IdentifierType):
        return identifier_type.value
    if isinstance(identifier_type, type):
        return f"{identifier_type.__module__}.{identifier_type.__qualname__}"
    return repr(identifier_type)


# =============================================================================
# Category registries
# =============================================================================


def search_based_fetchers(settings: Settings) -> tuple[SearchBasedFetcher, ...]:
    """Get all search-based fetchers, sorted by name."""
    return sort_by_name(
        [
            ArXiv(settings),
            INSPIREFetcher(settings),
            GvkFetcher(),
            MedlineFetcher(),
            AstrophysicsDataSystem(settings),
            MathSciNet(settings),
            ZbMATH(settings),
            ACMPortalFetcher(settings),
            GoogleScholar(settings),
            DBLPFetcher(settings),
            SpringerFetcher(settings),
            CrossRef(),
            CiteSeer(),
            DOAJFetcher(settings),
            IEEE(settings),
        ]
    )


def id_based_fetchers(settings: Settings) -> tuple[IdBasedFetcher, ...]:
    """Get all id-based fetchers, sorted by name."""
    return sort_by_name(
        [
            ArXiv(settings),
            AstrophysicsDataSystem(settings),
            IsbnFetcher(settings),
            DiVA(settings),
            DoiFetcher(settings),
            MedlineFetcher(),
            TitleFetcher(settings),
            MathSciNet(settings),
            CrossRef(),
            LibraryOfCongress(settings),
            IacrEprintFetcher(settings),
            RfcFetcher(settings),
        ]
    )


def entry_based_fetchers(settings: Settings) -> tuple[EntryBasedFetcher, ...]:
    """Get all entry-based fetchers, sorted by name."""
    return sort_by_name(
        [
            AstrophysicsDataSystem(settings),
            DoiFetcher(settings),
            IsbnFetcher(settings),
            MathSciNet(settings),
            CrossRef(),
        ]
    )


def id_fetchers(settings: Settings) -> tuple[IdFetcher, ...]:
    """Get all identifier fetchers, sorted by name."""
    return sort_by_name(
        [
            CrossRef(),
            ArXiv(settings),
        ]
    )


def fulltext_fetchers(settings: Settings) -> tuple[FulltextFetcher, ...]:
    """Get the full-text fallback chain, in the order it must be tried.

    Not sorted: direct DOI resolution first, then publishers, then preprint
    servers, then meta search and the open-access resolver last.
    """
    return (
        # Original
        DoiResolution(),
        # Publishers
        ScienceDirect(settings),
        SpringerLink(settings),
        ACS(),
        ArXiv(settings),
        IEEE(settings),
        # Meta search
        GoogleScholar(settings),
        OpenAccessDoi(settings),
    )


_CATEGORIES = {
    FetcherCategory.SEARCH: search_based_fetchers,
    FetcherCategory.ID: id_based_fetchers,
    FetcherCategory.ENTRY: entry_based_fetchers,
    FetcherCategory.IDENTIFIER: id_fetchers,
    FetcherCategory.FULLTEXT: fulltext_fetchers,
}


def fetchers_for(category: FetcherCategory, settings: Settings) -> tuple[WebFetcher, ...]:
    """Get the fetcher list of one category."""
    return _CATEGORIES[FetcherCategory(category)](settings)


def find_by_name(fetchers: Iterable[F], name: str) -> F:
    """Pick a fetcher by display name, case-insensitively.

    Raises:
        UnknownFetcherError: If no fetcher has that name.
    """
    fetchers = tuple(fetchers)
    for fetcher in fetchers:
        if fetcher.name.lower() == name.strip().lower():
            return fetcher
    raise UnknownFetcherError(
        f"Unknown fetcher: {name}",
        details="Available: " + ", ".join(f.name for f in fetchers),
    )
