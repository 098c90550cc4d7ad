"""Tests for the fetcher registry: dispatch, category lists and ordering."""

import pytest

from bibfetchers.exceptions import UnknownFetcherError, UnsupportedIdentifierTypeError
from bibfetchers.fetchers.acs import ACS
from bibfetchers.fetchers.arxiv import ArXiv
from bibfetchers.fetchers.base import (
    EntryBasedFetcher,
    FulltextFetcher,
    IdBasedFetcher,
    IdFetcher,
    SearchBasedFetcher,
)
from bibfetchers.fetchers.crossref import CrossRef
from bibfetchers.fetchers.doi import DoiFetcher, DoiResolution
from bibfetchers.fetchers.google_scholar import GoogleScholar
from bibfetchers.fetchers.ieee import IEEE
from bibfetchers.fetchers.isbn import IsbnFetcher
from bibfetchers.fetchers.registry import (
    FetcherCategory,
    entry_based_fetchers,
    fetchers_for,
    find_by_name,
    fulltext_fetchers,
    id_based_fetcher_for_field,
    id_based_fetchers,
    id_fetcher_for_field,
    id_fetcher_for_identifier_type,
    id_fetchers,
    search_based_fetchers,
    sort_by_name,
)
from bibfetchers.fetchers.sciencedirect import ScienceDirect
from bibfetchers.fetchers.springer import SpringerFetcher, SpringerLink
from bibfetchers.fetchers.unpaywall import OpenAccessDoi
from bibfetchers.identifiers import DOI, ISBN, ArXivIdentifier, IdentifierType
from bibfetchers.model import StandardField

PRESENTATION_REGISTRIES = [
    search_based_fetchers,
    id_based_fetchers,
    entry_based_fetchers,
    id_fetchers,
]

ALL_REGISTRIES = PRESENTATION_REGISTRIES + [fulltext_fetchers]


class _Named(FulltextFetcher):
    """Minimal fetcher with a configurable name, for ordering tests."""

    def __init__(self, name: str, tag: int = 0):
        self._name = name
        self.tag = tag

    @property
    def name(self) -> str:
        return self._name

    def find_fulltext(self, entry):
        return None


class TestIdBasedFetcherForField:
    """Tests for id_based_fetcher_for_field."""

    @pytest.mark.parametrize(
        "field,expected",
        [
            (StandardField.DOI, DoiFetcher),
            (StandardField.ISBN, IsbnFetcher),
            (StandardField.EPRINT, ArXiv),
        ],
    )
    def test_mapped_fields(self, settings, field, expected):
        """Should bind DOI, ISBN and EPRINT to their fetchers."""
        fetcher = id_based_fetcher_for_field(field, settings)
        assert type(fetcher) is expected
        assert isinstance(fetcher, IdBasedFetcher)

    @pytest.mark.parametrize(
        "field",
        [f for f in StandardField if f not in (StandardField.DOI, StandardField.ISBN, StandardField.EPRINT)],
    )
    def test_unmapped_fields_yield_none(self, settings, field):
        """Should return None, never raise, for any other field."""
        assert id_based_fetcher_for_field(field, settings) is None

    @pytest.mark.parametrize("name", ["doi", "DOI", " isbn ", "eprint"])
    def test_accepts_field_names(self, settings, name):
        """Should accept the BibTeX name of a field."""
        assert id_based_fetcher_for_field(name, settings) is not None

    @pytest.mark.parametrize("name", ["", "nonsense", "arxiv"])
    def test_unknown_names_yield_none(self, settings, name):
        assert id_based_fetcher_for_field(name, settings) is None

    def test_fetcher_receives_settings(self, keyed_settings):
        """Should pass the caller's settings by reference."""
        fetcher = id_based_fetcher_for_field(StandardField.DOI, keyed_settings)
        assert fetcher.settings is keyed_settings


class TestIdFetcherForIdentifierType:
    """Tests for id_fetcher_for_identifier_type."""

    @pytest.mark.parametrize(
        "identifier_type",
        [IdentifierType.DOI, DOI, DOI("10.1234/example"), "DOI"],
    )
    def test_doi_maps_to_crossref(self, identifier_type):
        fetcher = id_fetcher_for_identifier_type(identifier_type)
        assert type(fetcher) is CrossRef
        assert fetcher.identifier_type is IdentifierType.DOI

    @pytest.mark.parametrize(
        "identifier_type,named",
        [
            (IdentifierType.ARXIV, "arXiv"),
            (IdentifierType.ISBN, "ISBN"),
            (ArXivIdentifier, "ArXivIdentifier"),
            (ISBN, "ISBN"),
            (int, "int"),
        ],
    )
    def test_unsupported_type_raises(self, identifier_type, named):
        """Should fail fast and name the offending type."""
        with pytest.raises(UnsupportedIdentifierTypeError) as exc_info:
            id_fetcher_for_identifier_type(identifier_type)
        assert named in str(exc_info.value)

    @pytest.mark.parametrize("value", [CrossRef(), CrossRef])
    def test_fetchers_are_not_identifier_types(self, value):
        """Should reject fetchers even though they carry an identifier_type."""
        with pytest.raises(UnsupportedIdentifierTypeError):
            id_fetcher_for_identifier_type(value)

    def test_error_is_a_value_error(self):
        """Should be catchable as a plain invalid-argument error."""
        with pytest.raises(ValueError):
            id_fetcher_for_identifier_type(IdentifierType.ARXIV)


class TestIdFetcherForField:
    """Tests for id_fetcher_for_field."""

    def test_doi_field_maps_to_crossref(self):
        assert type(id_fetcher_for_field(StandardField.DOI)) is CrossRef

    @pytest.mark.parametrize("field", [StandardField.ISBN, StandardField.EPRINT, StandardField.TITLE, "bogus"])
    def test_other_fields_yield_none(self, field):
        """Should return None where the type-based lookup would raise."""
        assert id_fetcher_for_field(field) is None


class TestCategoryRegistries:
    """Tests for the per-category fetcher lists."""

    @pytest.mark.parametrize(
        "registry,size,contract",
        [
            (search_based_fetchers, 15, SearchBasedFetcher),
            (id_based_fetchers, 12, IdBasedFetcher),
            (entry_based_fetchers, 5, EntryBasedFetcher),
            (id_fetchers, 2, IdFetcher),
            (fulltext_fetchers, 8, FulltextFetcher),
        ],
    )
    def test_sizes_and_contracts(self, settings, registry, size, contract):
        fetchers = registry(settings)
        assert len(fetchers) == size
        assert all(isinstance(f, contract) for f in fetchers)

    @pytest.mark.parametrize("registry", PRESENTATION_REGISTRIES)
    def test_presentation_lists_sorted_by_name(self, settings, registry):
        names = [f.name for f in registry(settings)]
        assert names == sorted(names)

    @pytest.mark.parametrize("registry", PRESENTATION_REGISTRIES)
    def test_resorting_is_a_no_op(self, settings, registry):
        fetchers = registry(settings)
        assert sort_by_name(fetchers) == fetchers

    @pytest.mark.parametrize("registry", ALL_REGISTRIES)
    def test_no_duplicate_classes(self, settings, registry):
        classes = [type(f) for f in registry(settings)]
        assert len(classes) == len(set(classes))

    @pytest.mark.parametrize("registry", ALL_REGISTRIES)
    def test_lists_are_immutable(self, settings, registry):
        assert isinstance(registry(settings), tuple)

    @pytest.mark.parametrize("registry", ALL_REGISTRIES)
    def test_deterministic_but_fresh(self, settings, registry):
        """Should build equal lists of distinct instances on every call."""
        first = registry(settings)
        second = registry(settings)
        assert [type(f) for f in first] == [type(f) for f in second]
        assert [f.name for f in first] == [f.name for f in second]
        assert all(a is not b for a, b in zip(first, second))

    def test_search_list_order(self, settings):
        names = [f.name for f in search_based_fetchers(settings)]
        assert names == [
            "ACM Portal",
            "ArXiv",
            "CiteSeerX",
            "Crossref",
            "DBLP",
            "DOAJ",
            "GVK",
            "Google Scholar",
            "IEEEXplore",
            "INSPIRE",
            "MathSciNet",
            "Medline/PubMed",
            "SAO/NASA ADS",
            "Springer",
            "zbMATH",
        ]

    def test_id_fetchers_order(self, settings):
        assert [type(f) for f in id_fetchers(settings)] == [ArXiv, CrossRef]

    def test_fulltext_chain_keeps_curated_order(self, settings):
        """Should not sort the fallback chain."""
        classes = [type(f) for f in fulltext_fetchers(settings)]
        assert classes == [
            DoiResolution,
            ScienceDirect,
            SpringerLink,
            ACS,
            ArXiv,
            IEEE,
            GoogleScholar,
            OpenAccessDoi,
        ]
        names = [f.name for f in fulltext_fetchers(settings)]
        assert names != sorted(names)

    def test_new_settings_take_effect_immediately(self, settings, keyed_settings):
        """Should configure each call from the settings it is given."""
        before = find_by_name(search_based_fetchers(settings), "Springer")
        after = find_by_name(search_based_fetchers(keyed_settings), "Springer")
        assert isinstance(after, SpringerFetcher)
        assert before.settings.api_keys.springer is None
        assert after.settings.api_keys.springer == "springer-key"

    @pytest.mark.parametrize("category", list(FetcherCategory))
    def test_fetchers_for_matches_registry(self, settings, category):
        by_category = fetchers_for(category, settings)
        assert len(by_category) == {
            FetcherCategory.SEARCH: 15,
            FetcherCategory.ID: 12,
            FetcherCategory.ENTRY: 5,
            FetcherCategory.IDENTIFIER: 2,
            FetcherCategory.FULLTEXT: 8,
        }[category]

    def test_fetchers_for_accepts_category_value(self, settings):
        assert len(fetchers_for("entry", settings)) == 5


class TestSortByName:
    """Tests for the presentation ordering rule."""

    def test_sorts_ascending(self):
        fetchers = [_Named("b"), _Named("c"), _Named("a")]
        assert [f.name for f in sort_by_name(fetchers)] == ["a", "b", "c"]

    def test_ties_keep_insertion_order(self):
        fetchers = [_Named("same", 1), _Named("first"), _Named("same", 2), _Named("same", 3)]
        result = sort_by_name(fetchers)
        assert [f.tag for f in result if f.name == "same"] == [1, 2, 3]

    def test_empty(self):
        assert sort_by_name([]) == ()


class TestFindByName:
    """Tests for find_by_name."""

    def test_case_insensitive(self, settings):
        fetcher = find_by_name(search_based_fetchers(settings), "crossref")
        assert type(fetcher) is CrossRef

    def test_unknown_name_raises(self, settings):
        with pytest.raises(UnknownFetcherError) as exc_info:
            find_by_name(search_based_fetchers(settings), "Nope")
        assert "Crossref" in exc_info.value.details
