"""Tests for identifier parsing."""

import pytest

from bibfetchers.identifiers import DOI, IDENTIFIER_CLASSES, ISBN, ArXivIdentifier, IdentifierType


class TestDOI:
    """Tests for DOI parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("10.1257/aer.20180779", "10.1257/aer.20180779"),
            ("doi:10.1257/aer.20180779", "10.1257/aer.20180779"),
            ("DOI: 10.1257/aer.20180779", "10.1257/aer.20180779"),
            ("https://doi.org/10.1016/j.cell.2020.01.001", "10.1016/j.cell.2020.01.001"),
            ("http://dx.doi.org/10.1000.10/xyz", "10.1000.10/xyz"),
            ("  10.1093/qje/qjz014  ", "10.1093/qje/qjz014"),
        ],
    )
    def test_parse_valid(self, text, expected):
        assert DOI.parse(text).normalized == expected

    @pytest.mark.parametrize("text", ["", "not-a-doi", "10.12/short", "2301.00001", "10.1234/with space"])
    def test_parse_invalid(self, text):
        assert DOI.parse(text) is None

    def test_uri(self):
        assert DOI("10.1234/abc").uri == "https://doi.org/10.1234/abc"

    def test_type(self):
        assert DOI.identifier_type is IdentifierType.DOI
        assert str(DOI("10.1234/abc")) == "10.1234/abc"


class TestArXivIdentifier:
    """Tests for arXiv id parsing."""

    @pytest.mark.parametrize(
        "text,normalized,version",
        [
            ("2301.00001", "2301.00001", None),
            ("2301.00001v2", "2301.00001", "v2"),
            ("arXiv:1706.03762v7", "1706.03762", "v7"),
            ("https://arxiv.org/abs/1706.03762", "1706.03762", None),
            ("https://arxiv.org/pdf/1706.03762v1.pdf", "1706.03762", "v1"),
            ("hep-th/9901001", "hep-th/9901001", None),
            ("math.GT/0309136v2", "math.GT/0309136", "v2"),
        ],
    )
    def test_parse_valid(self, text, normalized, version):
        arxiv_id = ArXivIdentifier.parse(text)
        assert arxiv_id.normalized == normalized
        assert arxiv_id.version == version

    @pytest.mark.parametrize("text", ["", "10.1234/x", "1706.037", "not-an-arxiv-id"])
    def test_parse_invalid(self, text):
        assert ArXivIdentifier.parse(text) is None

    def test_with_version_and_uri(self):
        arxiv_id = ArXivIdentifier("1706.03762", "v7")
        assert arxiv_id.with_version == "1706.03762v7"
        assert arxiv_id.uri == "https://arxiv.org/abs/1706.03762v7"
        assert str(ArXivIdentifier("1706.03762")) == "1706.03762"


class TestISBN:
    """Tests for ISBN parsing and checksums."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("978-0-262-03384-8", "9780262033848"),
            ("ISBN 978 0 262 03384 8", "9780262033848"),
            ("isbn-10: 0-201-89683-4", "0201896834"),
            ("080442957X", "080442957X"),
            ("080442957x", "080442957X"),
        ],
    )
    def test_parse_valid(self, text, expected):
        assert ISBN.parse(text).normalized == expected

    @pytest.mark.parametrize("text", ["", "9780262033849", "0201896835", "12345", "97802620338X8"])
    def test_parse_invalid(self, text):
        assert ISBN.parse(text) is None

    def test_is_isbn13(self):
        assert ISBN("9780262033848").is_isbn13
        assert not ISBN("0201896834").is_isbn13


def test_identifier_classes_cover_every_type():
    assert set(IDENTIFIER_CLASSES) == set(IdentifierType)
    for identifier_type, cls in IDENTIFIER_CLASSES.items():
        assert cls.identifier_type is identifier_type
