"""Shared helpers for the concrete fetchers."""

from bibfetchers.utils.bibtex import parse_bibtex
from bibfetchers.utils.matching import title_score, titles_match

__all__ = [
    "parse_bibtex",
    "title_score",
    "titles_match",
]
