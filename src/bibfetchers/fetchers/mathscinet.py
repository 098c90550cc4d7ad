"""MathSciNet lookups through the free MRef/MR Lookup service."""

import html
import re

from bibfetchers.fetchers.base import (
    ConfiguredFetcher,
    EntryBasedFetcher,
    IdBasedFetcher,
    SearchBasedFetcher,
)
from bibfetchers.model import BibEntry, StandardField
from bibfetchers.utils.bibtex import parse_bibtex
from bibfetchers.utils.http import get_text

_PRE_BLOCK = re.compile(r"<pre>(.*?)</pre>", re.DOTALL | re.IGNORECASE)


class MathSciNet(ConfiguredFetcher, IdBasedFetcher, SearchBasedFetcher, EntryBasedFetcher):
    """Search Mathematical Reviews and resolve MR numbers."""

    name = "MathSciNet"

    LOOKUP_URL = "https://mathscinet.ams.org/mrlookup"

    MR_PATTERN = re.compile(r"^(?:MR)?\s*(\d{4,8})$", re.IGNORECASE)

    def resolve_by_id(self, identifier: str) -> BibEntry | None:
        match = self.MR_PATTERN.match(identifier.strip())
        if not match:
            return None
        entries = self._lookup({"mrnum": match.group(1)})
        return entries[0] if entries else None

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        return self._lookup({"ti": query})

    def search_by_entry(self, entry: BibEntry) -> list[BibEntry]:
        params = {}
        if entry.has(StandardField.TITLE):
            params["ti"] = entry.get(StandardField.TITLE)
        if entry.authors:
            params["au"] = entry.authors[0]
        if entry.has(StandardField.YEAR):
            params["year"] = entry.get(StandardField.YEAR)
        if entry.has(StandardField.JOURNAL):
            params["jrnl"] = entry.get(StandardField.JOURNAL)
        if not params:
            return []
        return self._lookup(params)

    def _lookup(self, params: dict[str, str]) -> list[BibEntry]:
        text = get_text(self.LOOKUP_URL, params={**params, "format": "bibtex"}, timeout=self.timeout)
        if not text:
            return []
        entries = []
        for block in _PRE_BLOCK.findall(text):
            entries.extend(parse_bibtex(html.unescape(block)))
        for entry in entries:
            if entry.citation_key and not entry.has(StandardField.MRNUMBER):
                entry.set(StandardField.MRNUMBER, entry.citation_key.removeprefix("MR"))
            if not self.settings.imports.keep_source_citation_key:
                entry.citation_key = None
        return entries
