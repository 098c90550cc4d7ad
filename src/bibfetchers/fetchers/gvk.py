"""GVK union catalogue search over SRU."""

import re
import xml.etree.ElementTree as ET

from bibfetchers.exceptions import FetchError
from bibfetchers.fetchers.base import SearchBasedFetcher
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.http import get_text

_NS = {
    "srw": "http://www.loc.gov/zing/srw/",
    "dc": "http://purl.org/dc/elements/1.1/",
}


class GvkFetcher(SearchBasedFetcher):
    """Search the Gemeinsamer Verbundkatalog (K10plus) by Dublin Core records."""

    name = "GVK"

    SRU_URL = "https://sru.k10plus.de/gvk"

    MAX_RECORDS = 50

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        text = get_text(
            self.SRU_URL,
            params={
                "version": "1.1",
                "operation": "searchRetrieve",
                "query": self.to_cql(query),
                "maximumRecords": self.MAX_RECORDS,
                "recordSchema": "dc",
            },
        )
        return parse_dublin_core(text) if text else []

    @staticmethod
    def to_cql(query: str) -> str:
        """Turn a free-text query into a CQL all-fields search."""
        words = [w for w in re.split(r"\s+", query.strip()) if w]
        return " and ".join(f"pica.all={w}" for w in words)


def parse_dublin_core(text: str) -> list[BibEntry]:
    """Parse an SRU searchRetrieve answer carrying Dublin Core records."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise FetchError("Malformed answer from GVK", details=str(e)) from e

    entries = []
    for record in root.iterfind(".//srw:recordData", _NS):
        entry = BibEntry(entry_type="book")
        entry.set(StandardField.TITLE, record.findtext(".//dc:title", None, _NS))
        entry.set(
            StandardField.AUTHOR,
            join_authors([c.text or "" for c in record.iterfind(".//dc:creator", _NS)]),
        )
        entry.set(StandardField.PUBLISHER, record.findtext(".//dc:publisher", None, _NS))
        date = record.findtext(".//dc:date", "", _NS)
        year = re.search(r"\d{4}", date)
        entry.set(StandardField.YEAR, year.group(0) if year else None)
        for identifier in record.iterfind(".//dc:identifier", _NS):
            value = (identifier.text or "").strip()
            if value.lower().startswith("isbn") and not entry.has(StandardField.ISBN):
                entry.set(StandardField.ISBN, re.sub(r"^isbn:?\s*", "", value, flags=re.IGNORECASE))
            elif value.startswith("http"):
                entry.set(StandardField.URL, value)
        if entry.fields:
            entries.append(entry)
    return entries
