"""ISBN lookup through the Open Library books API."""

from bibfetchers.fetchers.base import ConfiguredFetcher, EntryBasedFetcher, IdBasedFetcher
from bibfetchers.identifiers import ISBN
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.http import get_json


class IsbnFetcher(ConfiguredFetcher, IdBasedFetcher, EntryBasedFetcher):
    """Resolve ISBNs to book entries."""

    name = "ISBN"

    API_URL = "https://openlibrary.org/api/books"

    def resolve_by_id(self, identifier: str) -> BibEntry | None:
        isbn = ISBN.parse(identifier)
        if isbn is None:
            return None

        key = f"ISBN:{isbn.normalized}"
        data = get_json(
            self.API_URL,
            params={"bibkeys": key, "format": "json", "jscmd": "data"},
            timeout=self.timeout,
        )
        book = (data or {}).get(key)
        if not book:
            return None

        entry = BibEntry(entry_type="book")
        title = book.get("title")
        if title and book.get("subtitle"):
            title = f"{title}: {book['subtitle']}"
        entry.set(StandardField.TITLE, title)
        entry.set(StandardField.AUTHOR, join_authors([a.get("name", "") for a in book.get("authors", [])]))
        publishers = book.get("publishers") or []
        if publishers:
            entry.set(StandardField.PUBLISHER, publishers[0].get("name"))
        # publish_date is free text such as "March 2004" or "2004"
        date = book.get("publish_date") or ""
        year = next((part for part in date.replace(",", " ").split() if len(part) == 4 and part.isdigit()), None)
        entry.set(StandardField.YEAR, year)
        entry.set(StandardField.URL, book.get("url"))
        entry.set(StandardField.ISBN, isbn.normalized)
        return entry

    def search_by_entry(self, entry: BibEntry) -> list[BibEntry]:
        isbn = entry.get(StandardField.ISBN)
        if not isbn:
            return []
        found = self.resolve_by_id(isbn)
        return [found] if found else []
