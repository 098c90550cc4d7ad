"""Google Scholar search and PDF discovery by page scraping."""

import html
import logging
import re

from bibfetchers.exceptions import RateLimitError
from bibfetchers.fetchers.base import ConfiguredFetcher, FulltextFetcher, SearchBasedFetcher
from bibfetchers.identifiers import DOI
from bibfetchers.model import BibEntry, StandardField, join_authors
from bibfetchers.utils.http import get_text
from bibfetchers.utils.matching import titles_match

logger = logging.getLogger(__name__)

_RESULT_SPLIT = re.compile(r'<div class="gs_r gs_or gs_scl')
_TITLE = re.compile(r'<h3 class="gs_rt"[^>]*>(.*?)</h3>', re.DOTALL)
_TITLE_LINK = re.compile(r'<a[^>]*href="([^"]+)"')
_BYLINE = re.compile(r'<div class="gs_a"[^>]*>(.*?)</div>', re.DOTALL)
_PDF_LINK = re.compile(r'<div class="gs_or_ggsm"[^>]*>\s*<a[^>]*href="([^"]+)"[^>]*>.*?\[PDF\]', re.DOTALL)
_TAG = re.compile(r"<[^>]+>")


def strip_tags(fragment: str) -> str:
    """Drop markup and entities from an HTML fragment."""
    text = html.unescape(_TAG.sub("", fragment))
    return re.sub(r"\s+", " ", text).strip()


class GoogleScholar(ConfiguredFetcher, SearchBasedFetcher, FulltextFetcher):
    """Scrape Google Scholar result pages."""

    name = "Google Scholar"

    SEARCH_URL = "https://scholar.google.com/scholar"

    def search(self, query: str) -> list[BibEntry]:
        if not query.strip():
            return []
        return [entry for entry, _ in self._results(query)]

    def find_fulltext(self, entry: BibEntry) -> str | None:
        """Return the first [PDF] link of a result matching the entry."""
        title = entry.get(StandardField.TITLE)
        doi = DOI.parse(entry.get(StandardField.DOI) or "")
        if doi is not None:
            # A DOI query yields at most the one matching record
            for _, pdf_url in self._results(doi.normalized):
                if pdf_url:
                    return pdf_url
        if title:
            for found, pdf_url in self._results(f'"{title}"'):
                if pdf_url and titles_match(title, found.get(StandardField.TITLE)):
                    return pdf_url
        return None

    def _results(self, query: str) -> list[tuple[BibEntry, str | None]]:
        page = get_text(self.SEARCH_URL, params={"q": query, "hl": "en"}, timeout=self.timeout)
        if not page:
            return []
        if "gs_captcha" in page or "unusual traffic" in page:
            raise RateLimitError("Google Scholar asks for a CAPTCHA")
        return parse_results_page(page)


def parse_results_page(page: str) -> list[tuple[BibEntry, str | None]]:
    """Extract (entry, pdf url) pairs from a Google Scholar result page."""
    results = []
    for block in _RESULT_SPLIT.split(page)[1:]:
        title_match = _TITLE.search(block)
        if not title_match:
            continue
        entry = BibEntry()
        title_html = title_match.group(1)
        # Result titles carry tags like [PDF] or [BOOK] in front
        entry.set(StandardField.TITLE, re.sub(r"^(\[[A-Z]+\]\s*)+", "", strip_tags(title_html)))
        link = _TITLE_LINK.search(title_html)
        if link:
            entry.set(StandardField.URL, html.unescape(link.group(1)))

        byline = _BYLINE.search(block)
        if byline:
            # "A Author, B Author - Venue, 2017 - publisher.com"
            parts = [p.strip() for p in strip_tags(byline.group(1)).split(" - ")]
            authors = [a.strip().rstrip("…").strip() for a in parts[0].split(",")]
            entry.set(StandardField.AUTHOR, join_authors(authors))
            if len(parts) > 1:
                year = re.search(r"\b(1[5-9]\d{2}|20\d{2})\b", parts[1])
                if year:
                    entry.set(StandardField.YEAR, year.group(1))
                venue = re.sub(r",?\s*\d{4}$", "", parts[1]).strip()
                if venue:
                    entry.set(StandardField.JOURNAL, venue)

        pdf = _PDF_LINK.search(block)
        results.append((entry, html.unescape(pdf.group(1)) if pdf else None))
    return results
