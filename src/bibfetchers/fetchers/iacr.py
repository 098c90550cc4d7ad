"""IACR Cryptology ePrint Archive lookup."""

import re

from bibfetchers.fetchers.base import ConfiguredFetcher, IdBasedFetcher
from bibfetchers.model import BibEntry, StandardField
from bibfetchers.utils.bibtex import parse_bibtex
from bibfetchers.utils.http import get_text


class IacrEprintFetcher(ConfiguredFetcher, IdBasedFetcher):
    """Fetch IACR ePrint reports by id (e.g. 2017/1118)."""

    name = "IACR eprints"

    BIBTEX_URL = "https://eprint.iacr.org/{eprint}.bib"

    PATTERN = re.compile(
        r"^(?:https?://eprint\.iacr\.org/)?(\d{4})/(\d{3,5})(?:\.pdf)?$",
        re.IGNORECASE,
    )

    def normalize_id(self, identifier: str) -> str | None:
        match = self.PATTERN.match(identifier.strip())
        if not match:
            return None
        return f"{match.group(1)}/{match.group(2)}"

    def resolve_by_id(self, identifier: str) -> BibEntry | None:
        eprint = self.normalize_id(identifier)
        if eprint is None:
            return None
        entries = parse_bibtex(get_text(self.BIBTEX_URL.format(eprint=eprint), timeout=self.timeout) or "")
        if not entries:
            return None
        entry = entries[0]
        if not self.settings.imports.keep_source_citation_key:
            entry.citation_key = None
        entry.set(StandardField.URL, f"https://eprint.iacr.org/{eprint}")
        return entry
