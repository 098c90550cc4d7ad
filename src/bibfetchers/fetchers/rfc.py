"""IETF RFC lookup through the datatracker."""

import re

from bibfetchers.fetchers.base import ConfiguredFetcher, IdBasedFetcher
from bibfetchers.model import BibEntry
from bibfetchers.utils.bibtex import parse_bibtex
from bibfetchers.utils.http import get_text


class RfcFetcher(ConfiguredFetcher, IdBasedFetcher):
    """Fetch RFCs by number ("rfc7231", "RFC 7231" or "7231")."""

    name = "RFC"

    BIBTEX_URL = "https://datatracker.ietf.org/doc/rfc{number}/bibtex/"

    PATTERN = re.compile(r"^(?:rfc\s*)?(\d{1,5})$", re.IGNORECASE)

    def resolve_by_id(self, identifier: str) -> BibEntry | None:
        match = self.PATTERN.match(identifier.strip())
        if not match:
            return None
        number = int(match.group(1))
        entries = parse_bibtex(get_text(self.BIBTEX_URL.format(number=number), timeout=self.timeout) or "")
        if not entries:
            return None
        entry = entries[0]
        if not self.settings.imports.keep_source_citation_key:
            entry.citation_key = None
        return entry
