"""DiVA (Swedish academic archive) lookup by record id."""

import re

from bibfetchers.fetchers.base import ConfiguredFetcher, IdBasedFetcher
from bibfetchers.model import BibEntry
from bibfetchers.utils.bibtex import parse_bibtex
from bibfetchers.utils.http import get_text


class DiVA(ConfiguredFetcher, IdBasedFetcher):
    """Fetch DiVA records through the BibTeX export."""

    name = "DiVA"

    EXPORT_URL = "https://www.diva-portal.org/smash/references"

    # Format: diva2:1234567
    PATTERN = re.compile(r"^diva2:\d+$", re.IGNORECASE)

    def is_valid_id(self, identifier: str) -> bool:
        return bool(self.PATTERN.match(identifier.strip()))

    def resolve_by_id(self, identifier: str) -> BibEntry | None:
        identifier = identifier.strip()
        if not self.is_valid_id(identifier):
            return None
        text = get_text(
            self.EXPORT_URL,
            params={
                "referenceFormat": "BibTex",
                "pids": f"[{identifier.lower()}]",
                "fileName": "export.bib",
            },
            timeout=self.timeout,
        )
        entries = parse_bibtex(text or "")
        if not entries:
            return None
        entry = entries[0]
        if not self.settings.imports.keep_source_citation_key:
            entry.citation_key = None
        return entry
