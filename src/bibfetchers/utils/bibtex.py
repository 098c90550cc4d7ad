"""BibTeX reading for sources that answer in BibTeX."""

from __future__ import annotations

import logging
import re

import bibtexparser
from bibtexparser.bparser import BibTexParser

from bibfetchers.model import BibEntry, StandardField

logger = logging.getLogger(__name__)

# Non-standard source field names folded onto standard ones
_ALIASES = {
    "journaltitle": StandardField.JOURNAL,
    "date": StandardField.YEAR,
}


def parse_bibtex(text: str) -> list[BibEntry]:
    """Parse every entry found in a BibTeX string.

    Args:
        text: BibTeX source.

    Returns:
        Parsed entries in source order. Fields outside StandardField are dropped.
    """
    if not text.strip():
        return []
    parser = BibTexParser(common_strings=True, ignore_nonstandard_types=False)
    database = bibtexparser.loads(text, parser)

    entries = []
    for record in database.entries:
        entry = BibEntry(
            entry_type=record.get("ENTRYTYPE", "misc").lower(),
            citation_key=record.get("ID") or None,
        )
        for name, value in record.items():
            if name in ("ENTRYTYPE", "ID"):
                continue
            name = name.lower()
            target = _ALIASES.get(name) or StandardField.parse(name)
            if target is None or entry.has(target):
                continue
            if name == "date":
                value = value[:4]
            entry.set(target, _clean(value))
        entries.append(entry)
    logger.debug(f"Parsed {len(entries)} BibTeX entries")
    return entries


def _clean(value: str) -> str:
    """Drop protective braces and collapse whitespace."""
    value = re.sub(r"(?<!\\)[{}]", "", value)
    return re.sub(r"\s+", " ", value).strip()
