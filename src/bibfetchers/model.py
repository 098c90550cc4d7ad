"""Bibliographic entry model shared by all fetchers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class StandardField(str, Enum):
    """BibTeX fields a fetched entry may carry."""

    ABSTRACT = "abstract"
    ARCHIVEPREFIX = "archiveprefix"
    AUTHOR = "author"
    BOOKTITLE = "booktitle"
    DOI = "doi"
    EPRINT = "eprint"
    EPRINTTYPE = "eprinttype"
    HOWPUBLISHED = "howpublished"
    INSTITUTION = "institution"
    ISBN = "isbn"
    ISSN = "issn"
    JOURNAL = "journal"
    KEYWORDS = "keywords"
    MONTH = "month"
    MRNUMBER = "mrnumber"
    NOTE = "note"
    NUMBER = "number"
    PAGES = "pages"
    PMID = "pmid"
    PRIMARYCLASS = "primaryclass"
    PUBLISHER = "publisher"
    TITLE = "title"
    URL = "url"
    VOLUME = "volume"
    YEAR = "year"
    ZBL = "zbl"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str) -> StandardField | None:
        """Look up a field by its BibTeX name, case-insensitively."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


# Fields whose values are written without escaping
_VERBATIM_FIELDS = {StandardField.DOI, StandardField.URL, StandardField.EPRINT}


@dataclass
class BibEntry:
    """A single bibliographic record.

    Fetchers fill in whatever standard fields their source provides; callers
    read them back with :meth:`get`.
    """

    entry_type: str = "misc"
    citation_key: str | None = None
    fields: dict[StandardField, str] = field(default_factory=dict)

    def get(self, name: StandardField) -> str | None:
        return self.fields.get(name)

    def has(self, name: StandardField) -> bool:
        return bool(self.fields.get(name))

    def set(self, name: StandardField, value: str | None) -> None:
        """Set a field, ignoring empty values."""
        if value is None:
            return
        value = value.strip()
        if value:
            self.fields[name] = value

    def with_field(self, name: StandardField, value: str) -> BibEntry:
        """Return a copy of this entry with one more field set."""
        copy = BibEntry(self.entry_type, self.citation_key, dict(self.fields))
        copy.set(name, value)
        return copy

    @property
    def authors(self) -> list[str]:
        author = self.get(StandardField.AUTHOR)
        return [a.strip() for a in author.split(" and ")] if author else []

    def to_bibtex(self) -> str:
        """Render the entry as a BibTeX string."""
        key = self.citation_key or self._generate_key()
        lines = [f"@{self.entry_type}{{{key},"]
        for name in sorted(self.fields, key=lambda f: f.value):
            value = self.fields[name]
            if name not in _VERBATIM_FIELDS:
                value = _sanitize_value(value)
            lines.append(f"  {name.value} = {{{value}}},")
        lines.append("}")
        return "\n".join(lines)

    def _generate_key(self) -> str:
        authors = self.authors
        if authors:
            last = authors[0].split(",")[0] if "," in authors[0] else authors[0].split()[-1]
            author_part = re.sub(r"[^a-z]", "", last.lower()) or "unknown"
        else:
            author_part = "unknown"
        year = self.get(StandardField.YEAR) or "0000"
        return f"{author_part}{year}"


def _sanitize_value(value: str) -> str:
    """Collapse whitespace and escape BibTeX special characters."""
    sanitized = re.sub(r"\s+", " ", value)
    for char in ["#", "$", "%", "&", "_", "~", "^"]:
        sanitized = sanitized.replace(char, "\\" + char)
    return sanitized.strip()


def join_authors(names: list[str]) -> str | None:
    """Join author names into a BibTeX author field."""
    names = [n.strip() for n in names if n and n.strip()]
    return " and ".join(names) if names else None
