"""Typed identifiers used for identifier-type dispatch."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union


class IdentifierType(str, Enum):
    """Closed set of identifier kinds."""

    DOI = "DOI"
    ARXIV = "arXiv"
    ISBN = "ISBN"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DOI:
    """A Digital Object Identifier, stored without resolver prefix."""

    # Format: 10.xxxx/... (DOI prefix starts with 10.)
    PATTERN = re.compile(
        r"^(?:doi:\s*|https?://(?:dx\.)?doi\.org/)?(10\.\d{4,}(?:\.\d+)*/\S+)$",
        re.IGNORECASE,
    )
    RESOLVER = "https://doi.org"

    normalized: str

    identifier_type = IdentifierType.DOI

    @classmethod
    def parse(cls, text: str) -> DOI | None:
        match = cls.PATTERN.match(text.strip())
        if not match:
            return None
        return cls(match.group(1))

    @property
    def uri(self) -> str:
        return f"{self.RESOLVER}/{self.normalized}"

    def __str__(self) -> str:
        return self.normalized


@dataclass(frozen=True)
class ArXivIdentifier:
    """An arXiv identifier in new (2301.00001v2) or old (hep-th/9901001) style."""

    PATTERN = re.compile(
        r"^(?:arxiv:|https?://arxiv\.org/(?:abs|pdf)/)?(\d{4}\.\d{4,5})(v\d+)?(?:\.pdf)?$",
        re.IGNORECASE,
    )
    OLD_PATTERN = re.compile(
        r"^(?:arxiv:|https?://arxiv\.org/(?:abs|pdf)/)?([a-z-]+(?:\.[A-Z]{2})?/\d{7})(v\d+)?$",
        re.IGNORECASE,
    )

    normalized: str
    version: str | None = None

    identifier_type = IdentifierType.ARXIV

    @classmethod
    def parse(cls, text: str) -> ArXivIdentifier | None:
        text = text.strip()
        match = cls.PATTERN.match(text) or cls.OLD_PATTERN.match(text)
        if not match:
            return None
        return cls(match.group(1), match.group(2))

    @property
    def with_version(self) -> str:
        return self.normalized + (self.version or "")

    @property
    def uri(self) -> str:
        return f"https://arxiv.org/abs/{self.with_version}"

    def __str__(self) -> str:
        return self.with_version


@dataclass(frozen=True)
class ISBN:
    """An ISBN-10 or ISBN-13, stored as bare digits."""

    normalized: str

    identifier_type = IdentifierType.ISBN

    @classmethod
    def parse(cls, text: str) -> ISBN | None:
        text = re.sub(r"^isbn(?:-1[03])?:?\s*", "", text.strip(), flags=re.IGNORECASE)
        digits = re.sub(r"[\s-]", "", text).upper()
        if len(digits) == 10 and re.fullmatch(r"\d{9}[\dX]", digits):
            return cls(digits) if _isbn10_valid(digits) else None
        if len(digits) == 13 and digits.isdigit():
            return cls(digits) if _isbn13_valid(digits) else None
        return None

    @property
    def is_isbn13(self) -> bool:
        return len(self.normalized) == 13

    def __str__(self) -> str:
        return self.normalized


def _isbn10_valid(digits: str) -> bool:
    total = sum(
        (10 if ch == "X" else int(ch)) * weight
        for ch, weight in zip(digits, range(10, 0, -1))
    )
    return total % 11 == 0


def _isbn13_valid(digits: str) -> bool:
    total = sum(int(ch) * (1 if i % 2 == 0 else 3) for i, ch in enumerate(digits))
    return total % 10 == 0


Identifier = Union[DOI, ArXivIdentifier, ISBN]

IDENTIFIER_CLASSES: dict[IdentifierType, type] = {
    IdentifierType.DOI: DOI,
    IdentifierType.ARXIV: ArXivIdentifier,
    IdentifierType.ISBN: ISBN,
}
