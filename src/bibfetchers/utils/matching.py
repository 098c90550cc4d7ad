"""Fuzzy title matching used when an identifier is looked up by entry."""

import re

from thefuzz import fuzz

# Minimum score (0-100) for two titles to count as the same work
MIN_TITLE_SCORE = 90


def normalize_title(title: str) -> str:
    """Lowercase, strip BibTeX braces and punctuation."""
    title = re.sub(r"[{}]", "", title.lower())
    title = re.sub(r"[^\w\s]", " ", title)
    return re.sub(r"\s+", " ", title).strip()


def title_score(a: str, b: str) -> int:
    """Fuzzy similarity of two titles on a 0-100 scale."""
    return fuzz.token_sort_ratio(normalize_title(a), normalize_title(b))


def titles_match(a: str | None, b: str | None, min_score: int = MIN_TITLE_SCORE) -> bool:
    if not a or not b:
        return False
    return title_score(a, b) >= min_score
