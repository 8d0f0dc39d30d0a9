"""Text helpers for keyword extraction and case-insensitive matching."""

import re
from typing import Iterable, List

_WORD = re.compile(r"[a-z0-9']+")


def extract_keywords(text: str, min_length: int = 4) -> List[str]:
    """Lower-cased words of at least min_length characters, punctuation stripped, in order."""
    return [w.strip("'") for w in _WORD.findall(text.lower()) if len(w.strip("'")) >= min_length]


def contains_phrase(text: str, phrase: str) -> bool:
    """Case-insensitive substring test; an empty phrase never matches."""
    phrase = (phrase or "").strip().lower()
    return bool(phrase) and phrase in (text or "").lower()


def contains_any(text: str, phrases: Iterable[str]) -> bool:
    return any(contains_phrase(text, p) for p in phrases)
