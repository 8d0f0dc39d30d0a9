"""Playback offset: the timestamp entry that best overlaps the query keywords."""

from typing import List, Optional

from ...models.candidate import CandidateItem, TimestampEntry


def _overlap(entry: TimestampEntry, keywords: List[str]) -> int:
    words = entry.description.lower().split()
    words += [k.lower() for k in entry.keywords if k]
    return sum(1 for kw in keywords if any(kw in w for w in words))


def select_playback_offset(candidate: CandidateItem, keywords: List[str]) -> Optional[int]:
    """
    Offset (seconds) of the entry matching the most query keywords.

    A keyword counts once per entry when it is a substring of any description
    word or entry keyword. The first entry wins ties. None when there are no
    keywords, no entries, or no entry overlaps at all.
    """
    keywords = [k.lower() for k in keywords if k and k.strip()]
    if not keywords or not candidate.timestamp_index:
        return None

    best_offset: Optional[int] = None
    best_count = 0
    for entry in candidate.timestamp_index:
        count = _overlap(entry, keywords)
        if count > best_count:
            best_offset, best_count = entry.offset, count
    return best_offset
