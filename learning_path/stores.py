"""
Store abstractions used by the pipeline stages.

- ContentStore: read-only search over instructional items
- UserStore: profile and interaction-history reads
- PersistenceSink: upserts of Understanding and LearningPath records

In-memory implementations live here (candidate pools passed by the caller, tests,
local runs). File and Firestore implementations are in runtime.services.
"""

from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple, Union

from .models.candidate import CandidateItem, ensure_candidates
from .models.records import LearningPathRecord, UnderstandingRecord
from .models.user import Interaction, UserHistory, UserProfile, ensure_interactions

SEARCHABLE_FIELDS = ("title", "technique_name", "tags")


class ContentStore(Protocol):
    """Protocol for content search. Raise RetrievalError when the store is unavailable."""

    def search(
        self,
        terms: Sequence[str],
        fields: Sequence[str],
        limit: int,
    ) -> List[CandidateItem]:
        """
        Return active items where any term is a case-insensitive substring of any
        of the given fields, ordered by quality_score (descending), up to limit.
        """
        ...


class UserStore(Protocol):
    """Protocol for user profile and interaction history reads."""

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Return the profile, or None for unknown users."""
        ...

    def get_history(self, user_id: str, limit: int = 50) -> UserHistory:
        """Return history derived from the user's most recent interactions."""
        ...


class PersistenceSink(Protocol):
    """Protocol for pipeline writes. Both methods upsert on (user_id, query_id)."""

    def save_understanding(self, record: UnderstandingRecord) -> None:
        ...

    def save_learning_path(self, record: LearningPathRecord) -> None:
        ...


def search_items(
    items: Iterable[CandidateItem],
    terms: Sequence[str],
    fields: Sequence[str],
    limit: int,
) -> List[CandidateItem]:
    """Shared substring search used by the in-memory and JSON content stores."""
    needles = [t.strip().lower() for t in terms if t and t.strip()]
    if not needles:
        return []
    hits = [
        item
        for item in items
        if item.is_active
        and any(n in item.searchable_text(f) for f in fields for n in needles)
    ]
    hits.sort(key=lambda item: item.quality_score, reverse=True)
    return hits[:limit]


class InMemoryContentStore:
    """Content store over a caller-supplied candidate pool."""

    def __init__(self, items: Iterable[Union[Dict, CandidateItem]] = ()):
        self._items = ensure_candidates(items)

    def __len__(self) -> int:
        return len(self._items)

    def search(
        self,
        terms: Sequence[str],
        fields: Sequence[str],
        limit: int,
    ) -> List[CandidateItem]:
        return search_items(self._items, terms, fields, limit)


class InMemoryUserStore:
    """User store over dicts of profiles and interactions (tests, local runs)."""

    def __init__(
        self,
        profiles: Optional[Dict[str, Union[Dict, UserProfile]]] = None,
        interactions: Optional[Dict[str, List[Union[Dict, Interaction]]]] = None,
    ):
        self._profiles: Dict[str, UserProfile] = {}
        for uid, p in (profiles or {}).items():
            self._profiles[uid] = (
                UserProfile.model_validate({"user_id": uid, **p}) if isinstance(p, dict) else p
            )
        self._interactions: Dict[str, List[Interaction]] = {
            uid: ensure_interactions(items) for uid, items in (interactions or {}).items()
        }

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        return self._profiles.get(user_id)

    def get_history(self, user_id: str, limit: int = 50) -> UserHistory:
        return UserHistory.from_interactions(self._interactions.get(user_id, []), limit=limit)


class InMemoryPersistenceSink:
    """Persistence sink keeping records in dicts keyed by (user_id, query_id)."""

    def __init__(self):
        self.understandings: Dict[Tuple[str, str], UnderstandingRecord] = {}
        self.learning_paths: Dict[Tuple[str, str], LearningPathRecord] = {}

    def save_understanding(self, record: UnderstandingRecord) -> None:
        self.understandings[record.key] = record

    def save_learning_path(self, record: LearningPathRecord) -> None:
        self.learning_paths[record.key] = record


class NullPersistenceSink:
    """Persistence sink that drops every write."""

    def save_understanding(self, record: UnderstandingRecord) -> None:
        pass

    def save_learning_path(self, record: LearningPathRecord) -> None:
        pass
