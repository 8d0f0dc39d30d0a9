"""
User models: profile and interaction history.

UserHistory is derived from raw interactions via UserHistory.from_interactions():
- avg_watch_duration: mean over interactions with a positive watch duration
- completion_rate: completed / clicked
- per_instructor_completion: completed / clicked, grouped by instructor
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Belt → skill level used when the profile has no explicit skill level.
BELT_SKILL_LEVELS: Dict[str, str] = {
    "white": "beginner",
    "blue": "intermediate",
    "purple": "intermediate",
    "brown": "advanced",
    "black": "advanced",
}


class UserProfile(BaseModel):
    """Persisted profile fields used to build the interpretation context."""

    model_config = ConfigDict(extra="allow")

    user_id: str
    belt_level: Optional[str] = None
    style: Optional[str] = None
    content_preference: Optional[str] = None
    recent_queries: List[str] = Field(default_factory=list)

    @property
    def skill_level(self) -> Optional[str]:
        belt = (self.belt_level or "").strip().lower()
        return BELT_SKILL_LEVELS.get(belt)


class Interaction(BaseModel):
    """A single user interaction with a recommended item."""

    model_config = ConfigDict(extra="allow")

    candidate_id: str
    instructor: str = ""
    clicked: bool = False
    completed: bool = False
    saved_to_library: bool = False
    watch_duration: float = 0.0
    created_at: str = ""

    @field_validator("candidate_id", mode="before")
    @classmethod
    def _id_as_str(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("created_at", mode="before")
    @classmethod
    def _timestamp_as_iso(cls, value: Any) -> Any:
        # Firestore returns datetimes.
        if hasattr(value, "isoformat"):
            return value.isoformat()
        return "" if value is None else value


class UserHistory(BaseModel):
    """Aggregated history signals; the default instance is the neutral (no history) value."""

    viewed_ids: List[str] = Field(default_factory=list)
    saved_ids: List[str] = Field(default_factory=list)
    avg_watch_duration: float = 0.0
    completion_rate: float = 0.0
    per_instructor_completion: Dict[str, float] = Field(default_factory=dict)

    @classmethod
    def from_interactions(
        cls,
        interactions: Iterable[Union[Dict, "Interaction"]],
        limit: Optional[int] = None,
    ) -> "UserHistory":
        """Derive history from interactions (newest first when limit is applied)."""
        items = ensure_interactions(interactions)
        items.sort(key=lambda i: i.created_at, reverse=True)
        if limit is not None:
            items = items[:limit]

        clicked = [i for i in items if i.clicked]
        watched = [i.watch_duration for i in items if i.watch_duration > 0]

        by_instructor: Dict[str, List[bool]] = defaultdict(list)
        for i in clicked:
            if i.instructor:
                by_instructor[i.instructor].append(i.completed)

        return cls(
            viewed_ids=[i.candidate_id for i in clicked],
            saved_ids=[i.candidate_id for i in items if i.saved_to_library],
            avg_watch_duration=sum(watched) / len(watched) if watched else 0.0,
            completion_rate=(
                sum(1 for i in clicked if i.completed) / len(clicked) if clicked else 0.0
            ),
            per_instructor_completion={
                name: sum(flags) / len(flags) for name, flags in by_instructor.items()
            },
        )


def ensure_interactions(
    items: Iterable[Union[Dict, "Interaction"]],
) -> List["Interaction"]:
    """Convert dicts or Interactions to a list of Interaction models."""
    return [
        Interaction.model_validate(i) if isinstance(i, dict) else i
        for i in items
    ]
