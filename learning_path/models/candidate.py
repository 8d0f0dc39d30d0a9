"""
Candidate model: typed representation of one instructional item.

Used by retrieval, ranking and synthesis instead of raw store dicts.
Built from store/API dicts via CandidateItem.model_validate(d) or ensure_candidates().
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

SKILL_LEVELS = ("beginner", "intermediate", "advanced")


class TimestampEntry(BaseModel):
    """One entry of an item's timestamp index."""

    offset: int = Field(ge=0)
    description: str = ""
    keywords: List[str] = Field(default_factory=list)


class CandidateItem(BaseModel):
    """
    Instructional item payload used across the pipeline stages.

    All fields except id and title are optional to support partial store data.
    duration is seconds (int) or an ISO-8601 string such as "PT12M30S".
    """

    model_config = ConfigDict(extra="allow")

    id: str
    title: str
    instructor: str = ""
    technique_name: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    skill_level: Optional[str] = None
    status: str = "active"

    # Store ordering signal.
    quality_score: float = 0.0
    # 0-10 scale.
    production_quality_score: Optional[float] = None
    # 0-20 scale.
    teaching_clarity_score: Optional[float] = None
    instructor_credibility_score: Optional[float] = None

    covers_mistakes: bool = False
    shows_live_application: bool = False
    includes_drilling: bool = False

    duration: Optional[Union[int, str]] = None
    published_at: Optional[str] = None
    timestamp_index: List[TimestampEntry] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("skill_level", mode="before")
    @classmethod
    def _normalize_skill_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            return value or None
        return value

    @field_validator("published_at", mode="before")
    @classmethod
    def _published_as_iso(cls, value: Any) -> Any:
        # Firestore and SQL drivers return datetimes.
        if hasattr(value, "isoformat"):
            return value.isoformat()
        return value

    @property
    def timestamp_count(self) -> int:
        return len(self.timestamp_index)

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    def searchable_text(self, field: str) -> str:
        """Lower-cased text of a searchable field (title, technique_name or tags)."""
        if field == "tags":
            return " ".join(self.tags).lower()
        value = getattr(self, field, None)
        return value.lower() if isinstance(value, str) else ""


def ensure_candidates(
    items: Iterable[Union[Dict[str, Any], "CandidateItem"]],
) -> List["CandidateItem"]:
    """Convert dicts or CandidateItems to a list of CandidateItem models."""
    return [
        CandidateItem.model_validate(item) if isinstance(item, dict) else item
        for item in items
    ]


class CandidatePool(BaseModel):
    """
    Raw retrieval result before scoring.

    strategy names the branch that produced it (technique, position, keyword, none).
    degraded is True when the store failed; an empty, non-degraded technique pool
    is the no-substitution outcome.
    """

    candidates: List[CandidateItem] = Field(default_factory=list)
    strategy: str = "none"
    terms: List[str] = Field(default_factory=list)
    degraded: bool = False

    @property
    def empty_by_policy(self) -> bool:
        return not self.candidates and not self.degraded and self.strategy == "technique"
