"""
Learning path model: the structured recommendation returned to the learner.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class PrimaryPick(BaseModel):
    """The best immediate answer, optionally with a playback offset (seconds)."""

    id: str
    title: str
    instructor: str = ""
    chosen_offset: Optional[int] = None
    rationale: str


class RoleItem(BaseModel):
    """A supporting recommendation (foundation, troubleshooting or progression)."""

    id: str
    title: str
    instructor: str = ""
    why: str


class LearningPathResponse(BaseModel):
    """Primary pick plus supporting roles, framing and guidance text."""

    primary: Optional[PrimaryPick] = None
    foundation: List[RoleItem] = Field(default_factory=list, max_length=2)
    troubleshooting: List[RoleItem] = Field(default_factory=list, max_length=2)
    progression: List[RoleItem] = Field(default_factory=list, max_length=2)
    framing: str
    encouragement: str
    metacognitive_tip: str
    success_metric: str
    presentation_style: str

    def role_ids(self) -> dict:
        """Ids per role, used to compare paths independent of generated text."""
        return {
            "primary": self.primary.id if self.primary else None,
            "foundation": [item.id for item in self.foundation],
            "troubleshooting": [item.id for item in self.troubleshooting],
            "progression": [item.id for item in self.progression],
        }
