"""
Scoring model: SubScores, VideoScore and the combined-score weight table.

Contains:
- SCORE_WEIGHTS: the named weight vector for the six sub-scores (sums to 1.0)
- SubScores: six bounded sub-scores for one candidate
- VideoScore: a ranked candidate (request-scoped, never persisted)
"""

from types import MappingProxyType
from typing import Dict, Mapping

from pydantic import BaseModel, Field

from .candidate import CandidateItem

SCORE_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "relevance": 0.30,
        "pedagogical_fit": 0.20,
        "engagement_probability": 0.15,
        "learning_efficiency": 0.15,
        "retention_likelihood": 0.10,
        "progression_value": 0.10,
    }
)


class SubScores(BaseModel):
    """The six sub-scores of one candidate, each in [0, 100]."""

    relevance: float = Field(ge=0.0, le=100.0)
    pedagogical_fit: float = Field(ge=0.0, le=100.0)
    engagement_probability: float = Field(ge=0.0, le=100.0)
    learning_efficiency: float = Field(ge=0.0, le=100.0)
    retention_likelihood: float = Field(ge=0.0, le=100.0)
    progression_value: float = Field(ge=0.0, le=100.0)

    def as_dict(self) -> Dict[str, float]:
        """Sub-scores keyed by name, in weight-table order."""
        return {name: getattr(self, name) for name in SCORE_WEIGHTS}

    def combined(self, weights: Mapping[str, float] = SCORE_WEIGHTS) -> float:
        """Weighted sum of the sub-scores, clamped to [0, 100]."""
        total = sum(weights[name] * value for name, value in self.as_dict().items())
        return max(0.0, min(100.0, total))


class VideoScore(BaseModel):
    """A candidate with its sub-scores, combined score, rank and rationale."""

    candidate_id: str
    candidate: CandidateItem
    scores: SubScores
    combined_score: float = Field(ge=0.0, le=100.0)
    rank: int = 0
    rationale: str = ""
