"""
Matching and scoring contexts.

MatchingContext is what the caller hands to match_candidates; ScoringContext is
the resolved, read-only view every sub-score function receives.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel

from ...models.config import PipelineConfig
from ...models.understanding import Understanding
from ...models.user import UserHistory


class MatchingContext(BaseModel):
    """Query, interpretation and (optionally preloaded) user context for one request."""

    query: str
    understanding: Understanding
    user_id: str = ""
    user_history: Optional[UserHistory] = None


@dataclass(frozen=True)
class ScoringContext:
    """Shared inputs of the per-candidate sub-score functions."""

    understanding: Understanding
    history: UserHistory
    config: PipelineConfig

    @property
    def has_watch_history(self) -> bool:
        return self.history.avg_watch_duration > 0
