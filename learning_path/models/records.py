"""
Persistence records: what the pipeline writes to the persistence sink.

Both records upsert on key = (user_id, query_id); the last write wins.
"""

from datetime import datetime, timezone
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from .learning_path import LearningPathResponse
from .understanding import Understanding


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class UnderstandingRecord(BaseModel):
    """An Understanding tagged with the raw query and the model that produced it."""

    model_config = ConfigDict(protected_namespaces=())

    user_id: str
    query_id: str
    raw_query: str
    model_id: str
    understanding: Understanding
    created_at: str = Field(default_factory=_utc_now)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.user_id, self.query_id)


class LearningPathRecord(BaseModel):
    """A synthesized learning path for one (user, query)."""

    user_id: str
    query_id: str
    response: LearningPathResponse
    created_at: str = Field(default_factory=_utc_now)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.user_id, self.query_id)
