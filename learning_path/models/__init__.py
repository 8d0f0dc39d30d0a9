"""Data models for the learning-path pipeline."""

from .candidate import CandidateItem, CandidatePool, TimestampEntry, ensure_candidates
from .completion import CompletionClient, CompletionOptions, CompletionRequest, CompletionResult
from .config import DEFAULT_CONFIG, PipelineConfig, resolve_config
from .learning_path import LearningPathResponse, PrimaryPick, RoleItem
from .records import LearningPathRecord, UnderstandingRecord
from .scoring import SCORE_WEIGHTS, SubScores, VideoScore
from .understanding import (
    ExplicitLayer,
    IntentLayer,
    LearningPathLayer,
    ProfileLayer,
    StrategyLayer,
    Understanding,
)
from .user import Interaction, UserHistory, UserProfile, ensure_interactions

__all__ = [
    "DEFAULT_CONFIG",
    "SCORE_WEIGHTS",
    "CandidateItem",
    "CandidatePool",
    "CompletionClient",
    "CompletionOptions",
    "CompletionRequest",
    "CompletionResult",
    "ExplicitLayer",
    "IntentLayer",
    "Interaction",
    "LearningPathLayer",
    "LearningPathRecord",
    "LearningPathResponse",
    "PipelineConfig",
    "PrimaryPick",
    "ProfileLayer",
    "RoleItem",
    "StrategyLayer",
    "SubScores",
    "TimestampEntry",
    "Understanding",
    "UnderstandingRecord",
    "UserHistory",
    "UserProfile",
    "VideoScore",
    "ensure_candidates",
    "ensure_interactions",
    "resolve_config",
]
