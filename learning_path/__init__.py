"""
BJJ learning-path recommendation core.

Single entry point for the learning_path package:
- models/: PipelineConfig, Understanding, CandidateItem, VideoScore, LearningPathResponse
- stages/: understanding, candidate_pool, ranking, synthesis, orchestrator
- stores: ContentStore / UserStore / PersistenceSink protocols and in-memory stores
"""

from .errors import CapabilityError, LearningPathError, PersistenceError, RetrievalError
from .models import (
    DEFAULT_CONFIG,
    SCORE_WEIGHTS,
    CandidateItem,
    LearningPathResponse,
    PipelineConfig,
    Understanding,
    VideoScore,
    resolve_config,
)
from .stages import (
    MatchingContext,
    PipelineResult,
    PipelineServices,
    get_candidate_pool,
    interpret_query,
    match_candidates,
    run_learning_path,
    synthesize_learning_path,
)
from .stores import (
    InMemoryContentStore,
    InMemoryPersistenceSink,
    InMemoryUserStore,
    NullPersistenceSink,
)

__all__ = [
    "CandidateItem",
    "CapabilityError",
    "DEFAULT_CONFIG",
    "InMemoryContentStore",
    "InMemoryPersistenceSink",
    "InMemoryUserStore",
    "LearningPathError",
    "LearningPathResponse",
    "MatchingContext",
    "NullPersistenceSink",
    "PersistenceError",
    "PipelineConfig",
    "PipelineResult",
    "PipelineServices",
    "RetrievalError",
    "SCORE_WEIGHTS",
    "Understanding",
    "VideoScore",
    "get_candidate_pool",
    "interpret_query",
    "match_candidates",
    "resolve_config",
    "run_learning_path",
    "synthesize_learning_path",
]
