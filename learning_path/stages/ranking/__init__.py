"""
Ranking: six sub-scores blended into one combined score, then dense ranks.

Public API: match_candidates, rank_scores, build_video_score.
- sub_scores: one pure function per sub-score
- combined_scoring: weight-table blend into a VideoScore
- rationale: fixed phrases for strong sub-scores
- core: retrieval + scoring + ranking orchestration
"""

from .combined_scoring import build_video_score
from .context import MatchingContext, ScoringContext
from .core import (
    as_content_store,
    load_history,
    match_candidates,
    rank_candidate_pool,
    rank_scores,
    retrieve_pool,
    score_candidates,
)
from .rationale import build_rationale

__all__ = [
    "MatchingContext",
    "ScoringContext",
    "as_content_store",
    "build_rationale",
    "build_video_score",
    "load_history",
    "match_candidates",
    "rank_candidate_pool",
    "rank_scores",
    "retrieve_pool",
    "score_candidates",
]
