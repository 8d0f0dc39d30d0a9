"""
Per-candidate scoring: six sub-scores blended with the weight table.

Builds an unranked VideoScore for one candidate given the shared ScoringContext.
"""

from ...models.candidate import CandidateItem
from ...models.scoring import VideoScore
from .context import ScoringContext
from .rationale import build_rationale
from .sub_scores import score_candidate


def build_video_score(candidate: CandidateItem, ctx: ScoringContext) -> VideoScore:
    """
    Compute sub-scores for one candidate and blend them.

    combined = 0.30 relevance + 0.20 pedagogical_fit + 0.15 engagement_probability
             + 0.15 learning_efficiency + 0.10 retention_likelihood + 0.10 progression_value
    (weights from config.weights).
    """
    scores = score_candidate(candidate, ctx)
    return VideoScore(
        candidate_id=candidate.id,
        candidate=candidate,
        scores=scores,
        combined_score=scores.combined(ctx.config.weights),
        rationale=build_rationale(scores, ctx.understanding, ctx.config),
    )
