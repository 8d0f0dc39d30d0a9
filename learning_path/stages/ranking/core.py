"""
Main matching orchestration: retrieve candidates, score each, rank, truncate.

Ranking is a stable sort on combined score (ties keep retrieval order) followed by
dense ranks 1..N. Scoring may run on a thread pool; the output is identical.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Union

from ...models.candidate import CandidateItem, CandidatePool
from ...models.config import PipelineConfig, resolve_config
from ...models.scoring import VideoScore
from ...models.understanding import Understanding
from ...models.user import UserHistory
from ...stores import ContentStore, InMemoryContentStore, UserStore
from ..candidate_pool import get_candidate_pool
from .combined_scoring import build_video_score
from .context import MatchingContext, ScoringContext

logger = logging.getLogger(__name__)

CandidateSource = Union[ContentStore, Iterable[Union[dict, CandidateItem]]]


def as_content_store(source: CandidateSource) -> ContentStore:
    """Use a fetch delegate as-is; wrap a candidate pool in an in-memory store."""
    if hasattr(source, "search"):
        return source  # type: ignore[return-value]
    return InMemoryContentStore(source)  # type: ignore[arg-type]


def retrieve_pool(
    understanding: Understanding,
    source: CandidateSource,
    config: PipelineConfig,
) -> CandidatePool:
    """get_candidate_pool over any source; an invalid candidate pool is a degraded, empty pool."""
    try:
        store = as_content_store(source)
    except ValueError as e:
        logger.error("[matcher] Invalid candidate pool: %s", e)
        return CandidatePool(strategy="error", degraded=True)
    return get_candidate_pool(understanding, store, config)


def load_history(
    context: MatchingContext,
    user_store: Optional[UserStore],
    config: PipelineConfig,
) -> UserHistory:
    """Preloaded history, else the store's, else the neutral default on any failure."""
    if context.user_history is not None:
        return context.user_history
    if user_store is None or not context.user_id:
        return UserHistory()
    try:
        return user_store.get_history(context.user_id, limit=config.history_interaction_limit)
    except Exception as e:
        logger.warning(
            "[matcher] Failed to load history user_id=%s, using neutral default: %s",
            context.user_id, e,
        )
        return UserHistory()


def score_candidates(
    candidates: List[CandidateItem],
    ctx: ScoringContext,
) -> List[VideoScore]:
    """Unranked VideoScores in candidate order."""
    if ctx.config.parallel_scoring and len(candidates) > 1:
        with ThreadPoolExecutor(max_workers=ctx.config.scoring_workers) as pool:
            return list(pool.map(lambda c: build_video_score(c, ctx), candidates))
    return [build_video_score(c, ctx) for c in candidates]


def rank_scores(scored: List[VideoScore], max_results: int) -> List[VideoScore]:
    """Stable sort by combined score, assign ranks 1..N, truncate to max_results (negative is 0)."""
    max_results = max(max_results, 0)
    ordered = sorted(scored, key=lambda s: s.combined_score, reverse=True)
    ranked = [s.model_copy(update={"rank": i + 1}) for i, s in enumerate(ordered)]
    return ranked[:max_results]


def rank_candidate_pool(
    context: MatchingContext,
    pool: CandidatePool,
    *,
    user_store: Optional[UserStore] = None,
    max_results: int,
    config: PipelineConfig,
) -> List[VideoScore]:
    """Score and rank an already-retrieved pool."""
    if not pool.candidates:
        logger.info("[matcher] No candidate items found for %r", context.query)
        return []

    ctx = ScoringContext(
        understanding=context.understanding,
        history=load_history(context, user_store, config),
        config=config,
    )
    ranked = rank_scores(score_candidates(pool.candidates, ctx), max_results)

    logger.info(
        "[matcher] Ranked %d items: %s",
        len(ranked),
        [f"#{s.rank}: {s.candidate.title} ({s.combined_score:.1f})" for s in ranked],
    )
    return ranked


def match_candidates(
    context: MatchingContext,
    source: CandidateSource,
    *,
    user_store: Optional[UserStore] = None,
    max_results: Optional[int] = None,
    config: Optional[PipelineConfig] = None,
) -> List[VideoScore]:
    """
    Find and rank the best items for a query.

    source is a ContentStore or a candidate pool (list of CandidateItem / dicts).
    Store, pool-validation and history failures degrade to an empty list / neutral
    history. A negative max_results returns an empty list.
    """
    config = resolve_config(config)
    limit = config.max_results if max_results is None else max_results
    pool = retrieve_pool(context.understanding, source, config)
    return rank_candidate_pool(
        context, pool, user_store=user_store, max_results=limit, config=config
    )
