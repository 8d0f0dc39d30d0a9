"""
Pipeline orchestrator: runs query understanding, candidate retrieval and ranking,
then learning path synthesis for one request.

The main entry point is run_learning_path, which returns the understanding, the
ranked list, the learning path, and request metadata (fallback interpretation,
retrieval strategy, degraded retrieval, candidate count). No state is shared
between calls; every dependency arrives through PipelineServices.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..models.completion import CompletionClient
from ..models.config import PipelineConfig, resolve_config
from ..models.learning_path import LearningPathResponse
from ..models.scoring import VideoScore
from ..models.understanding import Understanding
from ..stores import NullPersistenceSink, PersistenceSink, UserStore
from .ranking import MatchingContext, rank_candidate_pool, retrieve_pool
from .ranking.core import CandidateSource
from .synthesis import fallback_response, synthesize_learning_path
from .understanding import interpret_query

logger = logging.getLogger(__name__)


@dataclass
class PipelineServices:
    """External capabilities for one run. Any of them may be absent."""

    completion: Optional[CompletionClient] = None
    user_store: Optional[UserStore] = None
    sink: PersistenceSink = field(default_factory=NullPersistenceSink)


@dataclass
class PipelineResult:
    understanding: Understanding
    ranked: List[VideoScore]
    learning_path: LearningPathResponse
    metadata: Dict[str, Any]


def run_learning_path(
    user_id: str,
    query_text: str,
    query_id: str,
    source: CandidateSource,
    services: Optional[PipelineServices] = None,
    *,
    config: Optional[PipelineConfig] = None,
    max_results: Optional[int] = None,
) -> PipelineResult:
    """
    Answer one learner query end to end.

    With enable_interpreter off the keyword fallback interpretation is used; with
    enable_synthesizer off the learning path is the empty fallback shape. max_results
    defaults to config.max_results.

    Raises:
        ValueError: If query_text is empty
    """
    config = resolve_config(config)
    services = services or PipelineServices()
    query_id = str(query_id)

    # Stage 1: Query understanding
    understanding = interpret_query(
        user_id,
        query_text,
        query_id,
        completion=services.completion,
        user_store=services.user_store,
        sink=services.sink,
        config=config,
    )

    # Stage 2: Retrieval (no substitution) and six-factor ranking
    pool = retrieve_pool(understanding, source, config)
    context = MatchingContext(query=query_text, understanding=understanding, user_id=user_id)
    ranked = rank_candidate_pool(
        context,
        pool,
        user_store=services.user_store,
        max_results=config.max_results if max_results is None else max_results,
        config=config,
    )

    # Stage 3: Learning path synthesis
    if config.enable_synthesizer:
        learning_path = synthesize_learning_path(
            user_id,
            query_id,
            query_text,
            understanding,
            ranked,
            completion=services.completion,
            sink=services.sink,
            config=config,
        )
    else:
        learning_path = fallback_response(query_text.strip(), understanding)

    metadata = {
        "used_fallback_interpretation": understanding.is_fallback,
        "retrieval_strategy": pool.strategy,
        "retrieval_degraded": pool.degraded,
        "candidate_count": len(pool.candidates),
    }
    logger.info(
        "[pipeline] query_id=%s strategy=%s candidates=%d ranked=%d fallback=%s",
        query_id,
        pool.strategy,
        len(pool.candidates),
        len(ranked),
        understanding.is_fallback,
    )
    return PipelineResult(
        understanding=understanding,
        ranked=ranked,
        learning_path=learning_path,
        metadata=metadata,
    )
