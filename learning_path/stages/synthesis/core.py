"""
Learning path synthesis: turn a ranked list into a primary pick plus supporting roles.

The role lists and primary pick are deterministic in (understanding, ranked);
only the framing text comes from the completion capability.
"""

import logging
from typing import List, Optional

from ...models.completion import CompletionClient
from ...models.config import PipelineConfig, resolve_config
from ...models.learning_path import LearningPathResponse, PrimaryPick
from ...models.records import LearningPathRecord
from ...models.scoring import VideoScore
from ...models.understanding import Understanding
from ...stores import PersistenceSink
from .framing import generate_framing
from .messaging import (
    encouragement_for,
    explain_primary_choice,
    fallback_response,
    metacognitive_tip,
    success_metric,
)
from .playback import select_playback_offset
from .roles import build_roles

logger = logging.getLogger(__name__)


def build_primary(
    primary: VideoScore,
    understanding: Understanding,
    config: PipelineConfig,
) -> PrimaryPick:
    return PrimaryPick(
        id=primary.candidate.id,
        title=primary.candidate.title,
        instructor=primary.candidate.instructor,
        chosen_offset=select_playback_offset(primary.candidate, understanding.explicit.keywords),
        rationale=explain_primary_choice(primary, understanding, config),
    )


def save_learning_path(
    sink: Optional[PersistenceSink],
    user_id: str,
    query_id: str,
    response: LearningPathResponse,
) -> None:
    """Persist the learning path; failures are logged and swallowed."""
    if sink is None:
        return
    try:
        sink.save_learning_path(
            LearningPathRecord(user_id=user_id, query_id=query_id, response=response)
        )
    except Exception as e:
        logger.error("[synthesizer] Failed to save learning path query_id=%s: %s", query_id, e)


def synthesize_learning_path(
    user_id: str,
    query_id: str,
    query_text: str,
    understanding: Understanding,
    ranked: List[VideoScore],
    *,
    completion: Optional[CompletionClient] = None,
    sink: Optional[PersistenceSink] = None,
    config: Optional[PipelineConfig] = None,
) -> LearningPathResponse:
    """
    Build the learning path for one query.

    An empty ranked list yields the fallback response, which is not persisted.
    Otherwise primary = ranked[0] and the response is upserted on (user_id, query_id).
    """
    config = resolve_config(config)
    query_id = str(query_id)

    if not ranked:
        logger.info("[synthesizer] No ranked items for %r, returning fallback", query_text)
        return fallback_response(query_text, understanding)

    primary = ranked[0]
    response = LearningPathResponse(
        primary=build_primary(primary, understanding, config),
        **build_roles(ranked, understanding, config),
        framing=generate_framing(completion, query_text, understanding, primary, config),
        encouragement=encouragement_for(understanding),
        metacognitive_tip=metacognitive_tip(understanding, primary),
        success_metric=success_metric(understanding),
        presentation_style=understanding.strategy.presentation_style,
    )

    save_learning_path(sink, user_id, query_id, response)
    logger.info(
        "[synthesizer] query_id=%s primary=%s foundation=%d troubleshooting=%d progression=%d",
        query_id,
        response.primary.id,
        len(response.foundation),
        len(response.troubleshooting),
        len(response.progression),
    )
    return response
