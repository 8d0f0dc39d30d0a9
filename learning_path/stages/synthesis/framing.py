"""
Conceptual framing: a short coach-voice introduction from the completion capability.
"""

import logging
from typing import Optional

from ...errors import CapabilityError
from ...models.completion import CompletionClient, CompletionOptions, CompletionRequest
from ...models.config import PipelineConfig
from ...models.scoring import VideoScore
from ...models.understanding import Understanding

logger = logging.getLogger(__name__)

FRAMING_TASK = "recommendation_synthesis"
FALLBACK_FRAMING = "Great question! Let's break this down systematically."


def build_framing_prompt(
    query_text: str,
    understanding: Understanding,
    primary: VideoScore,
) -> str:
    return f"""You are a BJJ black belt coach. A student asked: "{query_text}"

Their emotional state: {understanding.profile.emotional_state}
Their skill level: {understanding.profile.skill_level}
Root problem: {understanding.intent.root_problem}

You're about to recommend "{primary.candidate.title}" by {primary.candidate.instructor}.

Write a brief (2-3 sentences) conceptual framing that:
1. Acknowledges their question/frustration
2. Provides key insight they need to understand
3. Sets up WHY the video recommendation will help

Be conversational, supportive, and insightful. Speak like a coach, not a robot."""


def generate_framing(
    completion: Optional[CompletionClient],
    query_text: str,
    understanding: Understanding,
    primary: VideoScore,
    config: PipelineConfig,
) -> str:
    """One completion call; any failure or blank content gives the fixed fallback."""
    if completion is None:
        return FALLBACK_FRAMING
    request = CompletionRequest(
        task_type=FRAMING_TASK,
        prompt=build_framing_prompt(query_text, understanding, primary),
        options=CompletionOptions(
            max_tokens=config.framing_max_tokens,
            temperature=config.framing_temperature,
            timeout=config.framing_timeout_seconds,
        ),
    )
    try:
        content = completion.complete(request).content.strip()
    except CapabilityError as e:
        logger.warning("[synthesizer] Framing failed, using fallback: %s", e)
        return FALLBACK_FRAMING
    except Exception as e:
        logger.warning(
            "[synthesizer] Unexpected framing error, using fallback: %s: %s",
            type(e).__name__, e,
        )
        return FALLBACK_FRAMING
    return content or FALLBACK_FRAMING
