"""
Query interpretation: one bounded completion call, strict parse, deterministic fallback.

The public entry point is interpret_query. It never raises for capability or
persistence failures; the only caller error is an empty query.
"""

import logging
from typing import Optional

from ...errors import CapabilityError
from ...models.completion import CompletionClient, CompletionOptions, CompletionRequest
from ...models.config import PipelineConfig, resolve_config
from ...models.records import UnderstandingRecord
from ...models.understanding import Understanding
from ...models.user import UserProfile
from ...stores import PersistenceSink, UserStore
from .fallback import fallback_understanding
from .parsing import parse_understanding
from .prompt import ANALYSIS_TASK, build_analysis_prompt

logger = logging.getLogger(__name__)


def load_profile(user_store: Optional[UserStore], user_id: str) -> Optional[UserProfile]:
    """Profile for user_id, or None (anonymous defaults) when unknown or unavailable."""
    if user_store is None or not user_id:
        return None
    try:
        return user_store.get_profile(user_id)
    except Exception as e:
        logger.warning("[interpreter] Failed to load profile user_id=%s: %s", user_id, e)
        return None


def _request_interpretation(
    completion: CompletionClient,
    prompt: str,
    config: PipelineConfig,
) -> Understanding:
    request = CompletionRequest(
        task_type=ANALYSIS_TASK,
        prompt=prompt,
        options=CompletionOptions(
            json_mode=True,
            max_tokens=config.interpretation_max_tokens,
            temperature=config.interpretation_temperature,
            timeout=config.interpretation_timeout_seconds,
        ),
    )
    result = completion.complete(request)
    return parse_understanding(result.content, result.model_id)


def save_understanding(
    sink: Optional[PersistenceSink],
    user_id: str,
    query_id: str,
    query_text: str,
    understanding: Understanding,
) -> None:
    """Persist the interpretation; failures are logged and swallowed."""
    if sink is None:
        return
    record = UnderstandingRecord(
        user_id=user_id,
        query_id=query_id,
        raw_query=query_text,
        model_id=understanding.model_id,
        understanding=understanding,
    )
    try:
        sink.save_understanding(record)
    except Exception as e:
        logger.error("[interpreter] Failed to save analysis query_id=%s: %s", query_id, e)


def interpret_query(
    user_id: str,
    query_text: str,
    query_id: str,
    *,
    completion: Optional[CompletionClient] = None,
    user_store: Optional[UserStore] = None,
    sink: Optional[PersistenceSink] = None,
    config: Optional[PipelineConfig] = None,
) -> Understanding:
    """
    Interpret a learner query into a multi-layer Understanding.

    With no completion client (or enable_interpreter off) the deterministic
    fallback is used directly. Any capability failure also falls back.

    Raises:
        ValueError: If query_text is empty
    """
    if not query_text or not query_text.strip():
        raise ValueError("query_text cannot be empty")
    config = resolve_config(config)
    query_text = query_text.strip()
    query_id = str(query_id)

    understanding: Optional[Understanding] = None
    if completion is not None and config.enable_interpreter:
        profile = load_profile(user_store, user_id)
        prompt = build_analysis_prompt(query_text, profile)
        try:
            understanding = _request_interpretation(completion, prompt, config)
        except CapabilityError as e:
            logger.warning("[interpreter] Capability failed, using fallback: %s", e)
        except Exception as e:
            logger.warning(
                "[interpreter] Unexpected completion error, using fallback: %s: %s",
                type(e).__name__, e,
            )

    if understanding is None:
        understanding = fallback_understanding(query_text, config.fallback_confidence)

    logger.info(
        "[interpreter] query_id=%s type=%s skill=%s emotion=%s model=%s",
        query_id,
        understanding.explicit.question_type,
        understanding.profile.skill_level,
        understanding.profile.emotional_state,
        understanding.model_id,
    )

    save_understanding(sink, user_id, query_id, query_text, understanding)
    return understanding
