"""Query understanding: prompt, strict parse, keyword fallback, interpret_query."""

from .core import interpret_query
from .fallback import (
    FALLBACK_MODEL_ID,
    classify_question_type,
    fallback_understanding,
    infer_emotional_state,
)
from .parsing import parse_json_response, parse_understanding
from .prompt import build_analysis_prompt, build_user_context_block

__all__ = [
    "FALLBACK_MODEL_ID",
    "build_analysis_prompt",
    "build_user_context_block",
    "classify_question_type",
    "fallback_understanding",
    "infer_emotional_state",
    "interpret_query",
    "parse_json_response",
    "parse_understanding",
]
