"""Pipeline stages: understanding, candidate pool, ranking, synthesis, orchestration."""

from .candidate_pool import get_candidate_pool, get_technique_variations, load_alias_table
from .orchestrator import PipelineResult, PipelineServices, run_learning_path
from .ranking import MatchingContext, build_rationale, match_candidates
from .synthesis import synthesize_learning_path
from .understanding import fallback_understanding, interpret_query

__all__ = [
    "MatchingContext",
    "PipelineResult",
    "PipelineServices",
    "build_rationale",
    "fallback_understanding",
    "get_candidate_pool",
    "get_technique_variations",
    "interpret_query",
    "load_alias_table",
    "match_candidates",
    "run_learning_path",
    "synthesize_learning_path",
]
