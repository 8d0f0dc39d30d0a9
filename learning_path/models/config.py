"""
Pipeline configuration: retrieval, scoring, synthesis, and completion parameters.

PipelineConfig defaults are defined here. Callers may pass a dict (e.g. from a
config.json); from_dict() merges it with these defaults. Instances are frozen:
derive variants with config.model_copy(update={...}), never mutate DEFAULT_CONFIG.
"""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .scoring import SCORE_WEIGHTS


class PipelineConfig(BaseModel):
    """Configuration for one run of the learning-path pipeline."""

    model_config = ConfigDict(frozen=True)

    # -------------------------------------------------------------------------
    # Retrieval
    # -------------------------------------------------------------------------

    # Raw store hits kept (by quality score) before scoring.
    candidate_pool_size: int = 20

    # Ranked results returned by match_candidates when the caller gives no limit.
    max_results: int = 5

    # Extra alias families merged over the packaged technique_aliases.json.
    # Same shape as the file: {family: {"triggers": [...], "variants": [...]}}.
    # A family with the same name replaces the packaged one.
    technique_aliases: Dict[str, Dict[str, List[str]]] = Field(default_factory=dict)

    # -------------------------------------------------------------------------
    # Combined Score Weights (must sum to 1.0)
    # combined = Σ weights[name] * sub_score[name]
    # -------------------------------------------------------------------------

    weights: Dict[str, float] = Field(default_factory=lambda: dict(SCORE_WEIGHTS))

    # -------------------------------------------------------------------------
    # Sub-score bounds and thresholds
    # Every sub-score starts at base_score and is capped at max_score.
    # -------------------------------------------------------------------------

    base_score: float = 50.0
    max_score: float = 100.0

    # Teaching clarity is on a 0-20 scale; above this counts as "very clear".
    clarity_threshold: float = 15.0
    # Production quality is on a 0-10 scale.
    production_quality_threshold: float = 7.0
    # Instructor credibility above this moves learners forward faster.
    credibility_threshold: float = 25.0
    # Items published within this many days get a freshness bonus.
    freshness_days: int = 90

    # Timestamp counts: relevance uses "> 5", step-by-step fit uses "> 8",
    # learning efficiency uses ">= 10".
    relevance_timestamp_min: int = 5
    step_by_step_timestamp_min: int = 8
    comprehensive_timestamp_min: int = 10

    # Belt proximity multipliers: (exact, one level off, further).
    belt_proximity_multipliers: Tuple[float, float, float] = (1.0, 0.7, 0.3)

    # -------------------------------------------------------------------------
    # Duration preference
    # With watch history: |duration - avg_watch| < close → 1.0, < near → 0.7, else 0.3.
    # Without history: duration inside default window → 1.0, else 0.5.
    # -------------------------------------------------------------------------

    duration_close_seconds: int = 300
    duration_near_seconds: int = 600
    duration_multipliers: Tuple[float, float, float] = (1.0, 0.7, 0.3)
    default_duration_window: Tuple[int, int] = (600, 1200)
    default_duration_multipliers: Tuple[float, float] = (1.0, 0.5)
    unparseable_duration_multiplier: float = 0.5

    # Sub-scores above this are named in the per-candidate rationale.
    rationale_threshold: float = 70.0

    # -------------------------------------------------------------------------
    # Synthesis
    # -------------------------------------------------------------------------

    # Cap for each of foundation / troubleshooting / progression.
    max_role_items: int = Field(default=2, ge=0, le=2)
    # learning_efficiency / progression_value above this qualify for a role.
    role_score_threshold: float = 70.0
    # Thresholds used when explaining the primary pick.
    primary_relevance_threshold: float = 80.0
    primary_fit_threshold: float = 75.0
    primary_efficiency_threshold: float = 75.0

    # -------------------------------------------------------------------------
    # Text completion (no retries: one failure → fallback)
    # -------------------------------------------------------------------------

    interpretation_timeout_seconds: float = 20.0
    interpretation_max_tokens: int = 1500
    interpretation_temperature: float = 0.7

    framing_timeout_seconds: float = 10.0
    framing_max_tokens: int = 200
    framing_temperature: float = 0.8

    # Confidence reported by the keyword fallback interpretation.
    fallback_confidence: float = 0.3

    # -------------------------------------------------------------------------
    # History and feature flags
    # -------------------------------------------------------------------------

    # Most recent interactions used to derive UserHistory.
    history_interaction_limit: int = 50

    enable_interpreter: bool = True
    enable_synthesizer: bool = True

    # Score candidates on a thread pool. Ranking output is identical either way.
    parallel_scoring: bool = False
    scoring_workers: int = 4

    @model_validator(mode="after")
    def weights_sum_to_one(self):
        missing = set(SCORE_WEIGHTS) - set(self.weights)
        unknown = set(self.weights) - set(SCORE_WEIGHTS)
        if missing or unknown:
            raise ValueError(
                f"Scoring weights must name exactly {sorted(SCORE_WEIGHTS)}; "
                f"missing={sorted(missing)} unknown={sorted(unknown)}"
            )
        total = sum(self.weights.values())
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Scoring weights must sum to 1.0, got {total}")
        return self

    @model_validator(mode="after")
    def multipliers_in_unit_range(self):
        multipliers = (
            *self.belt_proximity_multipliers,
            *self.duration_multipliers,
            *self.default_duration_multipliers,
            self.unparseable_duration_multiplier,
        )
        if any(m < 0.0 or m > 1.0 for m in multipliers):
            raise ValueError("Proximity and duration multipliers must be within [0, 1]")
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "PipelineConfig":
        """Create config from a dictionary with optional nested sections."""
        flat: Dict = {}
        for section in ("retrieval", "scoring", "synthesis", "completion", "flags"):
            if section in config_dict:
                flat.update(config_dict[section])
        if "weights" in config_dict:
            flat["weights"] = {**SCORE_WEIGHTS, **config_dict["weights"]}
        if "duration" in config_dict:
            d = config_dict["duration"]
            if "close_seconds" in d:
                flat["duration_close_seconds"] = d["close_seconds"]
            if "near_seconds" in d:
                flat["duration_near_seconds"] = d["near_seconds"]
            if "default_window" in d:
                flat["default_duration_window"] = tuple(d["default_window"])
        if "technique_aliases" in config_dict:
            flat["technique_aliases"] = config_dict["technique_aliases"]
        for key, value in config_dict.items():
            if key in cls.model_fields and key not in flat:
                flat[key] = value
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = PipelineConfig()


def resolve_config(config: Optional["PipelineConfig"]) -> "PipelineConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
