"""
The six sub-scores. Each is a pure function of (candidate, ScoringContext).

Every sub-score starts at config.base_score, adds fixed bonuses, and is capped
at config.max_score. Bonus sizes are the named constants below; thresholds and
multiplier bands come from PipelineConfig.
"""

from typing import Optional, Union

from ...models.candidate import CandidateItem
from ...models.config import PipelineConfig
from ...models.scoring import SubScores
from ...utils.scores import clamp, days_since, parse_duration_seconds
from ...utils.text import contains_any, contains_phrase
from .context import ScoringContext

# Relevance
TECHNIQUE_IN_TITLE_BONUS = 30
POSITION_IN_TITLE_BONUS = 20
TROUBLESHOOTING_MISTAKES_BONUS = 10
DETAILED_TIMESTAMPS_BONUS = 10

# Pedagogical fit
FRUSTRATED_CLEAR_TEACHING_BONUS = 25
CURIOUS_ADVANCED_BONUS = 15
STEP_BY_STEP_TIMESTAMPS_BONUS = 20
BELT_PROXIMITY_MAX_BONUS = 25

# Engagement probability
INSTRUCTOR_COMPLETION_MAX_BONUS = 30
PRODUCTION_QUALITY_BONUS = 15
DURATION_MATCH_MAX_BONUS = 15
FRESH_CONTENT_BONUS = 10

# Learning efficiency
PREREQUISITE_ALIGNMENT_BONUS = 30
CLARITY_MAX_BONUS = 20
COMPREHENSIVE_TIMESTAMPS_BONUS = 15

# Retention likelihood
COVERS_MISTAKES_BONUS = 25
LIVE_APPLICATION_BONUS = 20
DRILLING_BONUS = 15
CLEAR_TEACHING_BONUS = 15

# Progression value
UNSEEN_BONUS = 30
FOLLOW_UP_BONUS = 25
CREDIBLE_INSTRUCTOR_BONUS = 15

_LEVELS = {"beginner": 1, "intermediate": 2, "advanced": 3}
_CLARITY_SCALE = 20.0


def _bounded(score: float, config: PipelineConfig) -> float:
    return clamp(score, 0.0, config.max_score)


def _clarity(candidate: CandidateItem) -> float:
    return clamp(candidate.teaching_clarity_score or 0.0, 0.0, _CLARITY_SCALE)


def _is_clear(candidate: CandidateItem, config: PipelineConfig) -> bool:
    return (candidate.teaching_clarity_score or 0) > config.clarity_threshold


def belt_proximity(
    item_level: Optional[str],
    user_level: Optional[str],
    config: PipelineConfig,
) -> float:
    """Multiplier for skill-level distance; unknown levels count as intermediate."""
    diff = abs(_LEVELS.get(item_level or "", 2) - _LEVELS.get(user_level or "", 2))
    exact, close, far = config.belt_proximity_multipliers
    if diff == 0:
        return exact
    if diff == 1:
        return close
    return far


def duration_match(
    duration: Union[int, str, None],
    avg_watch_duration: float,
    config: PipelineConfig,
) -> float:
    """Multiplier for how well an item's length fits the user's watch habits."""
    seconds = parse_duration_seconds(duration)
    if seconds is None:
        return config.unparseable_duration_multiplier

    if avg_watch_duration <= 0:
        low, high = config.default_duration_window
        inside, outside = config.default_duration_multipliers
        return inside if low <= seconds <= high else outside

    diff = abs(seconds - avg_watch_duration)
    close, near, far = config.duration_multipliers
    if diff < config.duration_close_seconds:
        return close
    if diff < config.duration_near_seconds:
        return near
    return far


def score_relevance(candidate: CandidateItem, ctx: ScoringContext) -> float:
    """How well the item matches the literal question."""
    explicit = ctx.understanding.explicit
    score = ctx.config.base_score
    if explicit.technique and contains_phrase(candidate.title, explicit.technique):
        score += TECHNIQUE_IN_TITLE_BONUS
    if explicit.position and contains_phrase(candidate.title, explicit.position):
        score += POSITION_IN_TITLE_BONUS
    if explicit.question_type == "troubleshooting" and candidate.covers_mistakes:
        score += TROUBLESHOOTING_MISTAKES_BONUS
    if candidate.timestamp_count > ctx.config.relevance_timestamp_min:
        score += DETAILED_TIMESTAMPS_BONUS
    return _bounded(score, ctx.config)


def score_pedagogical_fit(candidate: CandidateItem, ctx: ScoringContext) -> float:
    """Whether the teaching style suits the learner's state and style."""
    profile = ctx.understanding.profile
    score = ctx.config.base_score
    if profile.emotional_state == "frustrated":
        if _is_clear(candidate, ctx.config):
            score += FRUSTRATED_CLEAR_TEACHING_BONUS
    elif profile.emotional_state == "curious":
        if candidate.skill_level == "advanced":
            score += CURIOUS_ADVANCED_BONUS
    if (
        profile.learning_style == "step-by-step"
        and candidate.timestamp_count > ctx.config.step_by_step_timestamp_min
    ):
        score += STEP_BY_STEP_TIMESTAMPS_BONUS
    proximity = belt_proximity(candidate.skill_level, profile.skill_level, ctx.config)
    score += proximity * BELT_PROXIMITY_MAX_BONUS
    return _bounded(score, ctx.config)


def score_engagement_probability(candidate: CandidateItem, ctx: ScoringContext) -> float:
    """Likelihood the learner actually watches the item."""
    config = ctx.config
    score = config.base_score
    completion = ctx.history.per_instructor_completion.get(candidate.instructor)
    if candidate.instructor and completion is not None:
        score += clamp(completion, 0.0, 1.0) * INSTRUCTOR_COMPLETION_MAX_BONUS
    if (candidate.production_quality_score or 0) > config.production_quality_threshold:
        score += PRODUCTION_QUALITY_BONUS
    if candidate.duration:
        fit = duration_match(candidate.duration, ctx.history.avg_watch_duration, config)
        score += fit * DURATION_MATCH_MAX_BONUS
    if days_since(candidate.published_at) < config.freshness_days:
        score += FRESH_CONTENT_BONUS
    return _bounded(score, config)


def score_learning_efficiency(candidate: CandidateItem, ctx: ScoringContext) -> float:
    """Whether the learner will learn effectively from the item at their level."""
    understanding = ctx.understanding
    score = ctx.config.base_score
    if understanding.needs("needs_fundamentals"):
        if candidate.skill_level == "beginner" or candidate.covers_mistakes:
            score += PREREQUISITE_ALIGNMENT_BONUS
    elif understanding.needs("ready_for_advanced"):
        if candidate.skill_level == "advanced":
            score += PREREQUISITE_ALIGNMENT_BONUS
    score += (_clarity(candidate) / _CLARITY_SCALE) * CLARITY_MAX_BONUS
    if candidate.timestamp_count >= ctx.config.comprehensive_timestamp_min:
        score += COMPREHENSIVE_TIMESTAMPS_BONUS
    return _bounded(score, ctx.config)


def score_retention_likelihood(candidate: CandidateItem, ctx: ScoringContext) -> float:
    """Whether the learner will remember it: mistakes, live application, drilling, clarity."""
    score = ctx.config.base_score
    if candidate.covers_mistakes:
        score += COVERS_MISTAKES_BONUS
    if candidate.shows_live_application:
        score += LIVE_APPLICATION_BONUS
    if candidate.includes_drilling:
        score += DRILLING_BONUS
    if _is_clear(candidate, ctx.config):
        score += CLEAR_TEACHING_BONUS
    return _bounded(score, ctx.config)


def score_progression_value(candidate: CandidateItem, ctx: ScoringContext) -> float:
    """Whether the item moves the learner forward."""
    score = ctx.config.base_score
    if candidate.id not in ctx.history.viewed_ids:
        score += UNSEEN_BONUS
    if contains_any(candidate.title, ctx.understanding.learning_path.follow_up_concepts):
        score += FOLLOW_UP_BONUS
    if (candidate.instructor_credibility_score or 0) > ctx.config.credibility_threshold:
        score += CREDIBLE_INSTRUCTOR_BONUS
    return _bounded(score, ctx.config)


def score_candidate(candidate: CandidateItem, ctx: ScoringContext) -> SubScores:
    """All six sub-scores for one candidate."""
    return SubScores(
        relevance=score_relevance(candidate, ctx),
        pedagogical_fit=score_pedagogical_fit(candidate, ctx),
        engagement_probability=score_engagement_probability(candidate, ctx),
        learning_efficiency=score_learning_efficiency(candidate, ctx),
        retention_likelihood=score_retention_likelihood(candidate, ctx),
        progression_value=score_progression_value(candidate, ctx),
    )
