"""
Role selection over the ranked list: foundation, troubleshooting, progression.

Each role keeps ranked order and is capped at config.max_role_items.
"""

from typing import List

from ...models.config import PipelineConfig
from ...models.learning_path import RoleItem
from ...models.scoring import VideoScore
from ...models.understanding import Understanding

FOUNDATION_WHY = "Builds fundamental understanding"
TROUBLESHOOTING_WHY = "If primary approach doesn't work"
PROGRESSION_WHY = "Next steps after mastery"


def _role_items(scores: List[VideoScore], why: str) -> List[RoleItem]:
    return [
        RoleItem(
            id=s.candidate.id,
            title=s.candidate.title,
            instructor=s.candidate.instructor,
            why=why,
        )
        for s in scores
    ]


def select_foundation(
    ranked: List[VideoScore],
    understanding: Understanding,
    config: PipelineConfig,
) -> List[VideoScore]:
    """Fundamentals, only when the learner is flagged as needing them."""
    if not understanding.needs("needs_fundamentals"):
        return []
    picked = [
        s
        for s in ranked
        if s.candidate.skill_level == "beginner"
        or s.candidate.covers_mistakes
        or s.scores.learning_efficiency > config.role_score_threshold
    ]
    return picked[: config.max_role_items]


def select_troubleshooting(
    ranked: List[VideoScore],
    understanding: Understanding,
    config: PipelineConfig,
) -> List[VideoScore]:
    """Alternatives to the primary pick, only for troubleshooting questions."""
    if understanding.explicit.question_type != "troubleshooting" or not ranked:
        return []
    primary_id = ranked[0].candidate_id
    picked = [
        s
        for s in ranked
        if s.candidate_id != primary_id
        and (s.candidate.covers_mistakes or s.candidate.shows_live_application)
    ]
    return picked[: config.max_role_items]


def select_progression(
    ranked: List[VideoScore],
    understanding: Understanding,
    config: PipelineConfig,
) -> List[VideoScore]:
    """Next steps: title names a follow-up concept, or high progression value."""
    concepts = [
        c.lower() for c in understanding.learning_path.follow_up_concepts if c and c.strip()
    ]

    def qualifies(s: VideoScore) -> bool:
        title = s.candidate.title.lower()
        if any(c in title for c in concepts):
            return True
        return s.scores.progression_value > config.role_score_threshold

    return [s for s in ranked if qualifies(s)][: config.max_role_items]


def build_roles(
    ranked: List[VideoScore],
    understanding: Understanding,
    config: PipelineConfig,
) -> dict:
    """RoleItem lists keyed by role name."""
    return {
        "foundation": _role_items(
            select_foundation(ranked, understanding, config), FOUNDATION_WHY
        ),
        "troubleshooting": _role_items(
            select_troubleshooting(ranked, understanding, config), TROUBLESHOOTING_WHY
        ),
        "progression": _role_items(
            select_progression(ranked, understanding, config), PROGRESSION_WHY
        ),
    }
