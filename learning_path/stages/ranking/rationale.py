"""
Per-candidate rationale: up to three strong sub-scores mapped to fixed phrases.
"""

from ...models.config import PipelineConfig
from ...models.scoring import SubScores
from ...models.understanding import Understanding

FALLBACK_RATIONALE = "good overall match"


def _phrase(name: str, understanding: Understanding) -> str:
    phrases = {
        "relevance": "highly relevant to your question",
        "pedagogical_fit": f"matches your {understanding.profile.learning_style} learning style",
        "engagement_probability": "high engagement rate with similar users",
        "learning_efficiency": "efficient learning for your skill level",
        "retention_likelihood": "high retention (covers mistakes & application)",
        "progression_value": "moves you forward on your BJJ journey",
    }
    return phrases[name]


def build_rationale(
    scores: SubScores,
    understanding: Understanding,
    config: PipelineConfig,
) -> str:
    """
    Rationale text for one candidate.

    Takes the three highest sub-scores (ties keep weight-table order) and names
    those above config.rationale_threshold; none qualifying → "good overall match".
    """
    top = sorted(scores.as_dict().items(), key=lambda kv: kv[1], reverse=True)[:3]
    reasons = [
        _phrase(name, understanding)
        for name, value in top
        if value > config.rationale_threshold
    ]
    return ", ".join(reasons) or FALLBACK_RATIONALE
