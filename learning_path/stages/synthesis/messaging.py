"""
Fixed learner-facing text: primary rationale, encouragement, tips, success metric,
and the empty-path fallback response.
"""

from ...models.config import PipelineConfig
from ...models.learning_path import LearningPathResponse
from ...models.scoring import VideoScore
from ...models.understanding import Understanding

DEFAULT_PRIMARY_REASON = "best overall match for your needs"

ENCOURAGEMENT = {
    "frustrated": (
        "This is a really common issue - you're not alone! "
        "The key insight will help everything click."
    ),
    "confused": (
        "Don't worry, this concept confuses many people at first. "
        "We'll break it down step by step."
    ),
    "excited": (
        "Love the enthusiasm! This technique is going to add a powerful tool to your game."
    ),
    "curious": (
        "Great question! Understanding this will level up your game significantly."
    ),
}

TROUBLESHOOTING_TIP = (
    "PRO TIP: When troubleshooting, focus on one detail at a time. "
    "Master the mechanics before worrying about timing."
)
BEGINNER_TIP = (
    "PRO TIP: Watch the video once for overall concept, then rewatch focusing on "
    "specific details. Repetition builds mastery."
)
MISTAKES_TIP = (
    'PRO TIP: Pay special attention to the "common mistakes" section - knowing what '
    "NOT to do is just as important as the technique itself."
)
DRILLING_TIP = (
    "PRO TIP: After watching, try drilling it slowly 5-10 times before going live. "
    "Muscle memory takes repetition."
)

BEGINNER_METRIC = "Success metric: Can you perform the basic movement slowly and correctly?"
LIVE_METRIC = "Success metric: Can you apply this in live rolling?"

FALLBACK_TIP = (
    "PRO TIP: The best way to learn is through consistent drilling with a patient "
    "training partner."
)
FALLBACK_METRIC = "Focus on understanding the fundamental movement pattern first."


def explain_primary_choice(
    primary: VideoScore,
    understanding: Understanding,
    config: PipelineConfig,
) -> str:
    """Up to two reasons joined with " and "."""
    reasons = []
    if primary.scores.relevance > config.primary_relevance_threshold:
        reasons.append("directly answers your question")
    if primary.scores.pedagogical_fit > config.primary_fit_threshold:
        reasons.append(f"matches your {understanding.profile.learning_style} learning style")
    if primary.scores.learning_efficiency > config.primary_efficiency_threshold:
        reasons.append("perfect for your current level")
    credibility = primary.candidate.instructor_credibility_score
    if credibility is not None and credibility > config.credibility_threshold:
        reasons.append(f"{primary.candidate.instructor} is highly credible")
    return " and ".join(reasons[:2]) or DEFAULT_PRIMARY_REASON


def encouragement_for(understanding: Understanding) -> str:
    state = understanding.profile.emotional_state
    return ENCOURAGEMENT.get(state, ENCOURAGEMENT["curious"])


def metacognitive_tip(understanding: Understanding, primary: VideoScore) -> str:
    if understanding.explicit.question_type == "troubleshooting":
        return TROUBLESHOOTING_TIP
    if understanding.profile.skill_level == "beginner":
        return BEGINNER_TIP
    if primary.candidate.covers_mistakes:
        return MISTAKES_TIP
    return DRILLING_TIP


def success_metric(understanding: Understanding) -> str:
    if understanding.explicit.question_type == "troubleshooting":
        return (
            "Success metric: Can you execute the technique without experiencing "
            f'"{understanding.intent.root_problem}"?'
        )
    if understanding.profile.skill_level == "beginner":
        return BEGINNER_METRIC
    return LIVE_METRIC


def fallback_response(query_text: str, understanding: Understanding) -> LearningPathResponse:
    """Response for an empty ranked list: guidance only, no recommendations."""
    topic = understanding.explicit.technique or query_text
    return LearningPathResponse(
        primary=None,
        framing=f'I don\'t have a specific video for "{query_text}" yet, but let me help guide you.',
        encouragement=(
            "I'm still learning and building my video library. In the meantime, "
            f"I'd recommend asking your coach about {topic}."
        ),
        metacognitive_tip=FALLBACK_TIP,
        success_metric=FALLBACK_METRIC,
        presentation_style="empathetic",
    )
