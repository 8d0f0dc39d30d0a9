"""
Deterministic keyword fallback for query interpretation.

Used whenever the completion capability fails or its answer does not validate.
The same query always yields the same Understanding.
"""

from typing import Tuple

from ...models.understanding import Understanding
from ...utils.text import extract_keywords

FALLBACK_MODEL_ID = "fallback"

# Checked in order; the first rule with a matching marker wins.
QUESTION_TYPE_MARKERS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("how-to", ("how", "show me")),
    ("troubleshooting", ("keep", "can't", "losing")),
    ("conceptual", ("why", "what is")),
    ("comparison", ("vs", "better")),
)

FRUSTRATION_MARKERS: Tuple[str, ...] = ("keep", "can't")


def _normalize(query: str) -> str:
    return query.lower().replace("’", "'")


def classify_question_type(query: str) -> str:
    """Question type from marker substrings ("other" when none match)."""
    text = _normalize(query)
    for question_type, markers in QUESTION_TYPE_MARKERS:
        if any(m in text for m in markers):
            return question_type
    return "other"


def infer_emotional_state(query: str) -> str:
    text = _normalize(query)
    return "frustrated" if any(m in text for m in FRUSTRATION_MARKERS) else "curious"


def fallback_understanding(query: str, confidence: float = 0.3) -> Understanding:
    """Build the fully populated fallback Understanding for a raw query."""
    emotional_state = infer_emotional_state(query)
    return Understanding.model_validate(
        {
            "explicit": {
                "technique": None,
                "position": None,
                "question_type": classify_question_type(query),
                "keywords": extract_keywords(_normalize(query)),
            },
            "intent": {
                "root_problem": query,
                "likely_mistakes": [],
                "learning_need": query,
                "skill_gap": "unknown",
            },
            "profile": {
                "skill_level": "intermediate",
                "learning_style": "step-by-step",
                "emotional_state": emotional_state,
                "urgency": "medium",
            },
            "learning_path": {
                "immediate_need": query,
                "foundational_concepts": [],
                "follow_up_concepts": [],
                "prerequisite_check": {},
            },
            "strategy": {
                "primary": "show relevant technique",
                "secondary": "provide context",
                "tertiary": "suggest next steps",
                "presentation_style": "empathetic" if emotional_state == "frustrated" else "direct",
            },
            "confidence": confidence,
            "model_id": FALLBACK_MODEL_ID,
        }
    )
