"""
Understanding model: the multi-layer interpretation of one learner query.

Layers:
- explicit: what the text literally asks (technique, position, question type, keywords)
- intent: what the learner is really asking
- profile: inferred skill level, learning style, emotional state, urgency
- learning_path: immediate need, prerequisites, follow-ups
- strategy: how to present the recommendation

The completion capability answers with camelCase keys (questionType, userProfile, ...);
those are accepted as validation aliases. Instances are frozen once built.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

QuestionType = Literal["how-to", "troubleshooting", "conceptual", "comparison", "other"]
SkillLevel = Literal["beginner", "intermediate", "advanced"]
LearningStyle = Literal["visual", "step-by-step", "conceptual", "problem-solving"]
EmotionalState = Literal["curious", "frustrated", "confused", "excited"]
Urgency = Literal["low", "medium", "high"]
PresentationStyle = Literal["empathetic", "direct", "encouraging", "technical"]

_NULLISH = {"", "null", "none", "n/a", "unknown"}

_LAYER_CONFIG = ConfigDict(
    frozen=True, populate_by_name=True, extra="ignore", protected_namespaces=()
)


class ExplicitLayer(BaseModel):
    model_config = _LAYER_CONFIG

    technique: Optional[str] = None
    position: Optional[str] = None
    question_type: QuestionType = Field(
        validation_alias=AliasChoices("question_type", "questionType")
    )
    keywords: List[str] = Field(default_factory=list)

    @field_validator("technique", "position", mode="before")
    @classmethod
    def _nullish_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return None if value.lower() in _NULLISH else value
        return value

    @field_validator("keywords", mode="before")
    @classmethod
    def _normalize_keywords(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [k.strip().lower() for k in value if isinstance(k, str) and k.strip()]
        return value


class IntentLayer(BaseModel):
    model_config = _LAYER_CONFIG

    root_problem: str = Field(validation_alias=AliasChoices("root_problem", "rootProblem"))
    likely_mistakes: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("likely_mistakes", "likelyMistakes"),
    )
    learning_need: str = Field(validation_alias=AliasChoices("learning_need", "learningNeed"))
    skill_gap: str = Field(validation_alias=AliasChoices("skill_gap", "skillGap"))


class ProfileLayer(BaseModel):
    model_config = _LAYER_CONFIG

    skill_level: SkillLevel = Field(
        validation_alias=AliasChoices("skill_level", "skillLevel", "inferredSkillLevel")
    )
    learning_style: LearningStyle = Field(
        validation_alias=AliasChoices("learning_style", "learningStyle", "inferredLearningStyle")
    )
    emotional_state: EmotionalState = Field(
        validation_alias=AliasChoices("emotional_state", "emotionalState")
    )
    urgency: Urgency


class LearningPathLayer(BaseModel):
    model_config = _LAYER_CONFIG

    immediate_need: str = Field(
        validation_alias=AliasChoices("immediate_need", "immediateNeed")
    )
    foundational_concepts: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("foundational_concepts", "foundationalConcepts"),
    )
    follow_up_concepts: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("follow_up_concepts", "followUpConcepts"),
    )
    prerequisite_check: Dict[str, bool] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("prerequisite_check", "prerequisiteCheck"),
    )


class StrategyLayer(BaseModel):
    model_config = _LAYER_CONFIG

    primary: str
    secondary: str
    tertiary: str
    presentation_style: PresentationStyle = Field(
        validation_alias=AliasChoices("presentation_style", "presentationStyle")
    )


class Understanding(BaseModel):
    """Structured interpretation of a learner query (keyed by query id when persisted)."""

    model_config = _LAYER_CONFIG

    explicit: ExplicitLayer
    intent: IntentLayer
    profile: ProfileLayer = Field(validation_alias=AliasChoices("profile", "userProfile"))
    learning_path: LearningPathLayer = Field(
        validation_alias=AliasChoices("learning_path", "learningPath")
    )
    strategy: StrategyLayer = Field(
        validation_alias=AliasChoices("strategy", "recommendationStrategy")
    )
    confidence: float = Field(ge=0.0, le=1.0)
    model_id: str = Field(validation_alias=AliasChoices("model_id", "modelId"))

    def needs(self, prerequisite: str) -> bool:
        """True if the prerequisite flag is set (e.g. "needs_fundamentals")."""
        return bool(self.learning_path.prerequisite_check.get(prerequisite))

    @property
    def is_fallback(self) -> bool:
        return self.model_id == "fallback"
